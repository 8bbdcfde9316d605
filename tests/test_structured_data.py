"""Tests for schema.org payloads, sitemap entries and WhatsApp links."""

from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import unquote

from fannifix.services.directory import Directory
from fannifix.services.structured_data import (
    breadcrumb_schema,
    local_business_schema,
    service_schema,
    sitemap_entries,
    whatsapp_url,
)


class TestWhatsappUrl:
    """Tests for whatsapp_url."""

    def test_strips_plus_and_spaces(self) -> None:
        url = whatsapp_url('+965 5000 1001')
        assert url.startswith('https://wa.me/96550001001?text=')

    def test_message_names_source(self) -> None:
        url = whatsapp_url('965', 'instagram')
        assert unquote(url.split('?text=', 1)[1]) == 'مرحبا، وصلتكم من instagram عبر موقع FanniFix'

    def test_default_source(self) -> None:
        assert 'direct' in unquote(whatsapp_url('965'))


class TestSchemas:
    """Tests for the schema.org builders."""

    def test_local_business(self) -> None:
        data = local_business_schema('Ahmad', 'desc', '+965', 4.5, 10, 'حولي', 'تكييف')
        assert data['@type'] == 'LocalBusiness'
        assert data['aggregateRating']['ratingValue'] == 4.5
        assert data['aggregateRating']['reviewCount'] == 10
        assert data['address']['addressCountry'] == 'KW'
        assert data['areaServed']['name'] == 'حولي'
        assert data['serviceType'] == 'تكييف'

    def test_service(self) -> None:
        data = service_schema('تكييف', 'desc', 'ac-technician')
        assert data['@type'] == 'Service'
        assert data['url'].endswith('/kw/ac-technician')

    def test_breadcrumb_positions_start_at_one(self) -> None:
        data = breadcrumb_schema([('Home', 'https://x/kw'), ('AC', 'https://x/kw/ac')])
        assert [i['position'] for i in data['itemListElement']] == [1, 2]
        assert data['itemListElement'][1]['item'] == 'https://x/kw/ac'


class TestSitemap:
    """Tests for sitemap_entries."""

    def test_entries(self, directory: Directory) -> None:
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        entries = sitemap_entries(directory, 'https://example.com/', 'kw', now=now)
        urls = [e.url for e in entries]

        assert urls[0] == 'https://example.com/kw'
        assert entries[0].priority == 1.0
        assert 'https://example.com/kw/plumber' in urls
        assert 'https://example.com/kw/plumber/salmiya' in urls
        # 3 services x 4 kw areas
        assert sum(1 for e in entries if e.priority == 0.8) == 12
        technician_urls = [e.url for e in entries if e.priority == 0.7]
        assert sorted(technician_urls) == [
            'https://example.com/technician/1',
            'https://example.com/technician/2',
            'https://example.com/technician/5',
        ]

    def test_technician_last_modified_uses_created_at(self, directory: Directory) -> None:
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        entries = {e.url: e for e in sitemap_entries(directory, 'https://example.com', now=now)}
        assert entries['https://example.com/technician/2'].last_modified == datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert entries['https://example.com/kw'].last_modified == now
