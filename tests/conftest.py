"""Pytest configuration and fixtures for the directory backend.

Fixtures build a ``Directory`` from in-memory records so tests do not depend
on the shipped content files, plus helpers for writing a content directory
to disk for loader tests.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend'))

from fannifix.models.schema import SeoTree
from fannifix.models.types import Area, Country, Listing, Service, Technician
from fannifix.services.directory import Directory
from fannifix.services.ingestion import EntityStore
from fannifix.services.ingestion_modules.seo import collect_service_area
from fannifix.services.seo import SeoResolver

REPO_DATA_DIR = Path(__file__).resolve().parents[1] / 'data' / 'json'


def make_technician(**overrides: Any) -> Technician:
    """Build an active Kuwait technician, overriding any field by snake_case name."""
    fields: dict[str, Any] = {
        'id': 't-x',
        'name': 'فني',
        'country_code': 'kw',
        'service_ids': ['ac'],
        'area_ids': ['hawalli'],
        'description': '',
        'rating': 4.0,
        'status': 'active',
    }
    fields.update(overrides)
    return Technician(**fields)


# --- Record Fixtures ---


@pytest.fixture
def countries() -> tuple[Country, ...]:
    return (
        Country(code='kw', name='الكويت', name_en='Kuwait', active=True),
        Country(code='sa', name='السعودية', name_en='Saudi Arabia', active=False),
        Country(code='qa', name='قطر', name_en='Qatar', active=False),
    )


@pytest.fixture
def services() -> tuple[Service, ...]:
    return (
        Service(id='ac', key='ac', name='تكييف', name_en='AC', slug='ac-technician'),
        Service(id='plumbing', key='plumber', name='سباك', name_en='Plumber', slug='plumber'),
        Service(id='ac_repair', key='ac-repair', name='تصليح مكيفات', slug='ac-repair'),
    )


@pytest.fixture
def areas() -> tuple[Area, ...]:
    # 'hawalli' exists in both kw and sa on purpose
    return (
        Area(id='hawalli', country_code='kw', governorate='حولي', name='حولي', name_en='Hawalli', slug='hawalli'),
        Area(id='capital', country_code='kw', governorate='العاصمة', name='العاصمة', slug='capital'),
        Area(id='salmiya', country_code='kw', governorate='حولي', name='السالمية', slug='salmiya'),
        Area(id='farwaniya', country_code='kw', governorate='الفروانية', name='الفروانية', slug='farwaniya'),
        Area(id='sa-hawalli', country_code='sa', name='حولي الرياض', slug='hawalli'),
    )


@pytest.fixture
def technicians() -> tuple[Technician, ...]:
    return (
        make_technician(id='1', name='Ahmad AC', service_ids=['ac'], area_ids=['hawalli'], rating=4.5,
                        reviews_count=10, experience_years=5, created_at='2025-01-01T00:00:00Z',
                        description='مكيفات سبليت', verified=True, featured=True),
        make_technician(id='2', name='Bader Plumbing', service_ids=['plumbing'], area_ids=['capital'],
                        rating=4.9, reviews_count=3, experience_years=12, created_at='2024-06-01T00:00:00Z',
                        description='كشف تسربات'),
        make_technician(id='3', name='Pending AC', service_ids=['ac'], area_ids=['hawalli'], rating=5.0,
                        status='pending', featured=True),
        make_technician(id='4', name='Inactive AC', service_ids=['ac'], area_ids=['hawalli'], rating=5.0,
                        status='inactive'),
        make_technician(id='5', name='Salem', service_ids=['ac', 'plumbing'], area_ids=['hawalli', 'salmiya'],
                        rating=4.5, reviews_count=40, experience_years=1, created_at='2025-03-01T00:00:00',
                        description='AC and plumbing', verified=True),
        make_technician(id='6', name='Riyadh AC', country_code='sa', service_ids=['ac'],
                        area_ids=['sa-hawalli'], rating=3.0, created_at='2025-02-01T00:00:00Z'),
    )


@pytest.fixture
def listings() -> tuple[Listing, ...]:
    def listing(id: str, created_at: str, status: str = 'active', technician_id: str = '1') -> Listing:
        return Listing(id=id, title=f'listing {id}', technician_id=technician_id, service_id='ac',
                       area_id='hawalli', country_code='kw', created_at=created_at, status=status)

    return (
        listing('l1', '2025-01-01T00:00:00Z'),
        listing('l2', '2025-03-01T00:00:00Z'),
        listing('l3', '2025-04-01T00:00:00Z', status='expired'),
        listing('l4', '2025-02-01T00:00:00Z', technician_id='ghost'),
        listing('l5', '2025-05-01T00:00:00Z', status='pending'),
    )


@pytest.fixture
def seo_tree(services: tuple[Service, ...]) -> SeoTree:
    raw_service_area = {
        'ac_hawalli': {'title': 'AC in Hawalli', 'description': 'ac hawalli'},
        'ac_repair_salmiya': {'title': 'AC repair in Salmiya', 'description': 'ac repair salmiya'},
        'plumbing': {'capital': {'title': 'Plumber in Capital', 'description': 'plumber capital'}},
    }
    return SeoTree.model_validate({
        'default': {'title': 'Home', 'description': 'Home page', 'keywords': 'home'},
        'services': {'ac': {'title': 'AC', 'description': 'AC page', 'service_description': 'AC services'}},
        'areas': {'hawalli': {'title': 'Hawalli', 'description': 'Hawalli page'}},
        'service_area': collect_service_area(raw_service_area, [s.id for s in services], 'test'),
        'content': {
            'faqs': {
                'default': [{'question': 'Q?', 'answer': 'A.'}],
                'service': [{'question_template': 'كم سعر {service}؟', 'answer_template': '{service} {service}'}],
                'service_area': [{
                    'question_template': 'كم تكلفة {service} في {area}؟',
                    'answer_template': '{service} متوفر في {area}',
                }],
            },
            'pricing': {'inspection': '5 KD', 'disclaimer': 'Estimates only'},
            'hero': {'headline': 'Find a technician'},
            'cta': {'technician': 'Join us', 'technician_description': 'Add your listing'},
        },
    })


@pytest.fixture
def store(countries, services, areas, technicians, listings, seo_tree) -> EntityStore:
    return EntityStore(
        countries=countries,
        services=services,
        areas=areas,
        technicians=technicians,
        listings=listings,
        seo={'kw': seo_tree},
    )


@pytest.fixture
def directory(store: EntityStore) -> Directory:
    return Directory(store)


@pytest.fixture
def seo(directory: Directory) -> SeoResolver:
    return SeoResolver.from_directory(directory)


# --- Content Directory Fixtures ---


@pytest.fixture
def write_content(tmp_path: Path) -> Callable[..., Path]:
    """Write a minimal valid content directory, with per-file overrides.

    Map a relative path to None to omit that file, or a string to write it verbatim.
    """

    def _write(files: dict[str, Any] | None = None) -> Path:
        defaults: dict[str, Any] = {
            'countries.json': [
                {'code': 'kw', 'name': 'الكويت', 'nameEn': 'Kuwait', 'active': True},
                {'code': 'sa', 'name': 'السعودية', 'nameEn': 'Saudi Arabia', 'enabled': False},
            ],
            'services.json': {'data': [{'id': 'ac', 'name': 'تكييف', 'slug': 'ac-technician'}]},
            'areas/kw.json': [{'id': 'hawalli', 'name': 'حولي', 'slug': 'hawalli', 'governorate': 'حولي'}],
            'technicians.json': [
                {'id': 't1', 'name': 'Legacy', 'service_id': 'ac', 'areas': ['hawalli'], 'whatsapp': '965'},
            ],
        }
        defaults.update(files or {})
        for name, content in defaults.items():
            if content is None:
                continue
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            text = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)
            path.write_text(text, encoding='utf-8')
        return tmp_path

    return _write


@pytest.fixture
def technician_factory() -> Callable[..., Technician]:
    return make_technician
