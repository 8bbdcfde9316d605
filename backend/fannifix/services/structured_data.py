# backend/fannifix/services/structured_data.py
"""schema.org payloads, sitemap entries and WhatsApp contact links."""
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

from .directory import Directory
from ..models.types import SitemapEntry
from ..utils.config import DEFAULT_COUNTRY, SITE_URL

ORGANIZATION_NAME = "فني تصليح - FanniFix"

def local_business_schema(name: str, description: str, phone: str, rating: float, reviews_count: int,
                          area_name: str, service_name: str, url: Optional[str] = None,
                          country_code: str = DEFAULT_COUNTRY, country_name: str = "الكويت") -> Dict[str, Any]:
    country = country_code.upper()
    return {
        "@context": "https://schema.org",
        "@type": "LocalBusiness",
        "name": name,
        "description": description,
        "telephone": phone,
        "url": url or SITE_URL,
        "address": {
            "@type": "PostalAddress",
            "addressLocality": area_name,
            "addressCountry": country,
            "addressRegion": country_name,
        },
        "aggregateRating": {
            "@type": "AggregateRating",
            "ratingValue": rating,
            "reviewCount": reviews_count,
            "bestRating": 5,
            "worstRating": 1,
        },
        "areaServed": {"@type": "City", "name": area_name, "addressCountry": country},
        "serviceType": service_name,
        "priceRange": "$$",
    }

def service_schema(name: str, description: str, slug: str, country_code: str = DEFAULT_COUNTRY,
                   country_name: str = "الكويت") -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "Service",
        "name": name,
        "description": description,
        "provider": {"@type": "Organization", "name": ORGANIZATION_NAME, "url": SITE_URL},
        "areaServed": {"@type": "Country", "name": country_name, "addressCountry": country_code.upper()},
        "url": f"{SITE_URL}/{country_code}/{slug}",
    }

def breadcrumb_schema(items: Sequence[Tuple[str, str]]) -> Dict[str, Any]:
    """``items`` are ``(name, url)`` pairs, outermost first."""
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": i, "name": name, "item": url}
            for i, (name, url) in enumerate(items, start=1)
        ],
    }

def sitemap_entries(directory: Directory, base_url: str = SITE_URL, country_code: str = DEFAULT_COUNTRY,
                    now: Optional[datetime] = None) -> List[SitemapEntry]:
    now = now or datetime.now(timezone.utc)
    base = f"{base_url.rstrip('/')}/{country_code.lower()}"
    entries = [SitemapEntry(url=base, last_modified=now, change_frequency="daily", priority=1.0)]
    entries += [
        SitemapEntry(url=f"{base}/{s.slug}", last_modified=now, change_frequency="weekly", priority=0.9)
        for s in directory.services
    ]
    areas = directory.areas_by_country(country_code)
    entries += [
        SitemapEntry(url=f"{base}/{s.slug}/{a.slug}", last_modified=now, change_frequency="weekly", priority=0.8)
        for s in directory.services
        for a in areas
    ]
    entries += [
        SitemapEntry(
            url=f"{base_url.rstrip('/')}/technician/{t.id}",
            last_modified=t.created_at or now,
            change_frequency="monthly",
            priority=0.7,
        )
        for t in directory.technicians_by_country(country_code)
    ]
    return entries

_PHONE_NOISE = re.compile(r"\+|\s")

def whatsapp_url(phone: str, source: str = "direct") -> str:
    """wa.me deep link whose prefilled greeting names the traffic source."""
    clean = _PHONE_NOISE.sub("", phone or "")
    message = quote(f"مرحبا، وصلتكم من {source} عبر موقع FanniFix", safe="~()*!.'")
    return f"https://wa.me/{clean}?text={message}"
