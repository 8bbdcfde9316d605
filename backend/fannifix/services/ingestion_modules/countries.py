# backend/fannifix/services/ingestion_modules/countries.py
from typing import Any, Tuple

from .utils import ensure_unique, parse_records, unwrap_items
from ...models.types import Country

def ingest_countries(payload: Any, source: str = "countries.json") -> Tuple[Country, ...]:
    items = unwrap_items(payload)
    for c in items:
        if isinstance(c, dict) and isinstance(c.get("code"), str):
            c["code"] = c["code"].lower()
    countries = parse_records(Country, items, source)
    ensure_unique(countries, lambda c: c.code, source, "country code")
    return countries
