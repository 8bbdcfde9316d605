# backend/fannifix/services/ingestion_modules/areas.py
from typing import Any, Tuple

from .utils import DataLoadError, ensure_unique, parse_records, unwrap_items
from ...models.types import Area

def ingest_areas(payload: Any, country_code: str, source: str) -> Tuple[Area, ...]:
    """Parse one ``areas/<code>.json`` file; records inherit the file's country."""
    items = unwrap_items(payload)
    for a in items:
        if not isinstance(a, dict):
            continue
        declared = a.setdefault("countryCode", country_code)
        if str(declared).lower() != country_code:
            raise DataLoadError(source, f"area {a.get('id')!r} declares country {declared!r}")
    areas = parse_records(Area, items, source)
    # Slugs are only unique inside a country
    ensure_unique(areas, lambda a: a.id, source, "area id")
    ensure_unique(areas, lambda a: a.slug, source, "area slug")
    return areas
