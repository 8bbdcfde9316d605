# backend/fannifix/services/ingestion_modules/technicians.py
from typing import Any, Dict, Tuple

from .utils import ensure_unique, parse_records, to_list, unwrap_items
from ...models.types import Technician
from ...utils.config import LEGACY_COUNTRY

def normalize_technician(raw: Dict[str, Any], default_country: str = LEGACY_COUNTRY) -> Dict[str, Any]:
    """
    Project a technician record onto the current shape.

    Early records carried a single ``service_id``, an ``areas`` list, a
    ``price_range`` string and no ``countryCode``. Current records use
    ``serviceIds``/``areaIds``/``priceEstimate``. Applying this to a current
    record returns an equal dict.
    """
    tech = dict(raw)
    service_id = tech.pop("service_id", None)
    legacy_areas = tech.pop("areas", None)
    price_range = tech.pop("price_range", None)

    if tech.get("serviceIds") is None:
        tech["serviceIds"] = [service_id] if service_id else []
    if tech.get("areaIds") is None:
        tech["areaIds"] = to_list(legacy_areas)
    if not tech.get("countryCode"):
        tech["countryCode"] = default_country
    if tech.get("priceEstimate") is None and price_range is not None:
        tech["priceEstimate"] = price_range
    return tech

def ingest_technicians(payload: Any, source: str = "technicians.json") -> Tuple[Technician, ...]:
    items = [normalize_technician(t) if isinstance(t, dict) else t for t in unwrap_items(payload)]
    technicians = parse_records(Technician, items, source)
    ensure_unique(technicians, lambda t: t.id, source, "technician id")
    return technicians
