# backend/fannifix/services/ingestion_modules/listings.py
from typing import Any, Tuple

from .utils import ensure_unique, parse_records, unwrap_items
from ...models.types import Listing

def ingest_listings(payload: Any, source: str = "listings.json") -> Tuple[Listing, ...]:
    # technicianId/serviceId/areaId are not checked here; dangling ids resolve to None on lookup
    listings = parse_records(Listing, unwrap_items(payload), source)
    ensure_unique(listings, lambda l: l.id, source, "listing id")
    return listings
