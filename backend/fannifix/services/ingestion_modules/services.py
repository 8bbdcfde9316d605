# backend/fannifix/services/ingestion_modules/services.py
from typing import Any, Tuple

from .utils import ensure_unique, parse_records, unwrap_items
from ...models.types import Service

def ingest_services(payload: Any, source: str = "services.json") -> Tuple[Service, ...]:
    services = parse_records(Service, unwrap_items(payload), source)
    # The catalog is shared by every country, so both keys are global
    ensure_unique(services, lambda s: s.id, source, "service id")
    ensure_unique(services, lambda s: s.slug, source, "service slug")
    return services
