# backend/fannifix/services/ingestion_modules/seo.py
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from .utils import DataLoadError
from ...models.schema import SeoTree, ServiceAreaKey
from ...utils.logging import get_logger

logger = get_logger(__name__)

def split_service_area_key(key: str, service_ids: Iterable[str]) -> Optional[ServiceAreaKey]:
    """
    Split a flat ``"{serviceId}_{areaId}"`` key using the known service ids.

    The longest service id that prefixes the key wins, so ``ac_repair_hawalli``
    resolves to ``("ac_repair", "hawalli")`` when ``ac_repair`` is a service.
    """
    best = None
    for sid in service_ids:
        prefix = f"{sid}_"
        if key.startswith(prefix) and len(key) > len(prefix):
            if best is None or len(sid) > len(best):
                best = sid
    if best is None:
        return None
    return best, key[len(best) + 1:]

def _is_meta(value: Any) -> bool:
    return isinstance(value, dict) and "title" in value

def collect_service_area(raw: Dict[str, Any], service_ids: Iterable[str], source: str) -> Dict[ServiceAreaKey, Any]:
    service_ids = list(service_ids)
    entries: Dict[ServiceAreaKey, Any] = {}
    for key, value in (raw or {}).items():
        if _is_meta(value):
            composite = split_service_area_key(key, service_ids)
            if composite is None:
                logger.warning("%s: dropping service_area key %r (no matching service)", source, key)
                continue
            entries[composite] = value
        elif isinstance(value, dict):
            # nested form: {serviceId: {areaId: meta}}
            for area_id, meta in value.items():
                entries[(key, area_id)] = meta
        else:
            raise DataLoadError(source, f"service_area[{key!r}] is not an object")
    return entries

def ingest_seo(payload: Any, service_ids: Iterable[str], source: str) -> SeoTree:
    if not isinstance(payload, dict):
        raise DataLoadError(source, "SEO document must be an object")
    doc = dict(payload)
    doc["service_area"] = collect_service_area(doc.get("service_area"), service_ids, source)
    try:
        tree = SeoTree.model_validate(doc)
    except ValidationError as e:
        raise DataLoadError(source, str(e)) from e
    logger.info(
        "%s: %d service, %d area, %d service+area entries",
        source, len(tree.services), len(tree.areas), len(tree.service_area),
    )
    return tree
