# backend/fannifix/services/ingestion.py
import os, json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .ingestion_modules.areas import ingest_areas
from .ingestion_modules.countries import ingest_countries
from .ingestion_modules.listings import ingest_listings
from .ingestion_modules.seo import ingest_seo
from .ingestion_modules.services import ingest_services
from .ingestion_modules.technicians import ingest_technicians
from .ingestion_modules.utils import DataLoadError
from ..models.schema import SeoTree
from ..models.types import Area, Country, Listing, Service, Technician
from ..utils.logging import get_logger

logger = get_logger(__name__)

@dataclass(frozen=True)
class EntityStore:
    """Every collection of the site, parsed once and never modified."""
    countries: Tuple[Country, ...] = ()
    services: Tuple[Service, ...] = ()
    areas: Tuple[Area, ...] = ()
    technicians: Tuple[Technician, ...] = ()
    listings: Tuple[Listing, ...] = ()
    seo: Mapping[str, SeoTree] = field(default_factory=dict)

def read_json(path: str, required: bool = True) -> Any:
    if not os.path.isfile(path):
        if required:
            raise DataLoadError(os.path.basename(path), "file not found")
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise DataLoadError(os.path.basename(path), str(e)) from e

def _per_country_files(dir_path: str) -> Dict[str, str]:
    """Map country code -> path for ``<dir>/<code>.json`` files."""
    files: Dict[str, str] = {}
    if not os.path.isdir(dir_path):
        return files
    for fname in sorted(os.listdir(dir_path)):
        if fname.lower().endswith(".json"):
            files[fname[:-5].lower()] = os.path.join(dir_path, fname)
    return files

def load_store(dir_path: str) -> EntityStore:
    """
    Build the store from a content directory.

    Any unreadable or malformed document aborts the whole load with
    ``DataLoadError``; there is no partial store.
    """
    logger.info("Loading content from %s", dir_path)
    if not os.path.isdir(dir_path):
        raise DataLoadError(dir_path, "content directory not found")

    countries = ingest_countries(read_json(os.path.join(dir_path, "countries.json")))
    services = ingest_services(read_json(os.path.join(dir_path, "services.json")))
    known_countries = {c.code for c in countries}

    areas = []
    for code, path in _per_country_files(os.path.join(dir_path, "areas")).items():
        source = f"areas/{code}.json"
        if code not in known_countries:
            raise DataLoadError(source, f"unknown country {code!r}")
        areas.extend(ingest_areas(read_json(path), code, source))

    technicians = ingest_technicians(read_json(os.path.join(dir_path, "technicians.json")))
    listings = ingest_listings(read_json(os.path.join(dir_path, "listings.json"), required=False))

    service_ids = [s.id for s in services]
    seo: Dict[str, SeoTree] = {}
    for code, path in _per_country_files(os.path.join(dir_path, "seo")).items():
        source = f"seo/{code}.json"
        if code not in known_countries:
            raise DataLoadError(source, f"unknown country {code!r}")
        seo[code] = ingest_seo(read_json(path), service_ids, source)

    store = EntityStore(
        countries=countries,
        services=services,
        areas=tuple(areas),
        technicians=technicians,
        listings=listings,
        seo=seo,
    )
    logger.info(
        "Loaded %d countries, %d services, %d areas, %d technicians, %d listings, SEO for %s",
        len(store.countries), len(store.services), len(store.areas),
        len(store.technicians), len(store.listings), ", ".join(sorted(seo)) or "none",
    )
    return store
