# backend/fannifix/services/directory.py
from typing import Callable, Dict, List, Optional, Tuple

from .ingestion import EntityStore, load_store
from ..models.types import (
    Area, Country, CountryStats, GovernorateGroup, Listing, SearchFilters, Service, SortBy, Technician,
)
from ..utils.config import DEFAULT_COUNTRY

def _newest_key(t) -> float:
    return t.created_at.timestamp() if t.created_at else float("-inf")

SORT_KEYS: Dict[SortBy, Callable[[Technician], float]] = {
    "rating": lambda t: t.rating,
    "reviews": lambda t: t.reviews_count,
    "experience": lambda t: t.experience_years,
    "newest": _newest_key,
}
DEFAULT_SORT: SortBy = "rating"

def _code(country_code: Optional[str]) -> str:
    return (country_code or "").lower()

class Directory:
    """
    Read-only queries over one ``EntityStore``.

    Build it once at startup and share it; nothing here mutates the store.
    Lookups return ``None`` for unknown ids/slugs and never raise.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._countries = {c.code: c for c in store.countries}
        self._services_by_id = {s.id: s for s in store.services}
        self._services_by_slug = {s.slug: s for s in store.services}
        self._services_by_key = {}
        for s in store.services:
            if s.key:
                self._services_by_key.setdefault(s.key, s)
        self._areas_by_id: Dict[Tuple[str, str], Area] = {}
        self._areas_by_slug: Dict[Tuple[str, str], Area] = {}
        for a in store.areas:
            self._areas_by_id.setdefault((a.country_code, a.id), a)
            self._areas_by_slug.setdefault((a.country_code, a.slug), a)
        self._technicians = {t.id: t for t in store.technicians}
        self._listings = {l.id: l for l in store.listings}

    @classmethod
    def from_path(cls, dir_path: str) -> "Directory":
        return cls(load_store(dir_path))

    # ---------- Countries ----------
    @property
    def countries(self) -> Tuple[Country, ...]:
        return self.store.countries

    def country_by_code(self, code: str) -> Optional[Country]:
        return self._countries.get(_code(code))

    def enabled_countries(self) -> List[Country]:
        return [c for c in self.store.countries if c.active]

    # ---------- Services ----------
    @property
    def services(self) -> Tuple[Service, ...]:
        return self.store.services

    def service_by_id(self, service_id: str) -> Optional[Service]:
        return self._services_by_id.get(service_id)

    def service_by_slug(self, slug: str) -> Optional[Service]:
        return self._services_by_slug.get(slug)

    def service_by_key(self, key: str) -> Optional[Service]:
        return self._services_by_key.get(key)

    # ---------- Areas ----------
    def areas_by_country(self, country_code: str) -> List[Area]:
        cc = _code(country_code)
        return [a for a in self.store.areas if a.country_code == cc]

    def area_by_id(self, area_id: str, country_code: str) -> Optional[Area]:
        return self._areas_by_id.get((_code(country_code), area_id))

    def area_by_slug(self, slug: str, country_code: Optional[str] = None) -> Optional[Area]:
        if country_code:
            return self._areas_by_slug.get((_code(country_code), slug))
        # Unscoped: first match in load order across every country
        return next((a for a in self.store.areas if a.slug == slug), None)

    def areas_by_governorate(self, governorate: str, country_code: str = DEFAULT_COUNTRY) -> List[Area]:
        cc = _code(country_code)
        return [a for a in self.store.areas if a.country_code == cc and a.governorate == governorate]

    def governorates(self, country_code: str = DEFAULT_COUNTRY) -> List[str]:
        """Distinct governorates in first-seen order."""
        cc = _code(country_code)
        seen: Dict[str, None] = {}
        for a in self.store.areas:
            if a.country_code == cc and a.governorate:
                seen.setdefault(a.governorate, None)
        return list(seen)

    def areas_grouped_by_governorate(self, country_code: str = DEFAULT_COUNTRY) -> List[GovernorateGroup]:
        cc = _code(country_code)
        groups: Dict[str, List[Area]] = {}
        for a in self.store.areas:
            if a.country_code == cc and a.governorate:
                groups.setdefault(a.governorate, []).append(a)
        return [GovernorateGroup(governorate=g, areas=areas) for g, areas in groups.items()]

    # ---------- Technicians ----------
    @property
    def technicians(self) -> Tuple[Technician, ...]:
        return self.store.technicians

    def technician_by_id(self, technician_id: str) -> Optional[Technician]:
        return self._technicians.get(technician_id)

    def search_technicians(self, filters: Optional[SearchFilters] = None, **criteria) -> List[Technician]:
        """
        Active technicians matching every given filter, sorted descending.

        Accepts a ``SearchFilters`` or the same fields as keyword arguments.
        Records with equal sort keys keep their store order.
        """
        if filters is None:
            filters = SearchFilters(**criteria)

        results = [t for t in self.store.technicians if t.is_active]
        if filters.country_code:
            cc = _code(filters.country_code)
            results = [t for t in results if t.country_code == cc]
        if filters.service_id:
            results = [t for t in results if filters.service_id in t.service_ids]
        if filters.area_id:
            results = [t for t in results if filters.area_id in t.area_ids]
        # Literal substring, whitespace included; only "" is skipped
        query = (filters.query or "").lower()
        if query:
            results = [t for t in results if query in t.name.lower() or query in t.description.lower()]

        sort_key = SORT_KEYS[filters.sort_by or DEFAULT_SORT]
        # sorted() is stable with reverse=True, so ties keep store order
        return sorted(results, key=sort_key, reverse=True)

    def technicians_by_country(self, country_code: str) -> List[Technician]:
        return self.search_technicians(country_code=country_code)

    def technicians_by_service(self, service_id: str) -> List[Technician]:
        return self.search_technicians(service_id=service_id)

    def technicians_by_area(self, area_id: str) -> List[Technician]:
        return self.search_technicians(area_id=area_id)

    def featured_technicians(self) -> List[Technician]:
        return [t for t in self.store.technicians if t.featured and t.is_active]

    def country_stats(self, country_code: str) -> CountryStats:
        cc = _code(country_code)
        total = verified = 0
        rating_sum = 0.0
        for t in self.store.technicians:
            if t.country_code != cc:
                continue
            total += 1
            verified += t.verified
            rating_sum += t.rating
        return CountryStats(total=total, verified=verified, avg_rating=rating_sum / total if total else 0.0)

    # ---------- Listings ----------
    def listing_by_id(self, listing_id: str) -> Optional[Listing]:
        return self._listings.get(listing_id)

    def listings_by_country(self, country_code: str) -> List[Listing]:
        cc = _code(country_code)
        return [l for l in self.store.listings if l.country_code == cc and l.status == "active"]

    def listings_by_technician(self, technician_id: str) -> List[Listing]:
        return [l for l in self.store.listings if l.technician_id == technician_id]

    def latest_listings(self, limit: int = 6) -> List[Listing]:
        active = [l for l in self.store.listings if l.status == "active"]
        active.sort(key=lambda l: l.created_at, reverse=True)
        return active[:max(limit, 0)]
