# backend/fannifix/api.py
from contextlib import asynccontextmanager
from typing import Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from .utils.config import ALLOW_ORIGINS, DATA_DIR, DEBUG, DEFAULT_COUNTRY, ONBOARDING_WHATSAPP
from .utils.logging import get_logger, setup_logging
from .models.types import SearchFilters, SortBy
from .services.directory import Directory
from .services.ingestion import DataLoadError
from .services.seo import FaqType, PageType, SeoResolver
from .services.structured_data import local_business_schema, service_schema, sitemap_entries, whatsapp_url

# Configure logging
setup_logging()
logger = get_logger(__name__)

def _install(app: FastAPI, directory: Directory) -> None:
    app.state.directory = directory
    app.state.seo = SeoResolver.from_directory(directory)

def create_app(directory: Optional[Directory] = None, data_dir: Optional[str] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "directory", None) is None:
            path = data_dir or DATA_DIR
            try:
                _install(app, Directory.from_path(path))
            except DataLoadError as e:
                logger.error(f"Content load failed, refusing to start: {e}", exc_info=True)
                raise
            logger.info(f"API started with content from {path}.")
        yield

    app = FastAPI(title="FanniFix Directory API", debug=DEBUG, lifespan=lifespan)
    if directory is not None:
        _install(app, directory)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOW_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    _register_routes(app)
    return app

def get_directory(request: Request) -> Directory:
    return request.app.state.directory

def get_seo(request: Request) -> SeoResolver:
    return request.app.state.seo

def _country_or_404(directory: Directory, code: str):
    country = directory.country_by_code(code)
    if country is None:
        raise HTTPException(status_code=404, detail=f"Unknown country: {code}")
    return country

def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    def health(directory: Directory = Depends(get_directory)):
        store = directory.store
        return {
            "ok": True,
            "countries": len(store.countries),
            "services": len(store.services),
            "areas": len(store.areas),
            "technicians": len(store.technicians),
            "listings": len(store.listings),
        }

    # ---------- Countries & areas ----------
    @app.get("/countries")
    def countries(directory: Directory = Depends(get_directory)):
        return directory.enabled_countries()

    @app.get("/countries/{code}")
    def country(code: str, directory: Directory = Depends(get_directory)):
        found = _country_or_404(directory, code)
        return {"country": found, "stats": directory.country_stats(found.code)}

    @app.get("/countries/{code}/areas")
    def country_areas(code: str, grouped: bool = False, directory: Directory = Depends(get_directory)):
        found = _country_or_404(directory, code)
        if grouped:
            return directory.areas_grouped_by_governorate(found.code)
        return directory.areas_by_country(found.code)

    # ---------- Services ----------
    @app.get("/services")
    def services(directory: Directory = Depends(get_directory)):
        return directory.services

    @app.get("/services/{slug}")
    def service(slug: str, country: str = DEFAULT_COUNTRY, directory: Directory = Depends(get_directory),
                seo: SeoResolver = Depends(get_seo)):
        found = directory.service_by_slug(slug)
        if found is None:
            raise HTTPException(status_code=404, detail=f"Unknown service: {slug}")
        meta = seo.seo_for_page(country, "service", found.id)
        return {
            "service": found,
            "technicians": directory.search_technicians(service_id=found.id, country_code=country),
            "faqs": seo.faqs(country, "service", found.name),
            "schema": service_schema(
                found.name,
                meta.service_description if meta and meta.service_description else found.description,
                found.slug,
                country,
                seo.country_name(country),
            ),
        }

    # ---------- Technicians ----------
    @app.get("/technicians")
    def technicians(
        service_id: Optional[str] = None,
        country_code: Optional[str] = None,
        area_id: Optional[str] = None,
        q: Optional[str] = Query(None, max_length=200),
        sort_by: Optional[SortBy] = None,
        directory: Directory = Depends(get_directory),
    ):
        filters = SearchFilters(service_id=service_id, country_code=country_code, area_id=area_id,
                                query=q, sort_by=sort_by)
        logger.info(f"Technician search: {filters.model_dump(exclude_none=True)}")
        return directory.search_technicians(filters)

    @app.get("/technicians/featured")
    def featured(directory: Directory = Depends(get_directory)):
        return directory.featured_technicians()

    @app.get("/technicians/{technician_id}")
    def technician(technician_id: str, source: str = "direct", directory: Directory = Depends(get_directory),
                   seo: SeoResolver = Depends(get_seo)):
        found = directory.technician_by_id(technician_id)
        if found is None:
            raise HTTPException(status_code=404, detail=f"Unknown technician: {technician_id}")
        services = [s for s in map(directory.service_by_id, found.service_ids) if s]
        areas = [a for a in (directory.area_by_id(i, found.country_code) for i in found.area_ids) if a]
        primary_service = services[0] if services else None
        primary_area = areas[0] if areas else None
        return {
            "technician": found,
            "services": services,
            "areas": areas,
            "listings": directory.listings_by_technician(found.id),
            "seo": seo.technician_metadata(found, primary_service, primary_area),
            "whatsapp_url": whatsapp_url(found.whatsapp, source),
            "schema": local_business_schema(
                found.name,
                found.description,
                found.phone,
                found.rating,
                found.reviews_count,
                primary_area.name if primary_area else seo.country_name(found.country_code),
                primary_service.name if primary_service else "",
                country_code=found.country_code,
                country_name=seo.country_name(found.country_code),
            ),
        }

    # ---------- Listings ----------
    @app.get("/listings/latest")
    def latest_listings(limit: int = Query(6, ge=1, le=50), directory: Directory = Depends(get_directory)):
        return directory.latest_listings(limit)

    # ---------- SEO & content ----------
    @app.get("/seo/{country}/faqs")
    def faqs(country: str, type: FaqType = "default", service: Optional[str] = None, area: Optional[str] = None,
             seo: SeoResolver = Depends(get_seo)):
        return seo.faqs(country, type, service, area)

    @app.get("/seo/{country}/{page_type}")
    def page_seo(country: str, page_type: PageType, service_slug: Optional[str] = None,
                 area_slug: Optional[str] = None, directory: Directory = Depends(get_directory),
                 seo: SeoResolver = Depends(get_seo)):
        service = directory.service_by_slug(service_slug) if service_slug else None
        area = directory.area_by_slug(area_slug, country) if area_slug else None
        count = 0
        if service or area:
            count = len(directory.search_technicians(
                country_code=country,
                service_id=service.id if service else None,
                area_id=area.id if area else None,
            ))
        return seo.page_metadata(country, page_type, service, area, count)

    @app.get("/content/{country}/{block}")
    def content(country: str, block: Literal["pricing", "hero", "cta"], seo: SeoResolver = Depends(get_seo)):
        found = getattr(seo, block)(country)
        if found is None:
            raise HTTPException(status_code=404, detail=f"No {block} content for {country}")
        return found

    @app.get("/add-listing")
    def add_listing(source: str = "direct", seo: SeoResolver = Depends(get_seo)):
        # Technicians are onboarded by hand over WhatsApp
        return {"whatsapp_url": whatsapp_url(ONBOARDING_WHATSAPP, source), "cta": seo.cta(DEFAULT_COUNTRY)}

    @app.get("/sitemap")
    def sitemap(country: str = DEFAULT_COUNTRY, directory: Directory = Depends(get_directory)):
        return sitemap_entries(directory, country_code=country)

app = create_app()
