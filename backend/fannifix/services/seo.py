# backend/fannifix/services/seo.py
import re
from typing import List, Literal, Mapping, Optional

from ..models.schema import CtaContent, Faq, HeroContent, PricingContent, SeoMeta, SeoTree, SiteContent
from ..models.types import Area, Service, Technician

PageType = Literal["default", "service", "area", "service_area"]
FaqType = Literal["default", "service", "service_area"]

SITE_NAME = "فني تصليح"
NOT_FOUND_TITLE = "الصفحة غير موجودة"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

def fill_template(template: str, values: Mapping[str, str]) -> str:
    """Replace every ``{name}`` whose name is in ``values``; others stay as written."""
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)

class SeoResolver:
    """
    Page metadata and marketing copy from the per-country SEO trees.

    Missing countries, pages or entries yield ``None`` / ``[]``; the
    ``*_metadata`` helpers fill the gaps with the site's built-in copy.
    """

    def __init__(self, trees: Mapping[str, SeoTree], country_names: Optional[Mapping[str, str]] = None):
        self.trees = trees
        self.country_names = dict(country_names or {})

    @classmethod
    def from_directory(cls, directory) -> "SeoResolver":
        return cls(directory.store.seo, {c.code: c.name for c in directory.countries})

    def tree(self, country_code: str) -> Optional[SeoTree]:
        return self.trees.get((country_code or "").lower())

    def seo_for_page(self, country_code: str, page_type: PageType, key: Optional[str] = None,
                     key2: Optional[str] = None) -> Optional[SeoMeta]:
        seo = self.tree(country_code)
        if seo is None:
            return None
        if page_type == "service":
            return seo.services.get(key) if key else None
        if page_type == "area":
            return seo.areas.get(key) if key else None
        if page_type == "service_area":
            return seo.service_area.get((key, key2)) if key and key2 else None
        return seo.default

    # ---------- Content blocks ----------
    def content(self, country_code: str) -> Optional[SiteContent]:
        seo = self.tree(country_code)
        return seo.content if seo else None

    def faqs(self, country_code: str, faq_type: FaqType = "default", service_name: Optional[str] = None,
             area_name: Optional[str] = None) -> List[Faq]:
        content = self.content(country_code)
        if content is None:
            return []
        if faq_type == "default":
            return list(content.faqs.default)
        if faq_type == "service" and service_name:
            values = {"service": service_name}
            templates = content.faqs.service
        elif faq_type == "service_area" and service_name and area_name:
            values = {"service": service_name, "area": area_name}
            templates = content.faqs.service_area
        else:
            return []
        return [
            Faq(question=fill_template(t.question_template, values), answer=fill_template(t.answer_template, values))
            for t in templates
        ]

    def pricing(self, country_code: str) -> Optional[PricingContent]:
        content = self.content(country_code)
        return content.pricing if content else None

    def hero(self, country_code: str) -> Optional[HeroContent]:
        content = self.content(country_code)
        return content.hero if content else None

    def cta(self, country_code: str) -> Optional[CtaContent]:
        content = self.content(country_code)
        return content.cta if content else None

    # ---------- Metadata with built-in fallbacks ----------
    def country_name(self, country_code: str) -> str:
        return self.country_names.get((country_code or "").lower(), "الكويت")

    def page_metadata(self, country_code: str, page_type: PageType, service: Optional[Service] = None,
                      area: Optional[Area] = None, technician_count: int = 0) -> SeoMeta:
        country = self.country_name(country_code)

        if page_type == "default":
            return self.seo_for_page(country_code, "default") or SeoMeta(
                title=f"{SITE_NAME} {country} | فنيين موثوقين تواصل مباشر",
                description=f"ابحث عن فني تكييف، كهربائي، سباك في {country}.",
            )

        if page_type == "service":
            if service is None:
                return SeoMeta(title=NOT_FOUND_TITLE, description="")
            found = self.seo_for_page(country_code, "service", service.id)
            return found or SeoMeta(
                title=f"{service.name} {country} | {SITE_NAME}",
                description=(f"ابحث عن {service.name} في جميع مناطق {country}. "
                             f"{technician_count}+ فني متاح. تواصل مباشر، أسعار مناسبة."),
                service_description=service.name,
            )

        if page_type == "area":
            if area is None:
                return SeoMeta(title=NOT_FOUND_TITLE, description="")
            found = self.seo_for_page(country_code, "area", area.id)
            return found or SeoMeta(
                title=f"فنيين في {area.name} - {country} | {SITE_NAME}",
                description=(f"ابحث عن أفضل الفنيين في {area.name}، {country}. {technician_count}+ فني متاح "
                             "في التكييف، الكهرباء، السباكة، الغسالات والثلاجات. تواصل مباشر، بدون عمولة."),
                keywords=", ".join(
                    f"{prefix} {area.name}"
                    for prefix in ("فنيين", "صيانة", "فني تكييف", "كهربائي", "سباك", "فني غسالات", "فني ثلاجات")
                ),
            )

        if service is None or area is None:
            return SeoMeta(title=NOT_FOUND_TITLE, description="")
        found = self.seo_for_page(country_code, "service_area", service.id, area.id)
        return found or SeoMeta(
            title=f"{service.name} {area.name} | {SITE_NAME} {country}",
            description=(f"{service.name} في {area.name}، {country}. "
                         "فنيين موثوقين، تواصل مباشر عبر واتساب. أسعار مناسبة."),
            keywords=f"{service.name} {area.name}, فني {service.name} {area.name}",
        )

    def technician_metadata(self, technician: Technician, service: Optional[Service] = None,
                            area: Optional[Area] = None) -> SeoMeta:
        """Profile page title/description built from the technician's first service and area."""
        place = area.name if area else self.country_name(technician.country_code)
        trade = service.name if service else "صيانة"
        headline = f"{technician.name} - فني {trade} في {place}"
        return SeoMeta(
            title=f"{headline} | فني فيكس",
            description=f"{headline}. {technician.description[:100]}... تواصل مباشر.",
        )
