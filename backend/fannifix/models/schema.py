"""Shape of the per-country SEO content tree (``seo/<code>.json``).

Keys in these documents are snake_case, unlike the entity collections.
"""
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

class ContentModel(BaseModel):
    model_config = ConfigDict(frozen=True)

class SeoMeta(ContentModel):
    title: str
    description: str
    keywords: Optional[str] = None
    service_description: Optional[str] = None

class Faq(ContentModel):
    question: str
    answer: str

class FaqTemplate(ContentModel):
    question_template: str
    answer_template: str

class FaqSet(ContentModel):
    default: List[Faq] = []
    service: List[FaqTemplate] = []
    service_area: List[FaqTemplate] = []

class PricingContent(ContentModel):
    inspection: str = ""
    basic_maintenance: str = ""
    comprehensive_maintenance: str = ""
    installation: str = ""
    disclaimer: str = ""

class HeroContent(ContentModel):
    headline: str = ""
    subheadline: str = ""
    search_placeholder: str = ""

class CtaContent(ContentModel):
    technician: str = ""
    technician_description: str = ""
    user: str = ""
    user_description: str = ""

class SiteContent(ContentModel):
    faqs: FaqSet = FaqSet()
    pricing: Optional[PricingContent] = None
    hero: Optional[HeroContent] = None
    cta: Optional[CtaContent] = None

ServiceAreaKey = Tuple[str, str]  # (service_id, area_id)

class SeoTree(ContentModel):
    default: SeoMeta
    services: Dict[str, SeoMeta] = {}
    areas: Dict[str, SeoMeta] = {}
    service_area: Dict[ServiceAreaKey, SeoMeta] = {}
    content: SiteContent = SiteContent()
