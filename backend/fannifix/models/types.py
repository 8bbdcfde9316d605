from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TechnicianStatus = Literal["active", "pending", "inactive"]
ListingStatus = Literal["active", "expired", "pending"]
SortBy = Literal["rating", "reviews", "newest", "experience"]

class Record(BaseModel):
    """Read-only record parsed from the JSON content files (camelCase keys)."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive timestamps are treated as UTC so every createdAt compares
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def _lower_code(value: str) -> str:
    return value.lower()

class Country(Record):
    code: str = Field(..., min_length=2, max_length=2)
    name: str
    name_en: str
    flag: str = ""
    currency: str = ""
    currency_symbol: str = ""
    language: Optional[str] = None
    active: bool = Field(False, validation_alias=AliasChoices("active", "enabled"))

class Area(Record):
    id: str
    country_code: str
    governorate: Optional[str] = None
    name: str
    name_en: str = ""
    slug: str

    @field_validator("country_code")
    @classmethod
    def country_code_lower(cls, value):
        return _lower_code(value)

class Service(Record):
    id: str
    key: str = ""
    name: str
    name_en: str = ""
    description: str = ""
    description_en: str = ""
    icon: str = ""
    slug: str
    color: str = ""

class Technician(Record):
    id: str
    name: str
    name_en: str = ""
    country_code: str
    area_ids: Tuple[str, ...] = ()
    service_ids: Tuple[str, ...] = ()
    phone: str = ""
    whatsapp: str = ""
    description: str = ""
    experience_years: int = Field(0, ge=0)
    price_estimate: str = ""
    rating: float = Field(0.0, ge=0, le=5)
    reviews_count: int = Field(0, ge=0)
    views_count: int = Field(0, ge=0)
    verified: bool = False
    featured: bool = False
    status: TechnicianStatus = "active"
    images: Tuple[str, ...] = ()
    created_at: Optional[datetime] = None

    @field_validator("country_code")
    @classmethod
    def country_code_lower(cls, value):
        return _lower_code(value)

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value):
        return _as_utc(value)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

class Listing(Record):
    id: str
    title: str
    technician_id: str
    service_id: str
    area_id: str
    country_code: str
    description: str = ""
    price: str = ""
    views_count: int = Field(0, ge=0)
    created_at: datetime
    status: ListingStatus = "active"

    @field_validator("country_code")
    @classmethod
    def country_code_lower(cls, value):
        return _lower_code(value)

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value):
        return _as_utc(value)

class SearchFilters(BaseModel):
    service_id: Optional[str] = Field(None, description="Keep technicians offering this service")
    country_code: Optional[str] = Field(None, description="Keep technicians of this country")
    area_id: Optional[str] = Field(None, description="Keep technicians covering this area")
    query: Optional[str] = Field(None, description="Case-insensitive substring of name or description, matched as given")
    sort_by: Optional[SortBy] = Field(None, description="Descending sort key; rating when omitted")

class CountryStats(BaseModel):
    total: int
    verified: int
    avg_rating: float

class GovernorateGroup(BaseModel):
    governorate: str
    areas: List[Area]

class SitemapEntry(BaseModel):
    url: str
    last_modified: datetime
    change_frequency: Literal["daily", "weekly", "monthly"]
    priority: float = Field(..., ge=0, le=1)
