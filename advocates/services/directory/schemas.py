"""
Directory-specific Pydantic schemas for API request/response models.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from advocates.lib.enums import Degree, SortOption, DEFAULT_SORT_OPTION
from advocates.services.directory.utils.pagination import PG_INT_MAX, hash_filters


MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 20
MIN_EXPERIENCE = 0
MAX_EXPERIENCE = PG_INT_MAX


# Listing Query Parameters
class AdvocateQueryParams(BaseModel):
    """Validated parameters for GET /api/advocates."""
    cursor: Optional[str] = Field(default=None, description="Opaque cursor from a previous page")
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Number of items per page")
    q: Optional[str] = Field(default=None, description="Free-text search across names, city and specialties")
    city: Optional[str] = Field(default=None, description="Case-insensitive partial match for city")
    degree: Optional[Degree] = Field(default=None, description="Exact match for degree")
    min_exp: Optional[int] = Field(default=None, ge=MIN_EXPERIENCE, le=MAX_EXPERIENCE, description="Minimum years of experience")
    specialties: List[str] = Field(default_factory=list, description="Every listed specialty must be present")
    sort: SortOption = Field(default=DEFAULT_SORT_OPTION, description="Sort mode")

    @field_validator("specialties", mode="before")
    @classmethod
    def _split_specialties(cls, value):
        """Accept the comma-separated wire form."""
        if value is None:
            return []
        if isinstance(value, str):
            return [s.strip() for s in value.split(",") if s.strip()]
        return value

    def filters_hash(self) -> str:
        """Fingerprint of the filter set, used to pin cursors to it."""
        return hash_filters(
            q=self.q,
            city=self.city,
            degree=self.degree,
            min_exp=self.min_exp,
            specialties=self.specialties,
        )


# Advocate Item
class AdvocateItem(BaseModel):
    """Single advocate as exposed by the API (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: List[str] = Field(default_factory=list)
    years_of_experience: Optional[int] = None
    phone_number: int


class PageInfo(BaseModel):
    """Continuation state for cursor pagination."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    next_cursor: Optional[str] = None  # Opaque cursor for next page
    has_next: bool = False


# Advocate Page Response
class AdvocatePage(BaseModel):
    """Response payload for the listing endpoint."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[AdvocateItem]
    page_info: PageInfo
