from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, computed_field, field_validator

from korelium.core.slug import slugify
from korelium.modules.courses.json_fields import parse_json_list
from korelium.schemas.common import CamelModel


class CourseRead(CamelModel):
    id: int
    title: str
    slug: str
    description: Optional[str] = None
    full_description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    instructor: Optional[str] = None
    duration: Optional[str] = None
    students: Optional[int] = None
    rating: Optional[float] = None
    original_price: Optional[float] = None
    udemy_link: Optional[str] = None
    prerequisites: Optional[str] = None
    level: Optional[str] = None
    language: Optional[str] = None
    last_updated: Optional[str] = None
    certificate: bool = False
    what_youll_learn: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", "what_youll_learn", mode="before")
    @classmethod
    def decode_json_list(cls, value, info: ValidationInfo) -> list[str]:
        return parse_json_list(value, field=info.field_name)

    @computed_field(alias="categorySlug")
    @property
    def category_slug(self) -> str:
        return slugify(self.category)


class CourseSuggestion(CamelModel):
    id: int
    title: str
    slug: str
    category: Optional[str] = None
    instructor: Optional[str] = None


class CategoryRead(CamelModel):
    id: int
    name: str
    slug: str
    course_count: int


class CategoryInfo(CamelModel):
    slug: str
    name: Optional[str] = None
    found: bool


class PaginationMeta(CamelModel):
    current_page: int
    total_pages: int
    total_courses: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class CourseFilters(CamelModel):
    search: Optional[str] = None
    category_slug: str


class CourseListData(CamelModel):
    courses: list[CourseRead]
    pagination: PaginationMeta
    category: CategoryInfo
    filters: CourseFilters


class CatalogStats(CamelModel):
    total_courses: int
    total_students: int
    average_rating: float
    categories: int


class CourseMutationResponse(BaseModel):
    message: str
    course: CourseRead
