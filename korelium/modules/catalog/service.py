from __future__ import annotations

import math
import random
from typing import Optional

from sqlalchemy.orm import Session

from korelium.core.config import settings
from korelium.core.logging import get_logger
from korelium.core.slug import slugify
from korelium.modules.courses.models import Course
from korelium.modules.courses.repository import CourseRepository
from korelium.schemas.course import (
    CatalogStats,
    CategoryInfo,
    CategoryRead,
    CourseFilters,
    CourseListData,
    CourseRead,
    CourseSuggestion,
    PaginationMeta,
)

logger = get_logger(__name__)

ALL_CATEGORIES_SLUG = "all"
ALL_CATEGORIES_NAME = "All Categories"
MIN_SUGGESTION_QUERY_LENGTH = 2


def build_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return PaginationMeta(
        current_page=page,
        total_pages=total_pages,
        total_courses=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        limit=limit,
    )


class CatalogService:
    """Read-only queries behind the public course catalog."""

    def __init__(
        self,
        db: Session,
        backfill: Optional[bool] = None,
        rng: Optional[random.Random] = None,
    ):
        self.db = db
        self.course_repo = CourseRepository(db)
        self.backfill = settings.BACKFILL_DISPLAY_METRICS if backfill is None else backfill
        self.rng = rng or random.Random()

    # ---------- shaping ----------

    def shape(self, course: Course, with_price: bool = False) -> CourseRead:
        """Course row -> API model, decoding JSON fields and filling display metrics."""
        shaped = CourseRead.model_validate(course)
        if not self.backfill:
            return shaped

        update: dict = {}
        if not shaped.students:
            update["students"] = self.rng.randint(1000, 10999)
        if not shaped.rating:
            update["rating"] = round(self.rng.uniform(4.0, 5.0), 1)
        if with_price and not shaped.original_price:
            update["original_price"] = round(self.rng.randint(0, 99) + 29.99, 2)
        return shaped.model_copy(update=update) if update else shaped

    # ---------- categories ----------

    def resolve_category(self, category_slug: str) -> CategoryInfo:
        """Map a URL slug back to the stored category name.

        "all" means no category filter. An unknown slug yields found=False.
        """
        if category_slug.lower() == ALL_CATEGORIES_SLUG:
            return CategoryInfo(slug=ALL_CATEGORIES_SLUG, name=ALL_CATEGORIES_NAME, found=True)

        for name in self.course_repo.distinct_categories():
            if slugify(name) == category_slug:
                return CategoryInfo(slug=category_slug, name=name, found=True)

        logger.info("category slug not found", category_slug=category_slug)
        return CategoryInfo(slug=category_slug, name=None, found=False)

    def list_categories(self) -> list[CategoryRead]:
        return [
            CategoryRead(id=index, name=name, slug=slugify(name), course_count=count)
            for index, (name, count) in enumerate(self.course_repo.category_counts(), start=1)
        ]

    # ---------- listing ----------

    def list_by_category(
        self,
        category_slug: str,
        page: int = 1,
        limit: int = 12,
        search: Optional[str] = None,
    ) -> CourseListData:
        search = search.strip() if search else None
        filters = CourseFilters(search=search or None, category_slug=category_slug)

        category = self.resolve_category(category_slug)
        if not category.found:
            return CourseListData(
                courses=[],
                pagination=build_pagination(page, limit, 0),
                category=category,
                filters=filters,
            )

        category_name = None if category.slug == ALL_CATEGORIES_SLUG else category.name
        conditions = self.course_repo.build_filters(category=category_name, search=search)

        total = self.course_repo.count(conditions)
        offset = (page - 1) * limit
        courses = self.course_repo.list_page(conditions, limit=limit, offset=offset)

        logger.info(
            "listed courses",
            category_slug=category_slug,
            search=search,
            page=page,
            limit=limit,
            total=total,
        )
        return CourseListData(
            courses=[self.shape(course) for course in courses],
            pagination=build_pagination(page, limit, total),
            category=category,
            filters=filters,
        )

    # ---------- single course ----------

    def get_course(self, slug: str) -> Optional[CourseRead]:
        course = self.course_repo.get_by_slug(slug)
        if course is None:
            return None
        return self.shape(course, with_price=True)

    def related_courses(self, slug: str, limit: int = 4) -> Optional[list[CourseRead]]:
        """None when the course itself does not exist."""
        course = self.course_repo.get_by_slug(slug)
        if course is None:
            return None
        return [self.shape(related) for related in self.course_repo.list_related(course, limit)]

    # ---------- home page helpers ----------

    def featured_courses(self, limit: int = 6) -> list[CourseRead]:
        return [self.shape(course) for course in self.course_repo.list_top_rated(limit)]

    def suggestions(self, query: Optional[str], limit: int = 10) -> list[CourseSuggestion]:
        query = (query or "").strip()
        if len(query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []
        conditions = self.course_repo.build_filters(search=query)
        courses = self.course_repo.list_page(conditions, limit=limit, offset=0)
        return [CourseSuggestion.model_validate(course) for course in courses]

    def stats(self) -> CatalogStats:
        totals = self.course_repo.totals()
        return CatalogStats(
            total_courses=totals["total_courses"],
            total_students=totals["total_students"],
            average_rating=round(totals["average_rating"], 2),
            categories=totals["categories"],
        )
