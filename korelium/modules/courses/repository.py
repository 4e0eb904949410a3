from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.orm import Session

from korelium.modules.courses.models import Course

# newest first; id breaks ties between rows inserted in the same instant
NEWEST_FIRST = (Course.created_at.desc(), Course.id.desc())

SEARCH_COLUMNS = (
    Course.title,
    Course.description,
    Course.full_description,
    Course.instructor,
    Course.tags,
)


class CourseRepository:
    """Repository for Course entity with CRUD and catalog queries."""

    def __init__(self, db: Session):
        self.db = db

    # ---------- CRUD ----------

    def get_by_id(self, course_id: int) -> Optional[Course]:
        """Get course by ID."""
        return self.db.get(Course, course_id)

    def get_by_slug(self, slug: str) -> Optional[Course]:
        """Get course by its public slug."""
        return self.db.execute(
            select(Course).where(Course.slug == slug)
        ).scalar_one_or_none()

    def list_all(self) -> list[Course]:
        """List every course, newest first."""
        return list(self.db.execute(select(Course).order_by(*NEWEST_FIRST)).scalars())

    def create(self, **fields: Any) -> Course:
        """Create a new course."""
        course = Course(**fields)
        self.db.add(course)
        self.db.flush()
        return course

    def update(self, course: Course, **fields: Any) -> Course:
        """Update course fields."""
        for key, value in fields.items():
            if hasattr(course, key):
                setattr(course, key, value)
        self.db.flush()
        return course

    def delete(self, course: Course) -> None:
        """Delete course."""
        self.db.delete(course)
        self.db.flush()

    # ---------- CATALOG QUERIES ----------

    def distinct_categories(self) -> list[str]:
        """Distinct non-null category names, alphabetical."""
        stmt = (
            select(Course.category)
            .where(Course.category.is_not(None))
            .distinct()
            .order_by(Course.category)
        )
        return list(self.db.execute(stmt).scalars())

    def category_counts(self) -> list[tuple[str, int]]:
        """(category, number of courses) for every non-null category."""
        stmt = (
            select(Course.category, func.count(Course.id))
            .where(Course.category.is_not(None))
            .group_by(Course.category)
            .order_by(Course.category)
        )
        return [(name, int(count)) for name, count in self.db.execute(stmt).all()]

    @staticmethod
    def build_filters(
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[ColumnElement[bool]]:
        """WHERE conditions for an exact category and/or a case-insensitive search.

        The search is a literal substring match over SEARCH_COLUMNS, including
        the raw JSON of `tags`. `%` and `_` in the term match themselves.
        """
        conditions: list[ColumnElement[bool]] = []
        if category is not None:
            conditions.append(Course.category == category)
        if search:
            conditions.append(
                or_(*(column.icontains(search, autoescape=True) for column in SEARCH_COLUMNS))
            )
        return conditions

    def count(self, conditions: list[ColumnElement[bool]]) -> int:
        stmt = select(func.count(Course.id))
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return int(self.db.execute(stmt).scalar_one())

    def list_page(
        self,
        conditions: list[ColumnElement[bool]],
        limit: int,
        offset: int,
    ) -> list[Course]:
        stmt = select(Course)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(*NEWEST_FIRST).limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars())

    def list_related(self, course: Course, limit: int) -> list[Course]:
        """Random courses from the same category, excluding `course`."""
        stmt = (
            select(Course)
            .where(Course.category == course.category, Course.slug != course.slug)
            .order_by(func.random())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def list_top_rated(self, limit: int) -> list[Course]:
        stmt = (
            select(Course)
            .order_by(Course.rating.desc().nulls_last(), *NEWEST_FIRST)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def totals(self) -> dict[str, Any]:
        """Aggregate figures over stored values (no display backfill)."""
        row = self.db.execute(
            select(
                func.count(Course.id),
                func.coalesce(func.sum(Course.students), 0),
                func.avg(Course.rating),
                func.count(func.distinct(Course.category)),
            )
        ).one()
        total_courses, total_students, average_rating, categories = row
        return {
            "total_courses": int(total_courses),
            "total_students": int(total_students),
            "average_rating": float(average_rating) if average_rating is not None else 0.0,
            "categories": int(categories),
        }
