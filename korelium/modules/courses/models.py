from __future__ import annotations

import enum
from typing import Optional

from sqlalchemy import Boolean, Float, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from korelium.db.base import Base
from korelium.db.mixins import TimestampMixin


class CourseLevel(str, enum.Enum):
    """Suggested values for Course.level; the column itself is free text."""
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    all_levels = "All Levels"


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    full_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # relative upload path ("uploads/<file>") or an external URL
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # free text; categories are derived with SELECT DISTINCT
    category: Mapped[Optional[str]] = mapped_column(
        String(255), index=True, nullable=True
    )

    # JSON-encoded list of strings
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    instructor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    students: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    original_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    udemy_link: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    prerequisites: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # display-only, e.g. "2024" or "March 2024"
    last_updated: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    certificate: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    # JSON-encoded list of strings
    what_youll_learn: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
