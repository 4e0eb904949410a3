from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException, UploadFile, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from korelium.core.logging import get_logger
from korelium.core.slug import slugify
from korelium.integrations.storage import ImageRejected, LocalImageStorage
from korelium.modules.courses.json_fields import dump_json_list, parse_json_list
from korelium.modules.courses.models import Course
from korelium.modules.courses.repository import CourseRepository

logger = get_logger(__name__)

JSON_LIST_FIELDS = ("tags", "what_youll_learn")

IMAGE_REJECTION_STATUS = {
    "extension": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "size": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


class CourseService:
    """Admin-side course management.

    Image files and course rows cannot share a transaction, so writes follow
    one order: store the new file, commit the row, then remove the file it
    replaced. If the commit fails the new file is removed again. At worst an
    unreferenced old file is left behind.
    """

    def __init__(self, db: Session, storage: LocalImageStorage):
        self.db = db
        self.storage = storage
        self.course_repo = CourseRepository(db)

    def list_courses(self) -> list[Course]:
        return self.course_repo.list_all()

    def get_course(self, course_id: int) -> Course:
        course = self.course_repo.get_by_id(course_id)
        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found",
            )
        return course

    def create_course(self, fields: dict[str, Any], image: Optional[UploadFile] = None) -> Course:
        fields = self._normalize(fields)
        if not fields.get("title"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title is required",
            )
        if not fields.get("slug"):
            fields["slug"] = slugify(fields["title"])
        if not fields["slug"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Could not derive a slug from the title",
            )
        self._ensure_slug_available(fields["slug"])

        new_image = self._store_image(image)
        if new_image:
            fields["image"] = new_image

        try:
            course = self.course_repo.create(**fields)
            self.db.commit()
        except IntegrityError:
            self._abort(new_image)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A course with this slug already exists",
            )
        except Exception:
            self._abort(new_image)
            raise
        self.db.refresh(course)

        logger.info("created course", course_id=course.id, slug=course.slug)
        return course

    def update_course(
        self,
        course_id: int,
        fields: dict[str, Any],
        image: Optional[UploadFile] = None,
    ) -> Course:
        course = self.get_course(course_id)
        fields = self._normalize(fields)

        if "slug" in fields:
            if not fields["slug"]:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Slug cannot be empty",
                )
            if fields["slug"] != course.slug:
                self._ensure_slug_available(fields["slug"])

        old_image = course.image
        new_image = self._store_image(image)
        if new_image:
            fields["image"] = new_image

        try:
            self.course_repo.update(course, **fields)
            self.db.commit()
        except IntegrityError:
            self._abort(new_image)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A course with this slug already exists",
            )
        except Exception:
            self._abort(new_image)
            raise
        self.db.refresh(course)

        if old_image and old_image != course.image:
            self.storage.delete(old_image)

        logger.info("updated course", course_id=course.id, fields=sorted(fields))
        return course

    def delete_course(self, course_id: int) -> None:
        course = self.get_course(course_id)
        image = course.image

        self.course_repo.delete(course)
        self.db.commit()

        # row is gone; the file is only cleanup now
        self.storage.delete(image)
        logger.info("deleted course", course_id=course_id)

    # ---------- helpers ----------

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Drop absent values, re-encode list fields, normalize the slug."""
        normalized = {key: value for key, value in fields.items() if value is not None}
        for key in JSON_LIST_FIELDS:
            if key in normalized:
                normalized[key] = dump_json_list(parse_json_list(normalized[key], field=key))
        if "slug" in normalized:
            normalized["slug"] = slugify(normalized["slug"])
        return normalized

    def _ensure_slug_available(self, slug: str) -> None:
        if self.course_repo.get_by_slug(slug) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A course with this slug already exists",
            )

    def _store_image(self, image: Optional[UploadFile]) -> Optional[str]:
        if image is None or not image.filename:
            return None
        try:
            return self.storage.save(image.file, image.filename)
        except ImageRejected as exc:
            raise HTTPException(
                status_code=IMAGE_REJECTION_STATUS[exc.reason],
                detail=exc.message,
            )

    def _abort(self, new_image: Optional[str]) -> None:
        self.db.rollback()
        if new_image:
            self.storage.delete(new_image)
            logger.warning("discarded image after failed write", image=new_image)
