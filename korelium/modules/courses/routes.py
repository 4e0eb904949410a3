# korelium/modules/courses/routes.py
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from korelium.core.permissions import CREATE_COURSE, DELETE_COURSE, READ_COURSE, UPDATE_COURSE
from korelium.db.deps import get_db, require_permission
from korelium.integrations.storage import LocalImageStorage, get_image_storage
from korelium.modules.courses.service import CourseService
from korelium.schemas.common import MessageResponse
from korelium.schemas.course import CourseMutationResponse, CourseRead

router = APIRouter(prefix="/courses", tags=["admin courses"])


def course_form(
    title: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    full_description: Optional[str] = Form(None, alias="fullDescription"),
    image_url: Optional[str] = Form(None, alias="imageUrl"),
    category: Optional[str] = Form(None),
    tags: Optional[str] = Form(None, description="JSON-encoded array of strings"),
    instructor: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    students: Optional[int] = Form(None, ge=0),
    rating: Optional[float] = Form(None, ge=0, le=5),
    original_price: Optional[float] = Form(None, ge=0, alias="originalPrice"),
    udemy_link: Optional[str] = Form(None, alias="udemyLink"),
    prerequisites: Optional[str] = Form(None),
    level: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    last_updated: Optional[str] = Form(None, alias="lastUpdated"),
    certificate: Optional[bool] = Form(None),
    what_youll_learn: Optional[str] = Form(
        None, alias="whatYoullLearn", description="JSON-encoded array of strings"
    ),
) -> dict[str, Any]:
    """Multipart course fields keyed by model attribute; unset ones are None."""
    return {
        "title": title,
        "slug": slug,
        "description": description,
        "full_description": full_description,
        "image": image_url,
        "category": category,
        "tags": tags,
        "instructor": instructor,
        "duration": duration,
        "students": students,
        "rating": rating,
        "original_price": original_price,
        "udemy_link": udemy_link,
        "prerequisites": prerequisites,
        "level": level,
        "language": language,
        "last_updated": last_updated,
        "certificate": certificate,
        "what_youll_learn": what_youll_learn,
    }


def get_course_service(
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_image_storage),
) -> CourseService:
    return CourseService(db, storage)


@router.get(
    "",
    response_model=List[CourseRead],
    dependencies=[Depends(require_permission(READ_COURSE))],
)
def list_courses(course_service: CourseService = Depends(get_course_service)):
    """List every course, newest first."""
    return course_service.list_courses()


@router.post(
    "",
    response_model=CourseMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(CREATE_COURSE))],
)
def create_course(
    fields: dict = Depends(course_form),
    image: Optional[UploadFile] = File(None),
    course_service: CourseService = Depends(get_course_service),
):
    """Create a course from a multipart form with an optional image."""
    course = course_service.create_course(fields, image=image)
    return CourseMutationResponse(
        message="Course created successfully",
        course=CourseRead.model_validate(course),
    )


@router.put(
    "/{course_id}",
    response_model=CourseMutationResponse,
    dependencies=[Depends(require_permission(UPDATE_COURSE))],
)
def update_course(
    course_id: int,
    fields: dict = Depends(course_form),
    image: Optional[UploadFile] = File(None),
    course_service: CourseService = Depends(get_course_service),
):
    """Partially update a course; omitted fields keep their values."""
    course = course_service.update_course(course_id, fields, image=image)
    return CourseMutationResponse(
        message="Course updated successfully",
        course=CourseRead.model_validate(course),
    )


@router.delete(
    "/{course_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission(DELETE_COURSE))],
)
def delete_course(
    course_id: int,
    course_service: CourseService = Depends(get_course_service),
):
    """Delete a course and its uploaded image."""
    course_service.delete_course(course_id)
    return MessageResponse(message="Course deleted successfully")
