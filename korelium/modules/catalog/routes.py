# korelium/modules/catalog/routes.py
"""Public, unauthenticated catalog endpoints used by the site frontends."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from korelium.core.logging import get_logger
from korelium.db.deps import get_db
from korelium.modules.catalog.service import CatalogService
from korelium.schemas.common import ApiResponse, ErrorResponse
from korelium.schemas.course import (
    CatalogStats,
    CategoryRead,
    CourseListData,
    CourseRead,
    CourseSuggestion,
)

logger = get_logger(__name__)

router = APIRouter(tags=["catalog"])

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def course_not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(message="Course not found", error="COURSE_NOT_FOUND").model_dump(),
    )


def server_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message="Server error", error="SERVER_ERROR").model_dump(),
    )


@router.get(
    "/course/{slug}",
    response_model=ApiResponse[CourseRead],
    responses=NOT_FOUND_RESPONSES,
)
def get_course(slug: str, db: Session = Depends(get_db)):
    """Get a single course by its slug."""
    try:
        course = CatalogService(db).get_course(slug)
    except SQLAlchemyError:
        logger.exception("error fetching course by slug", slug=slug)
        return server_error()
    if course is None:
        return course_not_found()
    return ApiResponse[CourseRead](data=course)


@router.get(
    "/courses/category/{category_slug}",
    response_model=ApiResponse[CourseListData],
    responses={500: {"model": ErrorResponse}},
)
def list_courses_by_category(
    category_slug: str,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(12, ge=1, le=100, description="Page size"),
    search: Optional[str] = Query(None, max_length=200, description="Case-insensitive search"),
    db: Session = Depends(get_db),
):
    """List courses in a category ("all" for every category), paginated and searchable.

    An unknown category slug is not an error: it returns an empty page with
    category.found = false.
    """
    try:
        data = CatalogService(db).list_by_category(
            category_slug, page=page, limit=limit, search=search
        )
    except SQLAlchemyError:
        logger.exception("error fetching courses by category", category_slug=category_slug)
        return server_error()
    return ApiResponse[CourseListData](data=data)


@router.get(
    "/course-categories",
    response_model=ApiResponse[List[CategoryRead]],
    responses={500: {"model": ErrorResponse}},
)
def list_categories(db: Session = Depends(get_db)):
    """All categories with their slug and course count."""
    try:
        categories = CatalogService(db).list_categories()
    except SQLAlchemyError:
        logger.exception("error fetching categories")
        return server_error()
    return ApiResponse[List[CategoryRead]](data=categories)


@router.get(
    "/course/{slug}/related",
    response_model=ApiResponse[List[CourseRead]],
    responses=NOT_FOUND_RESPONSES,
)
def list_related_courses(
    slug: str,
    limit: int = Query(4, ge=1, le=50),
    db: Session = Depends(get_db),
):
    """Random courses from the same category, excluding this one."""
    try:
        related = CatalogService(db).related_courses(slug, limit=limit)
    except SQLAlchemyError:
        logger.exception("error fetching related courses", slug=slug)
        return server_error()
    if related is None:
        return course_not_found()
    return ApiResponse[List[CourseRead]](data=related)


@router.get(
    "/courses/featured",
    response_model=ApiResponse[List[CourseRead]],
    responses={500: {"model": ErrorResponse}},
)
def list_featured_courses(
    limit: int = Query(6, ge=1, le=50),
    db: Session = Depends(get_db),
):
    """Top-rated courses for the home page."""
    try:
        courses = CatalogService(db).featured_courses(limit=limit)
    except SQLAlchemyError:
        logger.exception("error fetching featured courses")
        return server_error()
    return ApiResponse[List[CourseRead]](data=courses)


@router.get(
    "/courses/search/suggestions",
    response_model=ApiResponse[List[CourseSuggestion]],
    responses={500: {"model": ErrorResponse}},
)
def search_suggestions(
    q: Optional[str] = Query(None, max_length=200),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
):
    """Type-ahead suggestions; empty until the query has two characters."""
    try:
        suggestions = CatalogService(db).suggestions(q, limit=limit)
    except SQLAlchemyError:
        logger.exception("error fetching search suggestions", q=q)
        return server_error()
    return ApiResponse[List[CourseSuggestion]](data=suggestions)


@router.get(
    "/stats",
    response_model=ApiResponse[CatalogStats],
    responses={500: {"model": ErrorResponse}},
)
def catalog_stats(db: Session = Depends(get_db)):
    """Totals over stored course data."""
    try:
        stats = CatalogService(db).stats()
    except SQLAlchemyError:
        logger.exception("error fetching stats")
        return server_error()
    return ApiResponse[CatalogStats](data=stats)
