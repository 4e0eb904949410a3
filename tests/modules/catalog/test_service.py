"""Tests for the public catalog service."""

import random

import pytest

from korelium.modules.catalog.service import CatalogService, build_pagination


@pytest.fixture
def catalog(db):
    """Catalog service with display backfill off so stored values come back as-is."""
    return CatalogService(db, backfill=False)


@pytest.fixture
def mixed_catalog(make_course):
    """12 Web Development courses and 3 Data Science courses."""
    web = [make_course(f"Web Course {i}", category="Web Development") for i in range(12)]
    data = [make_course(f"Data Course {i}", category="Data Science") for i in range(3)]
    return web, data


class TestCategoryResolution:
    def test_all_maps_to_every_category(self, catalog):
        info = catalog.resolve_category("all")
        assert info.found is True
        assert info.name == "All Categories"
        assert info.slug == "all"

    def test_known_slug_resolves_to_stored_name(self, catalog, make_course):
        make_course("Intro", category="Web Development")
        info = catalog.resolve_category("web-development")
        assert info.found is True
        assert info.name == "Web Development"

    def test_punctuated_name_resolves(self, catalog, make_course):
        make_course("Intro to .NET", category="C# & .NET")
        info = catalog.resolve_category("c-net")
        assert info.found is True
        assert info.name == "C# & .NET"

    def test_unknown_slug_not_found(self, catalog, make_course):
        make_course("Intro", category="Web Development")
        info = catalog.resolve_category("underwater-basket-weaving")
        assert info.found is False
        assert info.name is None


class TestPagination:
    def test_build_pagination_flags(self):
        meta = build_pagination(page=2, limit=10, total=25)
        assert meta.total_pages == 3
        assert meta.has_next_page is True
        assert meta.has_prev_page is True

    def test_build_pagination_empty(self):
        meta = build_pagination(page=1, limit=12, total=0)
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False

    def test_second_page_holds_the_remainder(self, catalog, mixed_catalog):
        result = catalog.list_by_category("web-development", page=2, limit=10)

        assert len(result.courses) == 2
        assert result.pagination.total_courses == 12
        assert result.pagination.total_pages == 2
        assert result.pagination.current_page == 2
        assert result.pagination.has_prev_page is True
        assert result.pagination.has_next_page is False
        assert all(course.category == "Web Development" for course in result.courses)

    def test_pages_cover_everything_once(self, catalog, mixed_catalog):
        seen = []
        for page in range(1, 5):
            seen.extend(c.id for c in catalog.list_by_category("all", page=page, limit=4).courses)

        assert len(seen) == 15
        assert len(set(seen)) == 15

    def test_newest_first(self, catalog, mixed_catalog):
        _, data = mixed_catalog
        courses = catalog.list_by_category("all", page=1, limit=3).courses
        assert [c.id for c in courses] == [c.id for c in reversed(data)]

    def test_page_past_the_end_is_empty(self, catalog, mixed_catalog):
        result = catalog.list_by_category("data-science", page=5, limit=10)
        assert result.courses == []
        assert result.pagination.total_courses == 3
        assert result.pagination.has_next_page is False

    def test_unknown_category_returns_empty_page(self, catalog, mixed_catalog):
        result = catalog.list_by_category("does-not-exist")
        assert result.courses == []
        assert result.category.found is False
        assert result.pagination.total_courses == 0
        assert result.pagination.total_pages == 0


class TestSearch:
    def test_substring_matches_title(self, catalog, make_course):
        make_course("Advanced JavaScript Mastery")
        make_course("Python Basics")

        result = catalog.list_by_category("all", search="java")

        assert [c.title for c in result.courses] == ["Advanced JavaScript Mastery"]
        assert result.filters.search == "java"

    def test_case_insensitive(self, catalog, make_course):
        make_course("Advanced JavaScript Mastery")
        assert catalog.list_by_category("all", search="JAVASCRIPT").pagination.total_courses == 1

    def test_matches_instructor_and_description(self, catalog, make_course):
        make_course("Course A", instructor="Ada Lane")
        make_course("Course B", description="Covers the event loop in depth")
        make_course("Course C")

        assert catalog.list_by_category("all", search="ada").pagination.total_courses == 1
        assert catalog.list_by_category("all", search="event loop").pagination.total_courses == 1

    def test_matches_tags(self, catalog, make_course):
        make_course("Course A", tags=["Kubernetes", "Docker"])
        make_course("Course B", tags=["Excel"])
        result = catalog.list_by_category("all", search="kubernetes")
        assert [c.title for c in result.courses] == ["Course A"]

    def test_search_combines_with_category(self, catalog, make_course):
        make_course("Python for the Web", category="Web Development")
        make_course("Python for Data", category="Data Science")

        result = catalog.list_by_category("data-science", search="python")

        assert [c.title for c in result.courses] == ["Python for Data"]

    def test_wildcards_match_literally(self, catalog, make_course):
        make_course("100% Free Python")
        make_course("Python Basics")

        percent = catalog.list_by_category("all", search="%")
        underscore = catalog.list_by_category("all", search="_")

        assert [c.title for c in percent.courses] == ["100% Free Python"]
        assert underscore.courses == []

    def test_blank_search_is_ignored(self, catalog, mixed_catalog):
        result = catalog.list_by_category("all", search="   ", limit=100)
        assert result.pagination.total_courses == 15
        assert result.filters.search is None


class TestShaping:
    def test_list_fields_decoded(self, catalog, make_course):
        course = make_course("Tagged", tags=["React", "Node.js"], what_youll_learn=["Hooks"])
        shaped = catalog.shape(course)
        assert shaped.tags == ["React", "Node.js"]
        assert shaped.what_youll_learn == ["Hooks"]
        assert shaped.category_slug == "web-development"

    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[unclosed"])
    def test_malformed_tags_become_empty(self, catalog, make_course, raw):
        course = make_course("Broken", tags=raw)
        assert catalog.shape(course).tags == []

    def test_backfill_fills_missing_metrics(self, db, make_course):
        course = make_course("Bare", students=0, rating=None, original_price=None)
        catalog = CatalogService(db, backfill=True, rng=random.Random(7))

        shaped = catalog.shape(course, with_price=True)

        assert 1000 <= shaped.students <= 10999
        assert 4.0 <= shaped.rating <= 5.0
        assert 29.99 <= shaped.original_price <= 128.99

    def test_backfill_keeps_stored_values(self, db, make_course):
        course = make_course("Known", students=321, rating=3.5, original_price=10.0)
        shaped = CatalogService(db, backfill=True).shape(course, with_price=True)
        assert (shaped.students, shaped.rating, shaped.original_price) == (321, 3.5, 10.0)

    def test_backfill_never_written_back(self, db, make_course):
        course = make_course("Bare", students=None, rating=None)
        CatalogService(db, backfill=True).shape(course)
        db.refresh(course)
        assert course.students is None
        assert course.rating is None

    def test_price_only_backfilled_on_detail(self, db, make_course):
        course = make_course("Bare", original_price=None)
        assert CatalogService(db, backfill=True).shape(course).original_price is None

    def test_backfill_disabled(self, catalog, make_course):
        course = make_course("Bare", students=None, rating=None)
        shaped = catalog.shape(course, with_price=True)
        assert shaped.students is None
        assert shaped.rating is None
        assert shaped.original_price is None


class TestSingleCourse:
    def test_get_course_by_slug(self, catalog, make_course):
        make_course("Findable", slug="findable")
        assert catalog.get_course("findable").title == "Findable"

    def test_missing_slug(self, catalog):
        assert catalog.get_course("nope") is None

    def test_related_same_category_excluding_self(self, catalog, make_course):
        make_course("Main", slug="main", category="Web Development")
        for i in range(5):
            make_course(f"Sibling {i}", category="Web Development")
        make_course("Other", category="Marketing")

        related = catalog.related_courses("main", limit=4)

        assert len(related) == 4
        assert all(c.category == "Web Development" for c in related)
        assert "main" not in {c.slug for c in related}

    def test_related_for_missing_course(self, catalog):
        assert catalog.related_courses("nope") is None


class TestHomePageHelpers:
    def test_featured_orders_by_rating(self, catalog, make_course):
        make_course("Okay", rating=3.9)
        make_course("Best", rating=4.9)
        make_course("Unrated", rating=None)
        make_course("Good", rating=4.5)

        featured = catalog.featured_courses(limit=3)

        assert [c.title for c in featured] == ["Best", "Good", "Okay"]

    def test_suggestions_need_two_characters(self, catalog, make_course):
        make_course("JavaScript Basics")
        assert catalog.suggestions("j") == []
        assert catalog.suggestions(None) == []
        assert [s.title for s in catalog.suggestions("ja")] == ["JavaScript Basics"]

    def test_suggestions_respect_limit(self, catalog, mixed_catalog):
        assert len(catalog.suggestions("course", limit=5)) == 5

    def test_stats_use_stored_values(self, catalog, make_course):
        make_course("A", category="Web Development", students=100, rating=4.0)
        make_course("B", category="Data Science", students=50, rating=5.0)
        make_course("C", category="Data Science", students=None, rating=None)

        stats = catalog.stats()

        assert stats.total_courses == 3
        assert stats.total_students == 150
        assert stats.average_rating == 4.5
        assert stats.categories == 2

    def test_stats_empty_catalog(self, catalog):
        stats = catalog.stats()
        assert stats.total_courses == 0
        assert stats.average_rating == 0.0


class TestCategories:
    def test_counts_and_slugs(self, catalog, mixed_catalog):
        categories = catalog.list_categories()

        assert [(c.name, c.slug, c.course_count) for c in categories] == [
            ("Data Science", "data-science", 3),
            ("Web Development", "web-development", 12),
        ]
        assert [c.id for c in categories] == [1, 2]
