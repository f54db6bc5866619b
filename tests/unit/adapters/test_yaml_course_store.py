"""Tests for the YAML course catalog adapter."""

from __future__ import annotations

from pathlib import Path

import pytest

from sectionlinks.adapters.session import StaticSession
from sectionlinks.adapters.yaml_course_store import YamlCourseStore
from sectionlinks.core.errors import CourseDataError, CourseNotFoundError
from sectionlinks.core.models import ContextLevel, RenderContext


@pytest.fixture()
def store(catalog_file: Path) -> YamlCourseStore:
    return YamlCourseStore(str(catalog_file), base_url="https://lms.test/")


class TestLoading:
    """Tests for reading the catalog file."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CourseDataError, match="Cannot read course catalog"):
            YamlCourseStore(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text("courses: [unclosed\n")
        with pytest.raises(CourseDataError, match="Invalid YAML"):
            YamlCourseStore(str(path))

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text("- a list\n")
        with pytest.raises(CourseDataError, match="must contain a YAML mapping"):
            YamlCourseStore(str(path))

    def test_invalid_course_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text("courses:\n  - format: topics\n")
        with pytest.raises(CourseDataError, match="Invalid course catalog"):
            YamlCourseStore(str(path))

    def test_empty_file_has_no_courses(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text("")
        store = YamlCourseStore(str(path))
        with pytest.raises(CourseNotFoundError):
            store.get_last_section_number(1)


class TestSections:
    """Tests for section lookups."""

    def test_last_section_number(self, store: YamlCourseStore) -> None:
        assert store.get_last_section_number(5) == 4

    def test_unknown_course(self, store: YamlCourseStore) -> None:
        with pytest.raises(CourseNotFoundError) as exc_info:
            store.get_last_section_number(99)
        assert exc_info.value.course_id == 99

    def test_section_info(self, store: YamlCourseStore) -> None:
        info = store.get_section_info(5, 4)
        assert info is not None
        assert info.id == 54
        assert info.visible is False

    def test_missing_section_info(self, store: YamlCourseStore) -> None:
        assert store.get_section_info(5, 10) is None

    def test_display_name(self, store: YamlCourseStore) -> None:
        assert store.get_section_display_name(5, 1) == "Getting started"

    def test_default_display_name_for_topics(self, store: YamlCourseStore) -> None:
        assert store.get_section_display_name(5, 2) == "Topic 2"

    def test_default_display_name_for_other_formats(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "courses:\n"
            "  - id: 1\n"
            "    format: weeks\n"
            "    sections: [{number: 1, id: 11}]\n"
            "  - id: 2\n"
            "    format: social\n"
            "    sections: [{number: 1, id: 21, name: '  '}]\n"
        )
        store = YamlCourseStore(str(path))
        assert store.get_section_display_name(1, 1) == "Week 1"
        assert store.get_section_display_name(2, 1) == "Section 1"

    def test_display_name_missing_section(self, store: YamlCourseStore) -> None:
        with pytest.raises(CourseDataError, match="Section 10 not found in course 5"):
            store.get_section_display_name(5, 10)

    def test_section_url(self, store: YamlCourseStore) -> None:
        assert store.get_section_url(5, 3) == "https://lms.test/course/section.php?id=53"

    def test_section_url_without_base(self, catalog_file: Path) -> None:
        store = YamlCourseStore(str(catalog_file))
        assert store.get_section_url(5, 1) == "/course/section.php?id=51"

    def test_course_format(self, store: YamlCourseStore) -> None:
        course_format = store.get_course_format(6)
        assert course_format.name == "grid"
        assert course_format.options == {"popup": True}


class TestResolveCourseId:
    """Tests for YamlCourseStore.resolve_course_id()."""

    def test_system_context(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.SYSTEM, instance_id=1)
        assert store.resolve_course_id(context) is None

    def test_course_context(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.COURSE, instance_id=5)
        assert store.resolve_course_id(context) == 5

    def test_unknown_course_context(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.COURSE, instance_id=99)
        assert store.resolve_course_id(context) is None

    def test_module_context_with_course(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.MODULE, instance_id=61, course_id=6)
        assert store.resolve_course_id(context) == 6

    def test_module_context_looks_up_section(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.MODULE, instance_id=53)
        assert store.resolve_course_id(context) == 5

    def test_module_context_unknown_section(self, store: YamlCourseStore) -> None:
        context = RenderContext(level=ContextLevel.MODULE, instance_id=999)
        assert store.resolve_course_id(context) is None


class TestStaticSession:
    """Tests for the static session adapter."""

    def test_current_user_id(self) -> None:
        assert StaticSession(42).current_user_id() == 42
