"""Shared test fixtures for sectionlinks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from sectionlinks.adapters.phrase_replacer import SegmentPhraseReplacer
from sectionlinks.adapters.session import StaticSession
from sectionlinks.cache import FilterCache
from sectionlinks.core.errors import CourseNotFoundError
from sectionlinks.core.interfaces import CourseDataPort
from sectionlinks.core.models import (
    ContextLevel,
    CourseFormat,
    RenderContext,
    SectionInfo,
)
from sectionlinks.filter import SectionLinkFilter
from sectionlinks.layouts.decorators import default_layout_rules
from sectionlinks.layouts.registry import LayoutRegistry

BASE_URL = "https://lms.test"


def section_url(section_id: int) -> str:
    """URL FakeCourseData hands out for a section."""
    return f"{BASE_URL}/course/section.php?id={section_id}"


def make_sections(*names: str, first_id: int = 101, hidden: tuple[str, ...] = ()) -> list[SectionInfo]:
    """Create a general section 0 followed by numbered sections with the given names."""
    sections = [SectionInfo(id=first_id - 1, number=0, name="General")]
    for offset, name in enumerate(names):
        sections.append(
            SectionInfo(
                id=first_id + offset,
                number=offset + 1,
                name=name,
                visible=name not in hidden,
            )
        )
    return sections


class FakeCourseData(CourseDataPort):
    """In-memory CourseDataPort."""

    def __init__(
        self,
        courses: dict[int, list[SectionInfo]] | None = None,
        formats: dict[int, CourseFormat] | None = None,
    ) -> None:
        self.courses = courses or {}
        self.formats = formats or {}

    def _sections(self, course_id: int) -> dict[int, SectionInfo]:
        if course_id not in self.courses:
            raise CourseNotFoundError(course_id)
        return {s.number: s for s in self.courses[course_id]}

    def resolve_course_id(self, context: RenderContext) -> int | None:
        if context.level == ContextLevel.SYSTEM:
            return None
        course_id = context.instance_id if context.level == ContextLevel.COURSE else context.course_id
        return course_id if course_id in self.courses else None

    def get_last_section_number(self, course_id: int) -> int:
        return max(self._sections(course_id), default=0)

    def get_section_info(self, course_id: int, number: int) -> SectionInfo | None:
        return self._sections(course_id).get(number)

    def get_section_display_name(self, course_id: int, number: int) -> str:
        return self._sections(course_id)[number].name

    def get_section_url(self, course_id: int, number: int) -> str:
        return section_url(self._sections(course_id)[number].id)

    def get_course_format(self, course_id: int) -> CourseFormat:
        self._sections(course_id)
        return self.formats.get(course_id, CourseFormat(name="topics"))


@pytest.fixture()
def course_data() -> FakeCourseData:
    """Course 1 with a typical mix of sections; course 2 without visible ones."""
    return FakeCourseData(
        courses={
            1: make_sections(
                "Week 1",
                "Week 10",
                "Introduction",
                "R&D Section",
                "Hidden topic",
                hidden=("Hidden topic",),
            ),
            2: make_sections("Draft", first_id=201, hidden=("Draft",)),
        }
    )


@pytest.fixture()
def cache() -> FilterCache:
    """A fresh pattern cache."""
    return FilterCache()


def make_filter(
    course_data: CourseDataPort,
    cache: FilterCache | None = None,
    user_id: int = 7,
    layouts: LayoutRegistry | None = None,
    **kwargs: Any,
) -> SectionLinkFilter:
    """Create a filter wired to the real replacer and default layouts."""
    return SectionLinkFilter(
        course_data=course_data,
        session=StaticSession(user_id),
        replacer=SegmentPhraseReplacer(),
        layouts=layouts or LayoutRegistry(rules=default_layout_rules()),
        cache=cache or FilterCache(),
        **kwargs,
    )


def write_yaml(path: Path, data: dict[str, Any]) -> Path:
    """Dump data to a YAML file and return its path."""
    path.write_text(yaml.dump(data))
    return path


@pytest.fixture()
def catalog_data() -> dict[str, Any]:
    """Catalog document for the YAML course store."""
    return {
        "courses": [
            {
                "id": 5,
                "format": "topics",
                "sections": [
                    {"number": 0, "id": 50, "name": "General"},
                    {"number": 1, "id": 51, "name": "Getting started"},
                    {"number": 2, "id": 52, "name": ""},
                    {"number": 3, "id": 53, "name": "Advanced topics"},
                    {"number": 4, "id": 54, "name": "Archive", "visible": False},
                ],
            },
            {
                "id": 6,
                "format": "grid",
                "format_options": {"popup": True},
                "sections": [
                    {"number": 0, "id": 60, "name": "General"},
                    {"number": 1, "id": 61, "name": "Gallery"},
                ],
            },
        ]
    }


@pytest.fixture()
def catalog_file(tmp_path: Path, catalog_data: dict[str, Any]) -> Path:
    """Catalog written to a temp file."""
    return write_yaml(tmp_path / "catalog.yaml", catalog_data)


@pytest.fixture()
def config_file(tmp_path: Path, catalog_file: Path) -> Path:
    """Config file pointing at the temp catalog."""
    return write_yaml(
        tmp_path / "config.yaml",
        {"catalog_path": str(catalog_file), "base_url": BASE_URL},
    )
