"""YAML course catalog implementing CourseDataPort.

Catalog layout::

    courses:
      - id: 2
        format: weeks
        format_options: {popup: true}
        sections:
          - {number: 0, id: 20, name: General}
          - {number: 1, id: 21, name: "Getting started"}
          - {number: 2, id: 22, name: "", visible: false}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import yaml
from pydantic import BaseModel, Field, ValidationError

from sectionlinks.core.errors import CourseDataError, CourseNotFoundError
from sectionlinks.core.interfaces import CourseDataPort
from sectionlinks.core.models import ContextLevel, CourseFormat, RenderContext, SectionInfo

logger = logging.getLogger(__name__)

# Names shown for sections that have no authored name, per course format
_DEFAULT_SECTION_NAMES = {
    "topics": "Topic {number}",
    "weeks": "Week {number}",
}
_FALLBACK_SECTION_NAME = "Section {number}"


class CatalogCourse(BaseModel):
    """A course entry in the catalog file."""

    id: int
    format: str = Field(default="topics")
    format_options: dict[str, Any] = Field(default_factory=dict)
    sections: list[SectionInfo] = Field(default_factory=list)


class Catalog(BaseModel):
    """Top-level catalog document."""

    courses: list[CatalogCourse] = Field(default_factory=list)


class YamlCourseStore(CourseDataPort):
    """Course data read once from a YAML catalog file."""

    def __init__(self, catalog_path: str, base_url: str = "") -> None:
        self.catalog_path = catalog_path
        self.base_url = base_url.rstrip("/")
        self._courses: dict[int, CatalogCourse] = {}
        self._sections: dict[int, dict[int, SectionInfo]] = {}
        self._section_courses: dict[int, int] = {}
        self._load()

    def _load(self) -> None:
        """Read and index the catalog."""
        path = Path(self.catalog_path).expanduser()
        try:
            raw = path.read_text()
        except OSError as e:
            raise CourseDataError(f"Cannot read course catalog: {e}") from e

        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as e:
            raise CourseDataError(f"Invalid YAML in course catalog: {e}") from e

        if not isinstance(data, dict):
            raise CourseDataError("Course catalog must contain a YAML mapping")

        try:
            catalog = Catalog(**data)
        except ValidationError as e:
            raise CourseDataError(f"Invalid course catalog: {e}") from e

        for course in catalog.courses:
            self._courses[course.id] = course
            self._sections[course.id] = {s.number: s for s in course.sections}
            for section in course.sections:
                self._section_courses[section.id] = course.id

        logger.debug("Loaded %d courses from %s", len(self._courses), path)

    def _course(self, course_id: int) -> CatalogCourse:
        course = self._courses.get(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    def _section(self, course_id: int, number: int) -> SectionInfo:
        section = self.get_section_info(course_id, number)
        if section is None:
            raise CourseDataError(f"Section {number} not found in course {course_id}")
        return section

    def resolve_course_id(self, context: RenderContext) -> int | None:
        """Find the course a rendering context belongs to."""
        if context.level == ContextLevel.SYSTEM:
            return None

        if context.level == ContextLevel.COURSE:
            course_id: int | None = context.instance_id
        elif context.course_id is not None:
            course_id = context.course_id
        else:
            course_id = self._section_courses.get(context.instance_id)

        if course_id is None or course_id not in self._courses:
            return None
        return course_id

    def get_last_section_number(self, course_id: int) -> int:
        """Highest section number in the course, 0 when it has no sections."""
        self._course(course_id)
        return max(self._sections[course_id], default=0)

    def get_section_info(self, course_id: int, number: int) -> SectionInfo | None:
        """Section at the given position, or None."""
        self._course(course_id)
        return self._sections[course_id].get(number)

    def get_section_display_name(self, course_id: int, number: int) -> str:
        """Authored name, or the course format's default name."""
        section = self._section(course_id, number)
        if section.name.strip():
            return section.name

        course_format = self._course(course_id).format
        template = _DEFAULT_SECTION_NAMES.get(course_format, _FALLBACK_SECTION_NAME)
        return template.format(number=number)

    def get_section_url(self, course_id: int, number: int) -> str:
        """URL of the single-section page."""
        section = self._section(course_id, number)
        return f"{self.base_url}/course/section.php?{urlencode({'id': section.id})}"

    def get_course_format(self, course_id: int) -> CourseFormat:
        """Format name and options of the course."""
        course = self._course(course_id)
        return CourseFormat(name=course.format, options=course.format_options)
