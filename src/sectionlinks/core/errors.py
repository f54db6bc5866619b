"""Error hierarchy for sectionlinks.

Filtering itself never raises for missing data: an unresolvable course, a
course without visible sections or a section without a linkable name all
pass the text through unchanged. These errors cover loading configuration
and course data.
"""

from __future__ import annotations


class SectionLinksError(Exception):
    """Base exception for all sectionlinks errors."""

    pass


class ConfigError(SectionLinksError):
    """Configuration loading or validation error."""

    pass


class CourseDataError(SectionLinksError):
    """Course catalog could not be read or is malformed."""

    pass


class CourseNotFoundError(CourseDataError):
    """Requested course id does not exist in the course data source."""

    def __init__(self, course_id: int) -> None:
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id
