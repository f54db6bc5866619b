"""Section index: the visible sections of a course, longest name first."""

from __future__ import annotations

import locale
import logging
from collections.abc import Iterable

from sectionlinks.core.errors import CourseNotFoundError
from sectionlinks.core.interfaces import CourseDataPort
from sectionlinks.core.models import SectionEntry

logger = logging.getLogger(__name__)

# Section 0 is the general section and is never linked
_FIRST_SECTION = 1


class SectionIndexBuilder:
    """Enumerates the linkable sections of a course."""

    def __init__(self, course_data: CourseDataPort) -> None:
        self._course_data = course_data

    def build(self, course_id: int) -> list[SectionEntry]:
        """List visible sections, ordered for longest-match-first linking.

        Returns an empty list when the course does not exist.
        """
        try:
            last_number = self._course_data.get_last_section_number(course_id)
        except CourseNotFoundError:
            logger.warning("Course %d not found, no sections to link", course_id)
            return []

        entries = []
        for number in range(_FIRST_SECTION, last_number + 1):
            info = self._course_data.get_section_info(course_id, number)
            if info is None or not info.visible:
                continue
            entries.append(
                SectionEntry(
                    id=info.id,
                    name=self._course_data.get_section_display_name(course_id, number),
                    url=self._course_data.get_section_url(course_id, number),
                )
            )

        logger.debug("Course %d has %d visible sections", course_id, len(entries))
        return sort_by_name_length(entries)


def sort_by_name_length(entries: Iterable[SectionEntry]) -> list[SectionEntry]:
    """Sort longest names first, so "Week 10" is tried before "Week 1".

    Names of equal length are ordered by the current locale's collation.
    """
    return sorted(entries, key=lambda entry: (-len(entry.name), locale.strxfrm(entry.name)))
