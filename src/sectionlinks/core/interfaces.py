"""Port interfaces for sectionlinks (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from sectionlinks.core.models import (
    CourseFormat,
    LinkPattern,
    RenderContext,
    SectionEntry,
    SectionInfo,
)


class CourseDataPort(ABC):
    """Port for reading courses and their sections from the host."""

    @abstractmethod
    def resolve_course_id(self, context: RenderContext) -> int | None:
        """Map a rendering context to its owning course.

        Args:
            context: The context the text is rendered in.

        Returns:
            The course id, or None if the context is not inside a course.
        """

    @abstractmethod
    def get_last_section_number(self, course_id: int) -> int:
        """Get the number of the last section in a course.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """

    @abstractmethod
    def get_section_info(self, course_id: int, number: int) -> SectionInfo | None:
        """Get the section at a given position, or None if there is none."""

    @abstractmethod
    def get_section_display_name(self, course_id: int, number: int) -> str:
        """Get the name shown for a section, falling back to the format default."""

    @abstractmethod
    def get_section_url(self, course_id: int, number: int) -> str:
        """Get the URL of the page showing a section."""

    @abstractmethod
    def get_course_format(self, course_id: int) -> CourseFormat:
        """Get the format the course is displayed with."""


class SessionPort(ABC):
    """Port for identifying the current viewer."""

    @abstractmethod
    def current_user_id(self) -> int:
        """Return the id of the user the text is rendered for."""


class PhraseReplacerPort(ABC):
    """Port for markup-aware multi-pattern substitution."""

    @abstractmethod
    def replace(self, text: str, patterns: Sequence[LinkPattern]) -> str:
        """Wrap the first occurrence of each pattern's match text.

        Patterns are tried in the given order. Text inside existing markup,
        and inside markup inserted by an earlier pattern, is never matched.

        Args:
            text: HTML text to filter.
            patterns: Patterns in priority order.

        Returns:
            The filtered text.
        """


class LinkDecorator(ABC):
    """Strategy producing the opening anchor markup for a section link."""

    name: str = ""

    @property
    def suppresses_linking(self) -> bool:
        """Whether this layout must not receive any links at all."""
        return False

    @abstractmethod
    def decorate(self, entry: SectionEntry, title: str, course_id: int) -> str:
        """Build the opening tag wrapping the section name.

        Args:
            entry: The section being linked.
            title: Plain-text tooltip for the link.
            course_id: Course the section belongs to.
        """
