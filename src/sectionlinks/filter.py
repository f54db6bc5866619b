"""Section name filter: links section names found in rendered text."""

from __future__ import annotations

import logging

from sectionlinks.cache import FilterCache, PatternTable
from sectionlinks.core.errors import CourseNotFoundError
from sectionlinks.core.interfaces import (
    CourseDataPort,
    LinkDecorator,
    PhraseReplacerPort,
    SessionPort,
)
from sectionlinks.core.markup import end_tag, escape, strip_tags
from sectionlinks.core.models import (
    ContextLevel,
    FilterOptions,
    FilterOutcome,
    LinkPattern,
    RenderContext,
)
from sectionlinks.index import SectionIndexBuilder
from sectionlinks.layouts.registry import LayoutRegistry

logger = logging.getLogger(__name__)

ENCODED_KEY_SUFFIX = "-e"


class SectionLinkFilter:
    """Rewrites the first occurrence of each section name into a link.

    Patterns for a course are built once per (course, user, layout) and kept
    in the shared FilterCache. Names are linked longest first. When the text
    is rendered inside a section, that section's own name is left alone.
    """

    def __init__(
        self,
        course_data: CourseDataPort,
        session: SessionPort,
        replacer: PhraseReplacerPort,
        layouts: LayoutRegistry,
        cache: FilterCache,
        builder: SectionIndexBuilder | None = None,
        case_sensitive: bool = True,
        full_match: bool = True,
    ) -> None:
        self._course_data = course_data
        self._session = session
        self._replacer = replacer
        self._layouts = layouts
        self._cache = cache
        self._builder = builder or SectionIndexBuilder(course_data)
        self._case_sensitive = case_sensitive
        self._full_match = full_match

    @property
    def cache(self) -> FilterCache:
        """The pattern cache this filter reads and fills."""
        return self._cache

    def filter(self, text: str, context: RenderContext, options: FilterOptions | None = None) -> str:
        """Filter text rendered in a host context for the current user."""
        course_id = self._course_data.resolve_course_id(context)
        if course_id is None:
            _log_outcome(FilterOutcome.NO_COURSE_CONTEXT, context.instance_id)
            return text

        section_id = context.instance_id if context.level == ContextLevel.MODULE else None
        return self.filter_text(
            text,
            course_id,
            self._session.current_user_id(),
            section_id=section_id,
            options=options,
        )

    def filter_text(
        self,
        text: str,
        course_id: int,
        user_id: int,
        section_id: int | None = None,
        options: FilterOptions | None = None,
    ) -> str:
        """Filter text for a known course and user.

        An unknown course or a layout that suppresses linking returns the
        text before the cache is consulted, so the cached course, user and
        pattern table are left untouched on those paths.

        Args:
            text: HTML text to filter.
            course_id: Course whose section names are linked.
            user_id: Viewer the text is rendered for.
            section_id: Section being rendered, whose name is not linked.
            options: Host display hints used to pick the link layout.

        Returns:
            The text with section names linked, or unchanged.
        """
        try:
            course_format = self._course_data.get_course_format(course_id)
        except CourseNotFoundError:
            _log_outcome(FilterOutcome.NO_COURSE_CONTEXT, course_id)
            return text

        decorator = self._layouts.select(course_format, options or FilterOptions())
        if decorator.suppresses_linking:
            _log_outcome(FilterOutcome.SUPPRESSED, course_id)
            return text

        patterns = self._cache.get_or_build(
            course_id,
            user_id,
            decorator.name,
            lambda: self._build_patterns(course_id, decorator),
        )
        if not patterns:
            _log_outcome(FilterOutcome.EMPTY_SECTION_SET, course_id)
            return text

        active = exclude_section(patterns, section_id)
        if not active:
            _log_outcome(FilterOutcome.NO_PATTERNS, course_id)
            return text

        _log_outcome(FilterOutcome.APPLIED, course_id)
        return self._replacer.replace(text, list(active.values()))

    def _build_patterns(self, course_id: int, decorator: LinkDecorator) -> PatternTable:
        """Turn the course's section index into link patterns."""
        table: PatternTable = {}
        for entry in self._builder.build(course_id):
            plain_title = strip_tags(entry.name).strip()
            if not escape(plain_title):
                logger.debug("Section %d has no linkable name", entry.id)
                continue

            current_name = entry.name.strip()
            encoded_name = escape(current_name)
            open_markup = decorator.decorate(entry, plain_title, course_id)

            key = str(entry.id)
            table[key] = self._pattern(current_name, open_markup)
            if encoded_name != current_name:
                # Source text may carry the name entity-encoded (&amp; &quot; &lt; &gt;)
                table[key + ENCODED_KEY_SUFFIX] = self._pattern(encoded_name, open_markup)
        return table

    def _pattern(self, match: str, open_markup: str) -> LinkPattern:
        return LinkPattern(
            match=match,
            open_markup=open_markup,
            close_markup=end_tag("a"),
            case_sensitive=self._case_sensitive,
            full_match=self._full_match,
        )


def exclude_section(patterns: PatternTable, section_id: int | None) -> PatternTable:
    """Drop both patterns of the section being rendered, if it is linked."""
    if section_id is None:
        return patterns
    key = str(section_id)
    if key not in patterns:
        return patterns
    return {k: p for k, p in patterns.items() if k not in (key, key + ENCODED_KEY_SUFFIX)}


def _log_outcome(outcome: FilterOutcome, instance_id: int) -> None:
    logger.debug("Filter outcome for %d: %s", instance_id, outcome.value)
