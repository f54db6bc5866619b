"""Dependency injection container for sectionlinks."""

from __future__ import annotations

from dataclasses import dataclass

from sectionlinks.cache import FilterCache
from sectionlinks.config import SectionLinksConfig
from sectionlinks.core.interfaces import CourseDataPort, PhraseReplacerPort, SessionPort
from sectionlinks.filter import SectionLinkFilter
from sectionlinks.layouts.registry import LayoutRegistry


@dataclass
class Container:
    """DI container holding all ports, adapters and the shared cache."""

    config: SectionLinksConfig
    course_data: CourseDataPort
    session: SessionPort
    replacer: PhraseReplacerPort
    layouts: LayoutRegistry
    cache: FilterCache

    def create_filter(self) -> SectionLinkFilter:
        """Build a filter wired to this container's ports and cache."""
        return SectionLinkFilter(
            course_data=self.course_data,
            session=self.session,
            replacer=self.replacer,
            layouts=self.layouts,
            cache=self.cache,
            case_sensitive=self.config.matching.case_sensitive,
            full_match=self.config.matching.full_match,
        )

    @staticmethod
    def create_default(config: SectionLinksConfig, user_id: int = 0) -> Container:
        """Create a container with production adapters."""
        from sectionlinks.adapters.phrase_replacer import SegmentPhraseReplacer
        from sectionlinks.adapters.session import StaticSession
        from sectionlinks.adapters.yaml_course_store import YamlCourseStore

        return Container(
            config=config,
            course_data=YamlCourseStore(config.catalog_path, base_url=config.base_url),
            session=StaticSession(user_id),
            replacer=SegmentPhraseReplacer(),
            layouts=LayoutRegistry(rules=config.layouts),
            cache=FilterCache(),
        )

    @staticmethod
    def create_for_testing(
        config: SectionLinksConfig | None = None,
        course_data: CourseDataPort | None = None,
        session: SessionPort | None = None,
        replacer: PhraseReplacerPort | None = None,
        layouts: LayoutRegistry | None = None,
        cache: FilterCache | None = None,
    ) -> Container:
        """Create a container with test/mock adapters.

        All parameters are optional. The phrase replacer defaults to the real
        one since it has no external state; course data and session are stubs
        that raise if used without being replaced.
        """
        from sectionlinks.adapters.phrase_replacer import SegmentPhraseReplacer

        if config is None:
            config = SectionLinksConfig(catalog_path="/tmp/test/catalog.yaml")

        class StubCourseData(CourseDataPort):
            def resolve_course_id(self, context: object) -> None:  # type: ignore[override]
                raise NotImplementedError("Provide a mock course_data")

            def get_last_section_number(self, course_id: int) -> int:
                raise NotImplementedError("Provide a mock course_data")

            def get_section_info(self, course_id: int, number: int) -> None:
                raise NotImplementedError("Provide a mock course_data")

            def get_section_display_name(self, course_id: int, number: int) -> str:
                raise NotImplementedError("Provide a mock course_data")

            def get_section_url(self, course_id: int, number: int) -> str:
                raise NotImplementedError("Provide a mock course_data")

            def get_course_format(self, course_id: int) -> object:  # type: ignore[override]
                raise NotImplementedError("Provide a mock course_data")

        class StubSession(SessionPort):
            def current_user_id(self) -> int:
                raise NotImplementedError("Provide a mock session")

        return Container(
            config=config,
            course_data=course_data or StubCourseData(),
            session=session or StubSession(),
            replacer=replacer or SegmentPhraseReplacer(),
            layouts=layouts or LayoutRegistry(rules=config.layouts),
            cache=cache or FilterCache(),
        )
