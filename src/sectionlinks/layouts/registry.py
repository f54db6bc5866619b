"""Layout registry: picks the link decorator for a course format and page."""

from __future__ import annotations

import logging

from sectionlinks.core.errors import ConfigError
from sectionlinks.core.interfaces import LinkDecorator
from sectionlinks.core.models import CourseFormat, FilterOptions, LayoutRule
from sectionlinks.layouts.decorators import PlainLinkDecorator, default_decorators

logger = logging.getLogger(__name__)

DEFAULT_DECORATOR = PlainLinkDecorator.name


class LayoutRegistry:
    """Routes (course format, page hints) to a LinkDecorator.

    Rules are tried in registration order; the first matching rule wins.
    Pages matched by no rule get the plain decorator.
    """

    def __init__(
        self,
        rules: list[LayoutRule] | None = None,
        decorators: list[LinkDecorator] | None = None,
    ) -> None:
        self._decorators: dict[str, LinkDecorator] = {}
        for decorator in decorators if decorators is not None else default_decorators():
            self.register_decorator(decorator)
        self._rules: list[LayoutRule] = []
        for rule in rules or []:
            self.add_rule(rule)

    def register_decorator(self, decorator: LinkDecorator) -> None:
        """Make a decorator available to rules under its name."""
        if not decorator.name:
            raise ConfigError(f"Link decorator {type(decorator).__name__} has no name")
        self._decorators[decorator.name] = decorator

    def add_rule(self, rule: LayoutRule) -> None:
        """Register a layout rule."""
        if rule.decorator not in self._decorators:
            raise ConfigError(
                f"Layout rule for format {rule.format!r} uses unknown decorator "
                f"{rule.decorator!r}"
            )
        self._rules.append(rule)

    def get(self, name: str) -> LinkDecorator:
        """Look up a decorator by name."""
        try:
            return self._decorators[name]
        except KeyError:
            raise ConfigError(f"Unknown link decorator: {name!r}") from None

    def select(self, course_format: CourseFormat, options: FilterOptions) -> LinkDecorator:
        """Pick the decorator for a page."""
        for rule in self._rules:
            if _rule_matches(rule, course_format, options):
                logger.debug(
                    "Layout rule for format %s selected decorator %s",
                    rule.format,
                    rule.decorator,
                )
                return self._decorators[rule.decorator]
        return self.get(DEFAULT_DECORATOR)


def _rule_matches(rule: LayoutRule, course_format: CourseFormat, options: FilterOptions) -> bool:
    """Evaluate a rule's conditions; all must hold."""
    if not rule.enabled:
        return False
    if rule.format != course_format.name:
        return False
    if rule.skip_when_editing and options.user_is_editing:
        return False
    if rule.format_option and not course_format.options.get(rule.format_option):
        return False
    if rule.body_id_contains and rule.body_id_contains not in options.page_body_id:
        return False
    return True
