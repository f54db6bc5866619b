"""Built-in link decorators for the course layouts hosts commonly use."""

from __future__ import annotations

from sectionlinks.core.interfaces import LinkDecorator
from sectionlinks.core.markup import start_tag
from sectionlinks.core.models import LayoutRule, SectionEntry

AUTOLINK_CLASS = "autolink"

# Re-triggers the click once an already open grid popup has closed
_GRID_POPUP_ONCLICK = (
    "if(jQuery('#gridPopup.show').length) {"
    " let a = this;"
    " setTimeout(function() { jQuery(a).trigger('click'); }, 500);"
    " }"
)


class PlainLinkDecorator(LinkDecorator):
    """Ordinary anchor to the section page."""

    name = "plain"

    def decorate(self, entry: SectionEntry, title: str, course_id: int) -> str:
        return start_tag("a", {"class": AUTOLINK_CLASS, "title": title, "href": entry.url})


class GridPopupDecorator(LinkDecorator):
    """Anchor opening the section in the grid format's modal popup."""

    name = "grid_popup"

    def decorate(self, entry: SectionEntry, title: str, course_id: int) -> str:
        return start_tag(
            "a",
            {
                "class": AUTOLINK_CLASS,
                "title": title,
                "data-toggle": "modal",
                "data-target": "#gridPopup",
                "data-section": entry.id,
                "onclick": _GRID_POPUP_ONCLICK,
                "href": entry.url,
            },
        )


class ButtonsDecorator(LinkDecorator):
    """Anchor switching the visible section on the buttons format course page."""

    name = "buttons"

    def decorate(self, entry: SectionEntry, title: str, course_id: int) -> str:
        return start_tag(
            "a",
            {
                "class": AUTOLINK_CLASS,
                "title": title,
                "onclick": f"M.format_buttons.show({entry.id},{course_id})",
                "href": entry.url,
            },
        )


class NoLinkDecorator(PlainLinkDecorator):
    """Layout that must not be linked at all; the filter passes text through."""

    name = "nolink"

    @property
    def suppresses_linking(self) -> bool:
        return True


def default_decorators() -> list[LinkDecorator]:
    """Instances of every built-in decorator."""
    return [PlainLinkDecorator(), GridPopupDecorator(), ButtonsDecorator(), NoLinkDecorator()]


def default_layout_rules() -> list[LayoutRule]:
    """Rules for the grid and buttons course formats."""
    return [
        LayoutRule(
            format="grid",
            decorator="grid_popup",
            format_option="popup",
            skip_when_editing=True,
        ),
        LayoutRule(
            format="buttons",
            decorator="buttons",
            body_id_contains="page-course-view",
        ),
    ]
