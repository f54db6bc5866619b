"""Domain models for sectionlinks."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContextLevel(str, Enum):
    """Scope of the page being rendered."""

    SYSTEM = "system"
    COURSE = "course"
    MODULE = "module"


class RenderContext(BaseModel):
    """Rendering context handed over by the host for each filter call."""

    level: ContextLevel = Field(description="Scope of the rendered page")
    instance_id: int = Field(description="Course id, or section/module id for module level")
    course_id: int | None = Field(default=None, description="Owning course, when known")


class FilterOptions(BaseModel):
    """Host display hints consumed by layout selection."""

    model_config = ConfigDict(extra="allow")

    page_body_id: str = Field(default="", description="Body id of the rendered page")
    user_is_editing: bool = Field(default=False, description="Whether editing mode is on")


class CourseFormat(BaseModel):
    """Course format name and its format options."""

    name: str = Field(default="topics", description="Format plugin name")
    options: dict[str, Any] = Field(default_factory=dict, description="Format options")


class SectionInfo(BaseModel):
    """A raw section row as stored by the course data source."""

    id: int = Field(description="Section id, unique across courses")
    number: int = Field(description="Position of the section within the course")
    name: str = Field(default="", description="Authored name, empty for the default name")
    visible: bool = Field(default=True, description="Whether the section is shown")


class SectionEntry(BaseModel):
    """A visible section ready to be linked."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Section id")
    name: str = Field(description="Display name")
    url: str = Field(description="Link target")


class LinkPattern(BaseModel):
    """A phrase to find in text and the markup to wrap it in."""

    model_config = ConfigDict(frozen=True)

    match: str = Field(description="Text to look for")
    open_markup: str = Field(description="Markup inserted before the match")
    close_markup: str = Field(default="</a>", description="Markup inserted after the match")
    case_sensitive: bool = Field(default=True, description="Match case exactly")
    full_match: bool = Field(default=True, description="Require word boundaries around the match")


class LayoutRule(BaseModel):
    """Selects a link decorator for pages of a given course format."""

    format: str = Field(description="Course format name to match")
    decorator: str = Field(description="Name of the link decorator to use")
    body_id_contains: str | None = Field(
        default=None, description="Only match pages whose body id contains this"
    )
    format_option: str | None = Field(
        default=None, description="Only match when this format option is truthy"
    )
    skip_when_editing: bool = Field(default=False, description="Never match in editing mode")
    enabled: bool = Field(default=True, description="Whether the rule is active")


class FilterOutcome(str, Enum):
    """How a filter call ended."""

    NO_COURSE_CONTEXT = "no_course_context"
    EMPTY_SECTION_SET = "empty_section_set"
    SUPPRESSED = "suppressed"
    NO_PATTERNS = "no_patterns"
    APPLIED = "applied"
