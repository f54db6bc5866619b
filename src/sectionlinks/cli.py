"""CLI entry point for sectionlinks."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import click

from sectionlinks import __version__

if TYPE_CHECKING:
    from sectionlinks.container import Container


@click.group()
@click.version_option(version=__version__, prog_name="sectionlinks")
def main() -> None:
    """Sectionlinks: link course section names in HTML text."""
    pass


@main.command("filter")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Path to config file (default: ~/.sectionlinks/config.yaml)",
)
@click.option("--course", "course_id", type=int, required=True, help="Course id")
@click.option("--user", "user_id", type=int, default=0, show_default=True, help="Viewer id")
@click.option(
    "--section",
    "section_id",
    type=int,
    default=None,
    help="Section being rendered; its own name is not linked",
)
@click.option("--body-id", default="", help="Body id of the page being rendered")
@click.option("--editing", is_flag=True, help="Render as if editing mode were on")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)
@click.argument("input_file", type=click.File("r"), default="-")
def filter_command(
    config_path: str | None,
    course_id: int,
    user_id: int,
    section_id: int | None,
    body_id: str,
    editing: bool,
    verbose: bool,
    input_file: TextIO,
) -> None:
    """Link section names in an HTML file (or stdin) and print the result."""
    from sectionlinks.core.models import ContextLevel, FilterOptions, RenderContext

    container = _load_container(config_path, verbose, user_id)
    link_filter = container.create_filter()

    if section_id is not None:
        context = RenderContext(
            level=ContextLevel.MODULE, instance_id=section_id, course_id=course_id
        )
    else:
        context = RenderContext(level=ContextLevel.COURSE, instance_id=course_id)

    options = FilterOptions(page_body_id=body_id, user_is_editing=editing)
    click.echo(link_filter.filter(input_file.read(), context, options), nl=False)


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Path to config file",
)
@click.option("--course", "course_id", type=int, required=True, help="Course id")
def sections(config_path: str | None, course_id: int) -> None:
    """Show the linkable sections of a course, in matching order."""
    from sectionlinks.index import SectionIndexBuilder

    container = _load_container(config_path, verbose=False)
    entries = SectionIndexBuilder(container.course_data).build(course_id)

    click.echo(f"Sections of course {course_id}")
    click.echo("=" * 40)

    if not entries:
        click.echo("  no visible sections")
    for entry in entries:
        click.echo(f"  {entry.id}: {entry.name} -> {entry.url}")


def _load_container(config_path: str | None, verbose: bool, user_id: int = 0) -> Container:
    """Load config and build the container, exiting on failure."""
    from sectionlinks.config import load_config
    from sectionlinks.container import Container
    from sectionlinks.core.errors import SectionLinksError

    try:
        config = load_config(config_path)
    except Exception as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    _setup_logging(verbose, config.log_level)

    try:
        return Container.create_default(config, user_id=user_id)
    except SectionLinksError as e:
        click.echo(f"Error loading course data: {e}", err=True)
        sys.exit(1)


def _setup_logging(verbose: bool, level_name: str = "INFO") -> None:
    """Configure logging to stderr so filtered output stays clean."""
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
