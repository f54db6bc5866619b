"""sectionlinks: automatic linking of course section names in HTML text."""

__version__ = "0.1.0"
