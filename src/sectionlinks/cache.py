"""Pattern table cache keyed on the rendering course and viewer."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from sectionlinks.core.models import LinkPattern

logger = logging.getLogger(__name__)

PatternTable = dict[str, LinkPattern]
"""Link patterns keyed by section id, or section id + "-e" for the encoded name."""


class FilterCache:
    """Holds the pattern table built for the last (course, user, layout).

    One instance is created per process and shared by every filter call.
    A request for a different course, user or layout drops the table; the
    next build then replaces it. All reads and writes happen under a
    re-entrant lock, so concurrent callers never see a half-built table.
    """

    def __init__(self) -> None:
        self.course_id: int | None = None
        self.user_id: int | None = None
        self.layout: str | None = None
        self.patterns: PatternTable | None = None
        self.hits = 0
        self.misses = 0
        self.builds = 0
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding the cached state."""
        return self._lock

    def invalidate(self) -> None:
        """Drop the pattern table; the next lookup rebuilds it."""
        with self._lock:
            if self.patterns is not None:
                logger.debug("Invalidating pattern table for course %s", self.course_id)
            self.patterns = None

    def get_or_build(
        self,
        course_id: int,
        user_id: int,
        layout: str,
        build: Callable[[], PatternTable],
    ) -> PatternTable:
        """Return the pattern table for a context, building it on a miss.

        The cached key is updated even when the build is still pending, so
        the next call for the same context is a hit. An empty table is a
        valid cached result.

        Returns:
            A copy of the table; callers may drop entries from it freely.
        """
        with self._lock:
            if (course_id, user_id, layout) != (self.course_id, self.user_id, self.layout):
                self.invalidate()
            self.course_id = course_id
            self.user_id = user_id
            self.layout = layout

            if self.patterns is None:
                self.misses += 1
                self.patterns = build()
                self.builds += 1
                logger.info(
                    "Built %d link patterns for course %d, user %d (%s layout)",
                    len(self.patterns),
                    course_id,
                    user_id,
                    layout,
                )
            else:
                self.hits += 1

            return dict(self.patterns)
