"""Segment-based phrase replacer: links phrases without touching markup.

The text is split into segments. Markup segments (tags, and whole blocks
that must never receive links, such as existing anchors) are protected.
Each pattern then wraps the first occurrence of its phrase found in an
unprotected segment, and the wrapped result becomes protected in turn, so
later patterns never match inside links inserted earlier in the same pass.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Sequence

from sectionlinks.core.interfaces import PhraseReplacerPort
from sectionlinks.core.models import LinkPattern

logger = logging.getLogger(__name__)

# Blocks whose content is never linked, followed by any single tag
_PROTECTED_PATTERN = re.compile(
    r"<a\s[^>]*>.*?</a\s*>"
    r"|<nolink>.*?</nolink\s*>"
    r"|<span\s+class=[\"']nolink[\"'][^>]*>.*?</span\s*>"
    r"|<(head|textarea|select|script|style|pre)\b[^>]*>.*?</\1\s*>"
    r"|<[^>]*>",
    re.IGNORECASE | re.DOTALL,
)

Segment = tuple[str, bool]
"""A piece of text and whether it is protected from replacement."""


class SegmentPhraseReplacer(PhraseReplacerPort):
    """Default PhraseReplacerPort implementation."""

    def replace(self, text: str, patterns: Sequence[LinkPattern]) -> str:
        """Wrap the first occurrence of each pattern, in pattern order."""
        if not text or not patterns:
            return text

        segments = split_segments(text)
        replaced = 0
        seen: set[tuple[str, bool]] = set()
        for pattern in patterns:
            if not pattern.match:
                continue
            # Each phrase is linked once; the first pattern for it wins
            phrase_key = (
                pattern.match if pattern.case_sensitive else pattern.match.casefold(),
                pattern.case_sensitive,
            )
            if phrase_key in seen:
                continue
            seen.add(phrase_key)
            regex = _compile(pattern.match, pattern.case_sensitive, pattern.full_match)
            segments, found = _replace_first(segments, regex, pattern)
            if found:
                replaced += 1

        logger.debug("Linked %d of %d phrases", replaced, len(patterns))
        return "".join(piece for piece, _ in segments)


def split_segments(text: str) -> list[Segment]:
    """Split HTML text into alternating text and protected markup segments."""
    segments: list[Segment] = []
    position = 0
    for match in _PROTECTED_PATTERN.finditer(text):
        if match.start() > position:
            segments.append((text[position : match.start()], False))
        segments.append((match.group(0), True))
        position = match.end()
    if position < len(text):
        segments.append((text[position:], False))
    return segments


def _replace_first(
    segments: list[Segment], regex: re.Pattern[str], pattern: LinkPattern
) -> tuple[list[Segment], bool]:
    for index, (piece, protected) in enumerate(segments):
        if protected:
            continue
        match = regex.search(piece)
        if match is None:
            continue

        wrapped = pattern.open_markup + match.group(0) + pattern.close_markup
        replacement: list[Segment] = []
        if match.start() > 0:
            replacement.append((piece[: match.start()], False))
        replacement.append((wrapped, True))
        if match.end() < len(piece):
            replacement.append((piece[match.end() :], False))
        return segments[:index] + replacement + segments[index + 1 :], True

    return segments, False


@functools.lru_cache(maxsize=512)
def _compile(phrase: str, case_sensitive: bool, full_match: bool) -> re.Pattern[str]:
    """Compile the search regex for a phrase."""
    body = re.escape(phrase)
    if full_match:
        body = rf"(?<!\w){body}(?!\w)"
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(body, flags)
