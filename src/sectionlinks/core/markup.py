"""Small HTML helpers: tag stripping, entity encoding and tag building."""

from __future__ import annotations

import html
import re
from collections.abc import Mapping

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Numeric entities already present in the input survive encoding untouched.
_DOUBLE_ENCODED_NUMERIC = re.compile(r"&amp;#(\d+|x[0-9a-f]+);", re.IGNORECASE)


def strip_tags(text: str) -> str:
    """Remove anything that looks like an HTML tag."""
    return _TAG_PATTERN.sub("", text)


def escape(text: str) -> str:
    """Entity-encode text for use in HTML content or attribute values.

    Encodes ``& < > " '``. Numeric character references such as ``&#8217;``
    are kept as they are.
    """
    encoded = html.escape(text, quote=True).replace("&#x27;", "&#039;")
    return _DOUBLE_ENCODED_NUMERIC.sub(r"&#\1;", encoded)


def start_tag(tag: str, attributes: Mapping[str, object | None]) -> str:
    """Build an opening tag, encoding attribute values.

    Attributes whose value is None are left out.
    """
    parts = [tag]
    for name, value in attributes.items():
        if value is None:
            continue
        parts.append(f'{name}="{escape(str(value))}"')
    return "<" + " ".join(parts) + ">"


def end_tag(tag: str) -> str:
    """Build a closing tag."""
    return f"</{tag}>"
