"""
Text clean-up for exercise descriptions.

The exercise catalog returns descriptions as HTML fragments. The detail
view only shows a short plain-text preview, so tags are stripped rather
than rendered.
"""

import html
import re


# Matches a tag, or an unterminated "<..." at the end of a fragment.
MARKUP_PATTERN = re.compile(r"<[^>]*>?")

DEFAULT_PREVIEW_LENGTH = 100


def strip_markup(text: str) -> str:
    """Remove tags, decode entities and trim surrounding whitespace."""
    if not text:
        return ""
    return html.unescape(MARKUP_PATTERN.sub("", text)).strip()


def truncate_preview(text: str, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Cut text to at most length characters."""
    if length < 0:
        raise ValueError("Preview length cannot be negative")
    return text[:length]


def to_preview(text: str, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Plain-text preview of an HTML description."""
    return truncate_preview(strip_markup(text), length)
