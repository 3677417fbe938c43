"""
Markdown residue cleanup for generated diet plans.

Two passes: a cosmetic pass over each paragraph before it is split
into lines, and an item pass over every resulting line.
"""

from __future__ import annotations

import re
from typing import Iterable, List

EMPHASIS_MARKER = "**"

# Leading "-" or "*" bullet on any line of a paragraph
_PARAGRAPH_BULLET_RE = re.compile(r"^[-*]\s+", re.MULTILINE)

# Leading bullet glyph on a single item
_ITEM_BULLET_RE = re.compile(r"^[-*•]\s*")

# Leading "12." numbered list prefix; "1.5" is a quantity, not a prefix
_NUMBERED_PREFIX_RE = re.compile(r"^\d+\.(?!\d)\s*")


def strip_emphasis(text: str) -> str:
    """Remove every bold marker."""
    return text.replace(EMPHASIS_MARKER, "")


def clean_paragraph(paragraph: str) -> str:
    """
    Cosmetic cleanup of a whole paragraph.

    Removes bold markers, strips a leading "-"/"*" bullet from every
    line, then trims the paragraph.

    Example:
        >>> clean_paragraph("- **Apples**\\n* Pears")
        'Apples\\nPears'
    """
    without_emphasis = strip_emphasis(paragraph)
    return _PARAGRAPH_BULLET_RE.sub("", without_emphasis).strip()


def split_lines(cleaned_paragraph: str) -> List[str]:
    """Split on line breaks, trimming and dropping blank lines."""
    lines = (line.strip() for line in cleaned_paragraph.split("\n"))
    return [line for line in lines if line]


def _strip_markup(item: str) -> str:
    while True:
        stripped = strip_emphasis(_ITEM_BULLET_RE.sub("", item, count=1)).strip()
        if stripped == item:
            return stripped
        item = stripped


def normalize_item(item: str) -> str:
    """
    Normalize one item.

    Strips leading bullet glyphs and bold markers until none are left,
    removes one numbered-list prefix, then strips markup the prefix was
    hiding ("1. - Oats"). The prefix is removed at most once and never
    when the period is followed by a digit, so "1. 1.5 liters" keeps its
    quantity.

    Example:
        >>> normalize_item("**Apples** (1 serving)")
        'Apples (1 serving)'
        >>> normalize_item("1. Drink water")
        'Drink water'
        >>> normalize_item("2. 1.5 liters of water")
        '1.5 liters of water'
    """
    without_number = _NUMBERED_PREFIX_RE.sub("", _strip_markup(item), count=1)
    return _strip_markup(without_number)


def normalize_items(items: Iterable[str]) -> List[str]:
    """Normalize every item and drop the ones left empty."""
    normalized = (normalize_item(item) for item in items)
    return [item for item in normalized if item]
