"""
Line-oriented markdown formatter.

Summaries and comparisons are shown with a much simpler treatment than
diet plans: each line becomes one block, classified by its prefix.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict

from report_insight.domain.diet_plan.normalization import strip_emphasis


class LineKind(str, Enum):
    HEADING = "heading"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


class FormattedLine(BaseModel):
    """One rendered block."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: LineKind
    text: str


def format_line(line: str) -> FormattedLine:
    if line.startswith("**"):
        return FormattedLine(kind=LineKind.HEADING, text=strip_emphasis(line))
    if line.startswith("* "):
        text = strip_emphasis(line.replace("* ", "", 1))
        return FormattedLine(kind=LineKind.BULLET, text=text)
    return FormattedLine(kind=LineKind.PARAGRAPH, text=strip_emphasis(line))


def format_markdown(text: str) -> List[FormattedLine]:
    """
    Format free text line by line.

    Every line, blank ones included, yields one block.

    Example:
        >>> [line.kind for line in format_markdown("**Overview**\\n* Iron low")]
        ['heading', 'bullet']
    """
    return [format_line(line) for line in (text or "").split("\n")]
