"""
Section heading table.

Ordered (key, trigger phrases) pairs used to recognise the paragraph
that opens a diet plan section. Order is priority: the first entry whose
phrase occurs in the paragraph wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from report_insight.domain.diet_plan.models import SectionKey


@dataclass(frozen=True)
class SectionHeading:
    """Trigger phrases (lower case) for one section."""

    key: SectionKey
    phrases: Tuple[str, ...]

    def matches(self, lowered_paragraph: str) -> bool:
        return any(phrase in lowered_paragraph for phrase in self.phrases)


DEFAULT_SECTION_HEADINGS: Tuple[SectionHeading, ...] = (
    SectionHeading(SectionKey.GREEN_FOODS, ("foods to eat freely", "green foods")),
    SectionHeading(SectionKey.YELLOW_FOODS, ("foods in moderation", "yellow foods")),
    SectionHeading(SectionKey.RED_FOODS, ("foods to avoid", "red foods")),
    SectionHeading(SectionKey.TIMING, ("meal timing",)),
    SectionHeading(SectionKey.SPECIAL, ("special instructions", "special dietary")),
)


def detect_section(
    paragraph: str,
    headings: Sequence[SectionHeading] = DEFAULT_SECTION_HEADINGS,
) -> Optional[SectionKey]:
    """
    Return the section a paragraph opens, if any.

    Matching is case-insensitive substring containment, so a heading
    does not have to sit on its own line.

    Example:
        >>> detect_section("✅ Green Foods (Eat Freely):")
        <SectionKey.GREEN_FOODS: 'greenFoods'>
        >>> detect_section("Drink plenty of water") is None
        True
    """
    lowered = paragraph.lower()
    for heading in headings:
        if heading.matches(lowered):
            return heading.key
    return None
