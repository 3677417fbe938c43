"""
Diet plan segmentation.

Turns the free-text diet plan returned by the text generator into the
six display buckets. The generator's output format is not guaranteed,
so parsing is heuristic and never fails: text that cannot be placed
lands in the last active bucket, which starts as goals.

Algorithm (single pass over blank-line separated paragraphs):
1. A paragraph containing a heading phrase switches the current section
   and contributes no items, even if it also carries bullets.
2. Any other paragraph is cleaned, split into lines and appended to the
   current section.
3. Every collected item is normalized; empty items are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Sequence, Tuple

from report_insight.domain.diet_plan.headings import (
    DEFAULT_SECTION_HEADINGS,
    SectionHeading,
    detect_section,
)
from report_insight.domain.diet_plan.models import DietPlanSections, SectionKey
from report_insight.domain.diet_plan.normalization import (
    clean_paragraph,
    normalize_items,
    split_lines,
)

PARAGRAPH_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class SegmentationState:
    """State threaded through the fold: active section and items so far."""

    current: SectionKey
    sections: Dict[SectionKey, Tuple[str, ...]]

    @classmethod
    def initial(cls, current: SectionKey) -> SegmentationState:
        return cls(current=current, sections={key: () for key in SectionKey})

    def switch_to(self, key: SectionKey) -> SegmentationState:
        return SegmentationState(current=key, sections=self.sections)

    def append(self, items: Sequence[str]) -> SegmentationState:
        sections = dict(self.sections)
        sections[self.current] = sections[self.current] + tuple(items)
        return SegmentationState(current=self.current, sections=sections)


def split_paragraphs(text: str) -> List[str]:
    """Split on blank lines; Windows and old Mac line endings are unified first."""
    unified = text.replace("\r\n", "\n").replace("\r", "\n")
    return unified.split(PARAGRAPH_SEPARATOR)


class DietPlanSegmenter:
    """
    Segments generated diet plans into SectionKey buckets.

    Stateless: one instance can serve any number of concurrent callers.
    The heading table is injectable so new trigger phrases can be added
    without touching the traversal.

    Example:
        >>> segmenter = DietPlanSegmenter()
        >>> sections = segmenter.segment(
        ...     "Eat more fiber.\\n\\nGreen Foods:\\n- Apples"
        ... )
        >>> sections.goals, sections.green_foods
        (('Eat more fiber.',), ())
    """

    def __init__(
        self,
        headings: Sequence[SectionHeading] = DEFAULT_SECTION_HEADINGS,
        default_section: SectionKey = SectionKey.GOALS,
    ):
        self.headings = tuple(headings)
        self.default_section = default_section

    def segment(self, text: str) -> DietPlanSections:
        """
        Segment a diet plan.

        Args:
            text: Raw diet plan text

        Returns:
            DietPlanSections with all six buckets present
        """
        final = reduce(
            self._step,
            split_paragraphs(text or ""),
            SegmentationState.initial(self.default_section),
        )
        return DietPlanSections.from_mapping(
            {key: normalize_items(items) for key, items in final.sections.items()}
        )

    def _step(self, state: SegmentationState, paragraph: str) -> SegmentationState:
        cleaned = clean_paragraph(paragraph)

        # Headings are detected on the raw paragraph, before cleanup
        section = detect_section(paragraph, self.headings)
        if section is not None:
            return state.switch_to(section)

        if not cleaned:
            return state
        return state.append(split_lines(cleaned))


_default_segmenter = DietPlanSegmenter()


def segment_diet_plan(text: str) -> DietPlanSections:
    """Segment with the default heading table."""
    return _default_segmenter.segment(text)
