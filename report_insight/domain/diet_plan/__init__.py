"""Diet plan domain: segmentation of generated diet plans into display buckets."""

from report_insight.domain.diet_plan.headings import (
    DEFAULT_SECTION_HEADINGS,
    SectionHeading,
    detect_section,
)
from report_insight.domain.diet_plan.models import DietPlanSections, SectionKey
from report_insight.domain.diet_plan.normalization import normalize_item, normalize_items
from report_insight.domain.diet_plan.segmenter import DietPlanSegmenter, segment_diet_plan

__all__ = [
    "DEFAULT_SECTION_HEADINGS",
    "DietPlanSections",
    "DietPlanSegmenter",
    "SectionHeading",
    "SectionKey",
    "detect_section",
    "normalize_item",
    "normalize_items",
    "segment_diet_plan",
]
