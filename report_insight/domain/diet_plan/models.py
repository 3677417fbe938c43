"""
Diet plan domain models.

SectionKey enumerates the six display buckets; DietPlanSections is the
immutable result of segmenting a generated diet plan.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class SectionKey(str, Enum):
    """
    Diet plan bucket.

    Values match the keys used by the rendering layer.
    """

    GOALS = "goals"
    GREEN_FOODS = "greenFoods"  # Eat freely
    YELLOW_FOODS = "yellowFoods"  # Eat in moderation
    RED_FOODS = "redFoods"  # Better to avoid
    TIMING = "timing"  # Meal timing
    SPECIAL = "special"  # Special instructions


class DietPlanSections(BaseModel):
    """
    Segmented diet plan.

    Every SectionKey is always present, mapped to a tuple of items in
    source order (possibly empty). Duplicates pass through unchanged.

    Example:
        >>> sections = DietPlanSections.from_mapping(
        ...     {SectionKey.GOALS: ["Eat more fiber"]}
        ... )
        >>> sections[SectionKey.GOALS]
        ('Eat more fiber',)
        >>> sections["redFoods"]
        ()
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    goals: Tuple[str, ...] = Field(default=(), description="Dietary goals")
    green_foods: Tuple[str, ...] = Field(
        default=(), alias="greenFoods", description="Foods to eat freely"
    )
    yellow_foods: Tuple[str, ...] = Field(
        default=(), alias="yellowFoods", description="Foods in moderation"
    )
    red_foods: Tuple[str, ...] = Field(
        default=(), alias="redFoods", description="Foods to avoid"
    )
    timing: Tuple[str, ...] = Field(default=(), description="Meal timing")
    special: Tuple[str, ...] = Field(default=(), description="Special instructions")

    @classmethod
    def from_mapping(
        cls, items: Mapping[SectionKey, Sequence[str]]
    ) -> DietPlanSections:
        """Build from a (possibly partial) SectionKey mapping."""
        return cls.model_validate(
            {key.value: tuple(items.get(key, ())) for key in SectionKey}
        )

    def __getitem__(self, key: Union[SectionKey, str]) -> Tuple[str, ...]:
        """Look up a bucket by SectionKey or its string value."""
        section = SectionKey(key)
        return getattr(self, _FIELD_BY_KEY[section])

    def items(self) -> Iterator[Tuple[SectionKey, Tuple[str, ...]]]:
        """Iterate buckets in display order."""
        for key in SectionKey:
            yield key, self[key]

    def is_empty(self) -> bool:
        """True when no bucket holds any item."""
        return not any(values for _, values in self.items())

    def to_dict(self) -> Dict[str, List[str]]:
        """Serialize with rendering-layer keys."""
        return {key.value: list(values) for key, values in self.items()}


_FIELD_BY_KEY: Dict[SectionKey, str] = {
    SectionKey.GOALS: "goals",
    SectionKey.GREEN_FOODS: "green_foods",
    SectionKey.YELLOW_FOODS: "yellow_foods",
    SectionKey.RED_FOODS: "red_foods",
    SectionKey.TIMING: "timing",
    SectionKey.SPECIAL: "special",
}
