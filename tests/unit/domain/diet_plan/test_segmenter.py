"""
Tests for DietPlanSegmenter.

Covers the paragraph fold, heading detection and item normalization
end to end.
"""

import pytest

from report_insight.domain.diet_plan.headings import SectionHeading
from report_insight.domain.diet_plan.models import DietPlanSections, SectionKey
from report_insight.domain.diet_plan.segmenter import (
    DietPlanSegmenter,
    SegmentationState,
    segment_diet_plan,
    split_paragraphs,
)
from report_insight.infrastructure.ai.stub_text_generator import STUB_DIET_PLAN


@pytest.fixture
def segmenter() -> DietPlanSegmenter:
    return DietPlanSegmenter()


def _counts(sections: DietPlanSections) -> dict:
    return {key: len(values) for key, values in sections.items()}


# ═══════════════════════════════════════════════════════════
# WORKED EXAMPLE
# ═══════════════════════════════════════════════════════════


class TestWorkedExample:
    """Goals, green and red foods from a small plan."""

    def test_headings_in_own_paragraphs(self, segmenter: DietPlanSegmenter) -> None:
        """Each heading followed by a blank line fills its bucket."""
        text = (
            "Eat more fiber and stay hydrated.\n\n"
            "Green Foods:\n\n"
            "- Apples\n"
            "- Leafy greens\n\n"
            "Foods to Avoid:\n\n"
            "- Fried food"
        )

        sections = segmenter.segment(text)

        assert sections.to_dict() == {
            "goals": ["Eat more fiber and stay hydrated."],
            "greenFoods": ["Apples", "Leafy greens"],
            "yellowFoods": [],
            "redFoods": ["Fried food"],
            "timing": [],
            "special": [],
        }

    def test_heading_sharing_paragraph_with_bullets_drops_them(
        self, segmenter: DietPlanSegmenter
    ) -> None:
        """Known sharp edge: bullets in a heading paragraph are discarded.

        If the generator emits a heading and its items without a blank line
        in between, those items are lost. Kept as is until a product
        decision says otherwise.
        """
        text = (
            "Eat more fiber and stay hydrated.\n\n"
            "Green Foods:\n"
            "- Apples\n"
            "- Leafy greens\n\n"
            "Foods to Avoid:\n"
            "- Fried food"
        )

        sections = segmenter.segment(text)

        assert sections.goals == ("Eat more fiber and stay hydrated.",)
        assert sections.green_foods == ()
        assert sections.red_foods == ()


# ═══════════════════════════════════════════════════════════
# TOTALITY / DEFAULTS
# ═══════════════════════════════════════════════════════════


class TestTotality:
    """Every input yields all six buckets."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "\n\n",
            "\n\n\n\n\n",
            "   ",
            "**",
            "- \n* \n•",
            "Green Foods",
            "1.\n\n2.",
            "\r\n\r\n",
            "random text without any heading",
        ],
    )
    def test_always_six_keys(self, segmenter: DietPlanSegmenter, text: str) -> None:
        """Six keys, each a tuple, for arbitrary input."""
        result = segmenter.segment(text).to_dict()

        assert list(result) == [key.value for key in SectionKey]
        assert all(isinstance(values, list) for values in result.values())

    def test_empty_text_all_empty(self, segmenter: DietPlanSegmenter) -> None:
        """segment("") maps every key to an empty sequence."""
        sections = segmenter.segment("")

        assert sections.is_empty()
        assert all(values == () for _, values in sections.items())

    def test_none_is_treated_as_empty(self, segmenter: DietPlanSegmenter) -> None:
        """A missing plan does not raise."""
        assert segmenter.segment(None).is_empty()  # type: ignore[arg-type]

    def test_only_headings_all_empty(self, segmenter: DietPlanSegmenter) -> None:
        """An all-heading document never appends anything."""
        text = "Green Foods:\n\nYellow Foods:\n\nMeal Timing:"

        assert segmenter.segment(text).is_empty()

    def test_no_heading_everything_in_goals(self, segmenter: DietPlanSegmenter) -> None:
        """Under-segmentation: text without headings stays in goals."""
        sections = segmenter.segment("Eat less salt\n\nWalk daily\nSleep 8 hours")

        assert sections.goals == ("Eat less salt", "Walk daily", "Sleep 8 hours")
        assert _counts(sections)[SectionKey.GOALS] == 3
        assert sum(_counts(sections).values()) == 3

    def test_no_items_empty_after_cleanup(self, segmenter: DietPlanSegmenter) -> None:
        """Items reduced to nothing are dropped."""
        sections = segmenter.segment("Goals\n- \n**\n1. \n• ")

        assert sections.goals == ("Goals",)


# ═══════════════════════════════════════════════════════════
# HEADINGS
# ═══════════════════════════════════════════════════════════


class TestHeadingDetection:
    """Section switching behaviour."""

    def test_heading_contributes_no_items(self, segmenter: DietPlanSegmenter) -> None:
        """The heading text itself is never an item."""
        sections = segmenter.segment("✅ Green Foods (Eat Freely):\n\n• Apples")

        assert sections.green_foods == ("Apples",)
        assert all("Green" not in item for _, items in sections.items() for item in items)

    def test_green_wins_over_yellow(self, segmenter: DietPlanSegmenter) -> None:
        """Paragraph with both phrases switches to greenFoods."""
        text = "Yellow foods and green foods below\n\nOats"

        assert segmenter.segment(text).green_foods == ("Oats",)

    def test_case_insensitive_substring(self, segmenter: DietPlanSegmenter) -> None:
        """Phrases match anywhere, in any case."""
        text = "Here are the FOODS TO AVOID for now:\n\nCandy"

        assert segmenter.segment(text).red_foods == ("Candy",)

    def test_heading_detected_before_cleanup(self, segmenter: DietPlanSegmenter) -> None:
        """Emphasis inside the phrase hides it from detection."""
        text = "**Meal** Timing\n\nBreakfast at 8"

        sections = segmenter.segment(text)

        # "**meal** timing" does not contain "meal timing"
        assert sections.timing == ()
        assert sections.goals == ("Meal Timing", "Breakfast at 8")

    def test_cursor_persists_across_paragraphs(self, segmenter: DietPlanSegmenter) -> None:
        """Following paragraphs stay in the active section."""
        text = "Meal Timing:\n\n1. Breakfast\n\n2. Lunch\n\n3. Dinner"

        assert segmenter.segment(text).timing == ("Breakfast", "Lunch", "Dinner")

    @pytest.mark.parametrize(
        "heading, key",
        [
            ("Foods to eat freely", SectionKey.GREEN_FOODS),
            ("Green foods", SectionKey.GREEN_FOODS),
            ("Foods in moderation", SectionKey.YELLOW_FOODS),
            ("Yellow foods", SectionKey.YELLOW_FOODS),
            ("Foods to avoid", SectionKey.RED_FOODS),
            ("Red foods", SectionKey.RED_FOODS),
            ("Meal timing", SectionKey.TIMING),
            ("Special instructions", SectionKey.SPECIAL),
            ("Special dietary notes", SectionKey.SPECIAL),
        ],
    )
    def test_every_trigger_phrase(
        self, segmenter: DietPlanSegmenter, heading: str, key: SectionKey
    ) -> None:
        """Each trigger phrase routes the next paragraph to its bucket."""
        sections = segmenter.segment(f"{heading}:\n\nItem")

        assert sections[key] == ("Item",)

    def test_custom_heading_table(self) -> None:
        """New phrases are added through the table, not the traversal."""
        segmenter = DietPlanSegmenter(
            headings=(SectionHeading(SectionKey.SPECIAL, ("helpful tips",)),)
        )

        sections = segmenter.segment("💡 Helpful Tips:\n\nBatch cook on Sunday")

        assert sections.special == ("Batch cook on Sunday",)


# ═══════════════════════════════════════════════════════════
# CLEANUP
# ═══════════════════════════════════════════════════════════


class TestCleanup:
    """Paragraph and item cleanup applied together."""

    def test_bullets_on_every_line_removed(self, segmenter: DietPlanSegmenter) -> None:
        """Multiline bullet removal, not just the first line."""
        sections = segmenter.segment("- Apples\n* Pears\n• Plums")

        assert sections.goals == ("Apples", "Pears", "Plums")

    def test_emphasis_removed(self, segmenter: DietPlanSegmenter) -> None:
        assert segmenter.segment("**Apples** (1 serving)").goals == ("Apples (1 serving)",)

    def test_duplicates_pass_through(self, segmenter: DietPlanSegmenter) -> None:
        """No deduplication."""
        sections = segmenter.segment("Red foods\n\n- Soda\n- Soda")

        assert sections.red_foods == ("Soda", "Soda")

    def test_numbered_decimal_quantities_kept(self) -> None:
        text = "Meal Timing:\n\n1. 1.5 liters of water daily\n2. 2.5 cups of vegetables"

        sections = segment_diet_plan(text)

        assert sections.timing == ("1.5 liters of water daily", "2.5 cups of vegetables")

    def test_windows_line_endings(self, segmenter: DietPlanSegmenter) -> None:
        """CRLF blank lines still separate paragraphs."""
        text = "Drink water\r\n\r\nGreen Foods:\r\n\r\n- Apples\r\n- Pears"

        sections = segmenter.segment(text)

        assert sections.goals == ("Drink water",)
        assert sections.green_foods == ("Apples", "Pears")

    def test_stub_plan(self) -> None:
        """The stub generator plan lands in all six buckets."""
        sections = segment_diet_plan(STUB_DIET_PLAN)

        assert sections.goals == (
            "🎯 Your Goals:",
            "Bring cholesterol back into the normal range",
            "Drink at least 8 glasses of water a day",
        )
        assert sections.green_foods == (
            "Leafy greens (spinach, kale) - 2 cups a day",
            "Oats for breakfast (1 cup cooked)",
            "Apples and pears",
        )
        assert sections.yellow_foods == ("Eggs - up to 4 a week", "Whole-grain pasta (1 cup cooked)")
        assert sections.red_foods == ("Fried food", "Sugary drinks")
        assert sections.timing == (
            "Breakfast within an hour of waking up",
            "Lunch 4-5 hours later",
            "Light dinner at least 2 hours before bed",
        )
        assert sections.special == (
            "Shop the outer aisles of the grocery store first",
            "Cook grains in batches on Sunday",
        )


# ═══════════════════════════════════════════════════════════
# FOLD STATE
# ═══════════════════════════════════════════════════════════


class TestSegmentationState:
    """Immutable state threaded through the fold."""

    def test_initial_state(self) -> None:
        state = SegmentationState.initial(SectionKey.GOALS)

        assert state.current == SectionKey.GOALS
        assert set(state.sections) == set(SectionKey)

    def test_append_returns_new_state(self) -> None:
        """Previous state is left untouched."""
        state = SegmentationState.initial(SectionKey.GOALS)

        updated = state.append(["a", "b"])

        assert updated.sections[SectionKey.GOALS] == ("a", "b")
        assert state.sections[SectionKey.GOALS] == ()

    def test_switch_keeps_items(self) -> None:
        state = SegmentationState.initial(SectionKey.GOALS).append(["a"])

        switched = state.switch_to(SectionKey.TIMING)

        assert switched.current == SectionKey.TIMING
        assert switched.sections[SectionKey.GOALS] == ("a",)

    def test_split_paragraphs_unifies_line_endings(self) -> None:
        assert split_paragraphs("a\r\rb\r\n\r\nc") == ["a", "b", "c"]

    def test_segment_returns_fresh_result(self, segmenter: DietPlanSegmenter) -> None:
        """Two calls never share a result object."""
        first = segmenter.segment("Apples")
        second = segmenter.segment("Apples")

        assert first == second
        assert first is not second
