"""Stub text generator for local runs and tests.

Returns canned, deterministic texts without calling external APIs.
The diet plan follows the layout requested by the real prompt, so the
segmenter sees realistic input.
"""

STUB_DIET_PLAN = """🎯 Your Goals:
• Bring cholesterol back into the normal range
• Drink at least 8 glasses of water a day

✅ Green Foods (Eat Freely):

• Leafy greens (spinach, kale) - 2 cups a day
• **Oats** for breakfast (1 cup cooked)
• Apples and pears

🟡 Yellow Foods (Eat in Moderation):

• Eggs - up to 4 a week
• Whole-grain pasta (1 cup cooked)

❌ Red Foods (Better to Avoid):

• Fried food
• Sugary drinks

⏰ Meal Timing:

1. Breakfast within an hour of waking up
2. Lunch 4-5 hours later
3. Light dinner at least 2 hours before bed

💡 Special Instructions:

- Shop the outer aisles of the grocery store first
- Cook grains in batches on Sunday"""


class StubTextGenerator:
    """
    Stub implementation of ITextGenerator.

    Supports async context manager protocol for lifespan compatibility.
    """

    async def __aenter__(self) -> "StubTextGenerator":
        """Enter async context (no-op for stub)."""
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Exit async context (no-op for stub)."""
        return None

    async def generate_summary(self, report_text: str) -> str:
        preview = " ".join(report_text.split()[:12])
        return (
            "**Overview**\n"
            f"This report covers: {preview}\n"
            "* Most values are in the normal range\n"
            "* Cholesterol is slightly above normal\n"
            "**What This Means for You**\n"
            "Small diet changes should help."
        )

    async def compare_summaries(self, old_summary: str, new_summary: str) -> str:
        return (
            "**What's Better**\n"
            "* ✅ Blood sugar is stable\n"
            "**What Needs Attention**\n"
            "* ⚠️ Cholesterol 📈 slightly up"
        )

    async def generate_diet_plan(self, report_summary: str) -> str:
        return STUB_DIET_PLAN

    async def answer_question(self, question: str, report_summary: str) -> str:
        lines = report_summary.splitlines() or [""]
        return f"Based on your latest report ({lines[0]}): {question}"
