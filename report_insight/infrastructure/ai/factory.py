"""Text generator factory.

Environment-based generator selection with graceful fallback to the stub.
Strategy:
- .env (runtime): TEXT_GENERATOR=openai
- .env.test (pytest): TEXT_GENERATOR=stub
- Default: stub (safe fallback if env vars not set)
"""

from typing import Union

from report_insight.infrastructure.ai.openai_client import OpenAITextGenerator
from report_insight.infrastructure.ai.stub_text_generator import StubTextGenerator
from report_insight.infrastructure.config import (
    get_openai_api_key,
    get_openai_model,
    get_openai_temperature,
    get_text_generator_mode,
)


def create_text_generator() -> Union[OpenAITextGenerator, StubTextGenerator]:
    """Create text generator based on TEXT_GENERATOR env var.

    Environment variable: TEXT_GENERATOR
    Values:
        - "openai": OpenAI chat completions (requires OPENAI_API_KEY)
        - "stub": Stub generator (default)

    Returns:
        Generator instance, not yet entered (use ``async with``)

    Raises:
        ValueError: If openai selected but OPENAI_API_KEY not set
    """
    mode = get_text_generator_mode()

    if mode == "openai":
        api_key = get_openai_api_key()
        if not api_key:
            raise ValueError(
                "TEXT_GENERATOR=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use TEXT_GENERATOR=stub"
            )
        return OpenAITextGenerator(
            api_key=api_key,
            model=get_openai_model(),
            temperature=get_openai_temperature(),
        )

    return StubTextGenerator()
