"""
OpenAI text generator - implements ITextGenerator port.

Key Features:
- Async client with context manager lifecycle
- Circuit breaker (5 transient failures → 60s open)
- Retry logic on transient failures (exponential backoff)
- Client-side rate limiting (requests per minute)
"""

# mypy: warn-unused-ignores=False

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import structlog
from circuitbreaker import CircuitBreakerError, circuit
from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    OpenAIError,
    RateLimitError as OpenAIRateLimitError,
)
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from report_insight.domain.report.prompts import (
    build_chat_messages,
    build_comparison_messages,
    build_diet_plan_messages,
    build_summary_messages,
)
from report_insight.domain.shared.errors import (
    GenerationError,
    RateLimitError,
    ServiceUnavailableError,
)

if TYPE_CHECKING:
    from openai.types.chat import ChatCompletion

logger = structlog.get_logger(__name__)

# Only these count towards the circuit breaker and are retried
TRANSIENT_ERRORS = (APITimeoutError, APIConnectionError, InternalServerError)


class OpenAITextGenerator:
    """
    OpenAI chat completion client implementing ITextGenerator port.

    Follows Dependency Inversion Principle:
    - Domain defines ITextGenerator interface (port)
    - Infrastructure provides OpenAITextGenerator implementation (adapter)

    Example:
        >>> async with OpenAITextGenerator(api_key="sk-...") as generator:
        ...     summary = await generator.generate_summary(pdf_text)
        ...     plan = await generator.generate_diet_plan(summary)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.4,
        max_tokens: int = 2000,
        timeout: int = 60,
        max_retries: int = 0,
        rpm_limit: int = 60,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize text generator.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            temperature: Sampling temperature
            max_tokens: Max tokens per response
            timeout: Request timeout in seconds
            max_retries: SDK-level retries (retries are handled by tenacity)
            rpm_limit: Requests per minute limit
            client: Optional pre-configured AsyncOpenAI client (for testing)

        Raises:
            ValueError: If API key missing and client not provided
        """
        if client is None and not api_key:
            raise ValueError(
                "OPENAI_API_KEY not found. Set it in .env or pass it as parameter."
            )
        self.api_key = api_key or "test-key"
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self.rpm_limit = rpm_limit
        self._client: Optional[AsyncOpenAI] = client
        self._owns_client = client is None

        # Rate limiting state
        self._request_times: List[float] = []
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> OpenAITextGenerator:
        """Async context manager entry."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._client is not None and self._owns_client:
            await self._client.close()
            self._client = None

    # ───────────────────────────────────────────────────────
    # ITextGenerator
    # ───────────────────────────────────────────────────────

    async def generate_summary(self, report_text: str) -> str:
        return await self._generate(build_summary_messages(report_text), "summary")

    async def compare_summaries(self, old_summary: str, new_summary: str) -> str:
        messages = build_comparison_messages(old_summary, new_summary)
        return await self._generate(messages, "comparison")

    async def generate_diet_plan(self, report_summary: str) -> str:
        return await self._generate(build_diet_plan_messages(report_summary), "diet_plan")

    async def answer_question(self, question: str, report_summary: str) -> str:
        messages = build_chat_messages(question, report_summary)
        return await self._generate(messages, "chat")

    # ───────────────────────────────────────────────────────
    # Internals
    # ───────────────────────────────────────────────────────

    async def _generate(self, messages: List[Dict[str, str]], purpose: str) -> str:
        """
        Run one completion and map SDK failures to domain errors.

        Raises:
            ServiceUnavailableError: Circuit breaker open
            RateLimitError: OpenAI rate limit hit
            GenerationError: Any other API failure or an empty response
        """
        start_time = time.time()
        logger.info("openai.request", purpose=purpose, model=self.model)

        try:
            content = await self._complete(messages)
        except CircuitBreakerError as e:
            logger.error("openai.circuit_open", purpose=purpose)
            raise ServiceUnavailableError("OpenAI circuit open, try again later") from e
        except OpenAIRateLimitError as e:
            logger.warning("openai.rate_limited", purpose=purpose)
            raise RateLimitError(f"OpenAI rate limit hit during {purpose}") from e
        except OpenAIError as e:
            logger.error("openai.request_failed", purpose=purpose, error=str(e))
            raise GenerationError(f"OpenAI {purpose} request failed: {e}") from e

        if not content.strip():
            raise GenerationError(f"Empty {purpose} returned by {self.model}")

        logger.info(
            "openai.response",
            purpose=purpose,
            chars=len(content),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )
        return content

    @circuit(  # type: ignore[misc]
        failure_threshold=5,
        recovery_timeout=60,
        expected_exception=TRANSIENT_ERRORS,
        name="openai_text",
    )
    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    async def _complete(self, messages: List[Dict[str, str]]) -> str:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async with.")

        await self._rate_limit()

        completion: ChatCompletion = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def _rate_limit(self) -> None:
        """
        Enforce rate limiting.

        Tracks request timestamps of the last 60 seconds and sleeps
        until the oldest expires when rpm_limit is reached.
        """
        async with self._lock:
            now = time.time()
            cutoff = now - 60.0
            self._request_times = [t for t in self._request_times if t > cutoff]

            if len(self._request_times) >= self.rpm_limit:
                wait_time = 60.0 - (now - self._request_times[0])
                if wait_time > 0:
                    await asyncio.sleep(wait_time)
                    now = time.time()
                    cutoff = now - 60.0
                    self._request_times = [t for t in self._request_times if t > cutoff]

            self._request_times.append(now)

    def get_stats(self) -> Dict[str, Any]:
        """Model name, rate limit and requests in the last minute."""
        cutoff = time.time() - 60.0
        return {
            "model": self.model,
            "rpm_limit": self.rpm_limit,
            "requests_last_minute": len([t for t in self._request_times if t > cutoff]),
        }
