"""
Shared fixtures for report_insight tests.

Domain samples plus in-memory collaborators; generator and extractor
doubles are AsyncMock/MagicMock shaped after the port protocols.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from report_insight.domain.report.models import Report
from report_insight.domain.report.ports import IPdfTextExtractor, ITextGenerator
from report_insight.domain.shared.value_objects import ReportId, UserId
from report_insight.infrastructure.ai.stub_text_generator import STUB_DIET_PLAN
from report_insight.infrastructure.persistence.in_memory.report_repository import (
    InMemoryReportRepository,
)


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def user_id() -> UserId:
    return UserId(value="user_123")


@pytest.fixture
def other_user_id() -> UserId:
    return UserId(value="user_999")


@pytest.fixture
def base_date() -> datetime:
    return datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_report(user_id: UserId, base_date: datetime):  # type: ignore[no-untyped-def]
    """Factory for reports; ``days`` shifts the date forward."""

    def _make(
        days: int = 0,
        owner: UserId = user_id,
        summary: str = "**Overview**\nCholesterol slightly high",
        comparison: str | None = None,
        diet_plan: str | None = STUB_DIET_PLAN,
        file_name: str = "blood_test.pdf",
    ) -> Report:
        return Report(
            report_id=ReportId.generate(),
            user_id=owner,
            file_name=file_name,
            date=base_date + timedelta(days=days),
            summary=summary,
            comparison=comparison,
            diet_plan=diet_plan,
        )

    return _make


# ═══════════════════════════════════════════════════════════
# COLLABORATOR FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def repository() -> InMemoryReportRepository:
    return InMemoryReportRepository()


@pytest.fixture
def mock_generator() -> AsyncMock:
    """ITextGenerator double with canned answers."""
    generator = AsyncMock(spec=ITextGenerator)
    generator.generate_summary.return_value = "**Overview**\nIron is low"
    generator.compare_summaries.return_value = "**What's Better**\n* Iron improved"
    generator.generate_diet_plan.return_value = STUB_DIET_PLAN
    generator.answer_question.return_value = "Your iron is slightly low."
    return generator


@pytest.fixture
def mock_extractor() -> MagicMock:
    """Synchronous IPdfTextExtractor double returning fixed report text."""
    extractor = MagicMock(spec=IPdfTextExtractor)
    extractor.extract_text.return_value = "Hemoglobin 11.2 g/dL (ref 12-16)"
    return extractor


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.4 fake report bytes"
