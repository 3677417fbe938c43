"""
Report Upload Service.

Turns an uploaded PDF into a stored report: text extraction, summary,
comparison with the previous report and diet plan.

Design Pattern: Service Layer + Dependency Injection
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Optional

import structlog

from report_insight.domain.report.models import Report
from report_insight.domain.report.ports import (
    IPdfTextExtractor,
    IReportRepository,
    ITextGenerator,
)
from report_insight.domain.shared.errors import (
    ExternalServiceError,
    GenerationError,
    ValidationError,
)
from report_insight.domain.shared.value_objects import UserId

logger = structlog.get_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class ReportUploadService:
    """
    Processes uploaded medical reports.

    Workflow:
    1. Validate the upload (PDF extension, non-empty, size cap)
    2. Extract text from the PDF
    3. Generate the summary
    4. Compare with the most recent previous report, if any
    5. Generate the diet plan (failure tolerated, report stored without it)
    6. Store and return the report

    Any failure in steps 1-4 aborts the upload; nothing is stored.

    Example:
        >>> service = ReportUploadService(
        ...     repository=InMemoryReportRepository(),
        ...     extractor=PypdfTextExtractor(),
        ...     generator=StubTextGenerator(),
        ... )
        >>> report = await service.upload(
        ...     user_id=UserId(value="user_123"),
        ...     file_name="blood_test.pdf",
        ...     data=pdf_bytes,
        ... )
    """

    def __init__(
        self,
        repository: IReportRepository,
        extractor: IPdfTextExtractor,
        generator: ITextGenerator,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ):
        self.repository = repository
        self.extractor = extractor
        self.generator = generator
        self.max_upload_bytes = max_upload_bytes

    def validate_upload(self, file_name: str, data: bytes) -> None:
        """
        Validate an upload before any processing.

        Raises:
            ValidationError: Not a .pdf file, empty or too large
        """
        if not file_name or os.path.splitext(file_name)[1].lower() != ".pdf":
            raise ValidationError("Only PDF files are accepted")
        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > self.max_upload_bytes:
            max_mb = self.max_upload_bytes / (1024 * 1024)
            raise ValidationError(f"File too large. Maximum size: {max_mb:.0f}MB")

    async def upload(self, user_id: UserId, file_name: str, data: bytes) -> Report:
        """
        Process and store an uploaded report.

        Args:
            user_id: Uploading user
            file_name: Original file name
            data: Raw PDF bytes

        Returns:
            The stored Report

        Raises:
            ValidationError: Invalid upload
            PdfExtractionError: PDF unreadable or without text
            ExternalServiceError: Summary or comparison generation failed
            DatabaseError: Report could not be stored
        """
        self.validate_upload(file_name, data)
        log = logger.bind(user_id=user_id.value, file_name=file_name)

        # pypdf parsing is CPU bound; keep it off the event loop
        loop = asyncio.get_running_loop()
        report_text = await loop.run_in_executor(None, self.extractor.extract_text, data)
        log.info("report.text_extracted", chars=len(report_text))

        summary = await self.generator.generate_summary(report_text)
        if not summary.strip():
            raise GenerationError("Summary generation returned no text")

        previous = await self.repository.query(user_id, limit=1)
        comparison: Optional[str] = None
        if previous:
            comparison = await self.generator.compare_summaries(previous[0].summary, summary)
            log.info("report.compared", previous_report_id=previous[0].report_id.value)

        diet_plan = await self._try_generate_diet_plan(summary, log)

        report = Report.create(
            user_id=user_id,
            file_name=file_name,
            summary=summary,
            comparison=comparison or None,
            diet_plan=diet_plan or None,
        )
        await self.repository.insert(report)

        log.info(
            "report.uploaded",
            report_id=report.report_id.value,
            has_comparison=report.comparison is not None,
            has_diet_plan=report.has_diet_plan,
        )
        return report

    async def _try_generate_diet_plan(self, summary: str, log: Any) -> Optional[str]:
        try:
            return await self.generator.generate_diet_plan(summary)
        except ExternalServiceError as e:
            log.error("report.diet_plan_failed", error=str(e))
            return None
