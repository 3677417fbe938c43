"""
Ports (Interfaces) for report processing dependencies.

Defines the external collaborators of the report use cases: the report
store, PDF text extraction and the generative text service.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import List, Optional, Protocol, runtime_checkable

from report_insight.domain.report.models import Report
from report_insight.domain.shared.value_objects import ReportId, UserId


@runtime_checkable
class IReportRepository(Protocol):
    """
    Repository interface for uploaded reports.

    Implementations must provide:
    - User-scoped queries ordered by date DESC
    - Optional filtering on reports that carry a diet plan

    Example:
        >>> repository = InMemoryReportRepository()
        >>> await repository.insert(report)
        >>> latest = await repository.query(report.user_id, limit=1)
    """

    async def insert(self, report: Report) -> None:
        """
        Store a new report.

        Raises:
            DatabaseError: On storage failure
        """
        ...

    async def query(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        require_diet_plan: bool = False,
    ) -> List[Report]:
        """
        Reports of a user, newest first.

        Args:
            user_id: Owner
            limit: Maximum number to return (None = all)
            require_diet_plan: Only reports with a diet plan

        Returns:
            List of Report (may be empty)
        """
        ...

    async def get_by_id(self, report_id: ReportId, user_id: UserId) -> Optional[Report]:
        """
        Retrieve one report of a user.

        Returns:
            Report if found and owned by user_id, None otherwise
        """
        ...


@runtime_checkable
class IPdfTextExtractor(Protocol):
    """Port for PDF-to-text extraction; synchronous, callers run it in an executor."""

    def extract_text(self, data: bytes) -> str:
        """
        Extract the text of every page.

        Raises:
            PdfExtractionError: If the PDF cannot be read or has no text
        """
        ...


@runtime_checkable
class ITextGenerator(Protocol):
    """
    Port for the generative text service.

    Outputs are free text, non-deterministic and unvalidated.
    """

    async def generate_summary(self, report_text: str) -> str:
        """Patient-friendly summary of the report text."""
        ...

    async def compare_summaries(self, old_summary: str, new_summary: str) -> str:
        """Comparison between the previous and the new summary."""
        ...

    async def generate_diet_plan(self, report_summary: str) -> str:
        """Diet plan derived from the summary."""
        ...

    async def answer_question(self, question: str, report_summary: str) -> str:
        """Answer a question using the summary as context."""
        ...
