"""In-memory report repository implementation.

Provides an in-memory implementation of IReportRepository port for testing
and local runs. Uses a dictionary for storage with no external dependencies.
"""

from typing import Dict, List, Optional

from report_insight.domain.report.models import Report
from report_insight.domain.shared.value_objects import ReportId, UserId


class InMemoryReportRepository:
    """
    In-memory implementation of IReportRepository port.

    Reports are frozen models, so they are stored and returned as is.

    Thread safety: NOT thread-safe (single event loop only)
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> repository = InMemoryReportRepository()
        >>> await repository.insert(report)
        >>> reports = await repository.query(report.user_id)
    """

    def __init__(self) -> None:
        """Initialize repository with empty storage."""
        self._storage: Dict[ReportId, Report] = {}

    async def insert(self, report: Report) -> None:
        self._storage[report.report_id] = report

    async def query(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        require_diet_plan: bool = False,
    ) -> List[Report]:
        reports = [
            report
            for report in self._storage.values()
            if report.user_id == user_id and (report.has_diet_plan or not require_diet_plan)
        ]
        reports.sort(key=lambda r: r.date, reverse=True)
        if limit is not None:
            return reports[:limit]
        return reports

    async def get_by_id(self, report_id: ReportId, user_id: UserId) -> Optional[Report]:
        report = self._storage.get(report_id)

        # Authorization check: report must belong to user
        if report is None or report.user_id != user_id:
            return None
        return report

    def clear(self) -> None:
        """Remove all reports (testing helper)."""
        self._storage.clear()

    def count(self) -> int:
        return len(self._storage)
