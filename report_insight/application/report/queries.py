"""
Report read-side use cases.

History and single-report views (summary and comparison formatted line
by line) and diet plan views (segmented into display buckets). Both
diet plan paths go through the same segmenter.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import structlog
from pydantic import BaseModel, ConfigDict

from report_insight.domain.diet_plan.models import DietPlanSections
from report_insight.domain.diet_plan.segmenter import DietPlanSegmenter
from report_insight.domain.report.markdown import FormattedLine, format_markdown
from report_insight.domain.report.models import Report
from report_insight.domain.report.ports import IReportRepository
from report_insight.domain.shared.errors import DietPlanNotFoundError, ReportNotFoundError
from report_insight.domain.shared.value_objects import ReportId, UserId

logger = structlog.get_logger(__name__)


class ReportView(BaseModel):
    """Report as shown in the history list."""

    model_config = ConfigDict(frozen=True)

    report_id: str
    file_name: str
    date: datetime
    summary: List[FormattedLine]
    comparison: Optional[List[FormattedLine]] = None
    has_diet_plan: bool = False

    @classmethod
    def from_report(cls, report: Report) -> ReportView:
        return cls(
            report_id=report.report_id.value,
            file_name=report.file_name,
            date=report.date,
            summary=format_markdown(report.summary),
            comparison=format_markdown(report.comparison) if report.comparison else None,
            has_diet_plan=report.has_diet_plan,
        )


class DietPlanView(BaseModel):
    """Segmented diet plan with the report it comes from."""

    model_config = ConfigDict(frozen=True)

    report_id: str
    file_name: str
    date: datetime
    sections: DietPlanSections


class ReportQueryService:
    """Read access to a user's reports."""

    def __init__(self, repository: IReportRepository):
        self.repository = repository

    async def history(self, user_id: UserId) -> List[ReportView]:
        """Every report of the user, newest first."""
        reports = await self.repository.query(user_id)
        return [ReportView.from_report(report) for report in reports]

    async def get_report(self, user_id: UserId, report_id: ReportId) -> ReportView:
        """
        One report of the user.

        Raises:
            ReportNotFoundError: Unknown ID or not owned by the user
        """
        report = await self.repository.get_by_id(report_id, user_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} not found")
        return ReportView.from_report(report)


class DietPlanQueryService:
    """
    Segmented diet plans.

    Example:
        >>> service = DietPlanQueryService(repository)
        >>> view = await service.latest(UserId(value="user_123"))
        >>> view.sections.green_foods
        ('Apples', 'Leafy greens')
    """

    def __init__(
        self,
        repository: IReportRepository,
        segmenter: Optional[DietPlanSegmenter] = None,
    ):
        self.repository = repository
        self.segmenter = segmenter or DietPlanSegmenter()

    async def latest(self, user_id: UserId) -> DietPlanView:
        """
        Diet plan of the newest report that has one.

        Raises:
            DietPlanNotFoundError: No report of the user carries a diet plan
        """
        reports = await self.repository.query(user_id, limit=1, require_diet_plan=True)
        if not reports:
            raise DietPlanNotFoundError(
                "No diet plan available. Upload a medical report to get one."
            )
        return self._view(reports[0])

    async def for_report(self, user_id: UserId, report_id: ReportId) -> DietPlanView:
        """
        Diet plan of one report.

        Raises:
            ReportNotFoundError: Unknown ID or not owned by the user
            DietPlanNotFoundError: Report stored without a diet plan
        """
        report = await self.repository.get_by_id(report_id, user_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} not found")
        if not report.has_diet_plan:
            raise DietPlanNotFoundError(f"Report {report_id} has no diet plan")
        return self._view(report)

    def _view(self, report: Report) -> DietPlanView:
        sections = self.segmenter.segment(report.diet_plan or "")
        logger.debug(
            "diet_plan.segmented",
            report_id=report.report_id.value,
            items={key.value: len(values) for key, values in sections.items()},
        )
        return DietPlanView(
            report_id=report.report_id.value,
            file_name=report.file_name,
            date=report.date,
            sections=sections,
        )
