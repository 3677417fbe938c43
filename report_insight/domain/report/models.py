"""
Report domain models.

A Report is the stored outcome of one PDF upload: the AI summary plus
the optional comparison with the previous report and diet plan.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from report_insight.domain.shared.value_objects import ReportId, UserId


class Report(BaseModel):
    """
    Uploaded medical report.

    Attributes:
        report_id: Unique identifier
        user_id: Owner
        file_name: Original PDF file name
        date: Upload timestamp (UTC)
        summary: Plain-language summary
        comparison: Comparison with the previous report (None for the first)
        diet_plan: Generated diet plan text (None if generation failed)

    Example:
        >>> report = Report.create(
        ...     user_id=UserId(value="user_123"),
        ...     file_name="blood_test.pdf",
        ...     summary="Cholesterol slightly high",
        ... )
        >>> report.has_diet_plan
        False
    """

    model_config = ConfigDict(frozen=True)

    report_id: ReportId = Field(..., description="Unique report ID")
    user_id: UserId = Field(..., description="Report owner")
    file_name: str = Field(..., min_length=1, max_length=255, description="PDF file name")
    date: datetime = Field(..., description="Upload timestamp (UTC)")
    summary: str = Field(..., description="Plain-language summary")
    comparison: Optional[str] = Field(None, description="Changes from previous report")
    diet_plan: Optional[str] = Field(None, description="Generated diet plan")

    @field_validator("date")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def has_diet_plan(self) -> bool:
        return bool(self.diet_plan and self.diet_plan.strip())

    @classmethod
    def create(
        cls,
        user_id: UserId,
        file_name: str,
        summary: str,
        comparison: Optional[str] = None,
        diet_plan: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> Report:
        """Create a new report with a fresh ID, dated now unless given."""
        return cls(
            report_id=ReportId.generate(),
            user_id=user_id,
            file_name=file_name,
            date=date or datetime.now(timezone.utc),
            summary=summary,
            comparison=comparison,
            diet_plan=diet_plan,
        )
