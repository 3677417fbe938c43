"""
Shared value objects.

Immutable, validated domain primitives.
Following DDD value object pattern.
"""

from __future__ import annotations

import uuid
from pydantic import BaseModel, Field, field_validator, ConfigDict


class UserId(BaseModel):
    """
    User ID value object.

    Wraps string ID with validation and type safety.

    Example:
        >>> user_id = UserId(value="user_123")
        >>> assert str(user_id) == "user_123"
        >>> user_id2 = UserId.from_string("user_456")
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="User identifier")

    @field_validator("value")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Ensure not empty or whitespace."""
        if not v.strip():
            raise ValueError("UserId cannot be empty or whitespace")
        return v.strip()

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"UserId('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    @classmethod
    def from_string(cls, s: str) -> UserId:
        """Create from string."""
        return cls(value=s)


class ReportId(BaseModel):
    """
    Report ID value object.

    Identifies an uploaded medical report.
    Format: "report_<12_hex_chars>"

    Example:
        >>> report_id = ReportId.generate()
        >>> assert report_id.value.startswith("report_")
        >>> assert len(report_id.value) == 19  # "report_" + 12 chars
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(
        ...,
        pattern=r"^report_[a-f0-9]{12}$",
        description="Report identifier",
    )

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"ReportId('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    @classmethod
    def generate(cls) -> ReportId:
        """
        Generate new report ID.

        Returns:
            New ReportId with random UUID part

        Example:
            >>> id1 = ReportId.generate()
            >>> id2 = ReportId.generate()
            >>> assert id1 != id2
        """
        random_part = uuid.uuid4().hex[:12]
        return cls(value=f"report_{random_part}")

    @classmethod
    def from_string(cls, s: str) -> ReportId:
        """Create from string."""
        return cls(value=s)
