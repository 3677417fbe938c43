"""
Report chat use case.

Answers patient questions using the latest report summary as context.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field

from report_insight.domain.report.ports import IReportRepository, ITextGenerator
from report_insight.domain.shared.errors import (
    ExternalServiceError,
    ReportNotFoundError,
    ValidationError,
)
from report_insight.domain.shared.value_objects import UserId

logger = structlog.get_logger(__name__)

NO_REPORT_MESSAGE = (
    "You don't have any reports uploaded yet. Please upload a medical report "
    "first so I can help answer questions about it."
)
APOLOGY_MESSAGE = "I'm sorry, I wasn't able to process your question. Please try again."


class Sender(str, Enum):
    USER = "user"
    AI = "ai"


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    sender: Sender
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReportChatService:
    """
    Question answering over the user's latest report.

    Example:
        >>> chat = ReportChatService(repository, generator)
        >>> reply = await chat.ask(UserId(value="user_123"), "Is my iron low?")
        >>> reply.sender
        'ai'
    """

    def __init__(self, repository: IReportRepository, generator: ITextGenerator):
        self.repository = repository
        self.generator = generator

    async def greeting(self, user_id: UserId) -> ChatMessage:
        """Welcome message naming the latest report, or an upload prompt."""
        latest = await self.repository.query(user_id, limit=1)
        if not latest:
            return ChatMessage(sender=Sender.AI, text=NO_REPORT_MESSAGE)
        return ChatMessage(
            sender=Sender.AI,
            text=(
                f"Hello! I've analyzed your latest report ({latest[0].file_name}). "
                "How can I help you understand it better?"
            ),
        )

    async def ask(self, user_id: UserId, question: str) -> ChatMessage:
        """
        Answer a question about the latest report.

        Generator failures are answered with an apology rather than raised.

        Raises:
            ValidationError: Blank question
            ReportNotFoundError: User has no report yet
        """
        if not question or not question.strip():
            raise ValidationError("Question cannot be empty")

        latest = await self.repository.query(user_id, limit=1)
        if not latest:
            raise ReportNotFoundError(NO_REPORT_MESSAGE)

        try:
            answer = await self.generator.answer_question(question.strip(), latest[0].summary)
        except ExternalServiceError as e:
            logger.error("chat.answer_failed", user_id=user_id.value, error=str(e))
            return ChatMessage(sender=Sender.AI, text=APOLOGY_MESSAGE)

        return ChatMessage(sender=Sender.AI, text=answer)
