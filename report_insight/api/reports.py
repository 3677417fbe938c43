"""REST API endpoints for reports, diet plans and report chat.

The calling user is identified by the ``X-User-Id`` header; authentication
happens upstream.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, UploadFile
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from report_insight.application.chat.chat_service import ChatMessage, ReportChatService
from report_insight.application.report.queries import (
    DietPlanQueryService,
    DietPlanView,
    ReportQueryService,
    ReportView,
)
from report_insight.application.report.upload_service import ReportUploadService
from report_insight.domain.report.models import Report
from report_insight.domain.shared.errors import ReportNotFoundError
from report_insight.domain.shared.value_objects import ReportId, UserId


class ReportCreatedResponse(BaseModel):
    """Response model for a successful upload."""

    report_id: str
    file_name: str
    date: datetime
    summary: str
    comparison: Optional[str] = None
    has_diet_plan: bool

    @classmethod
    def from_report(cls, report: Report) -> "ReportCreatedResponse":
        return cls(
            report_id=report.report_id.value,
            file_name=report.file_name,
            date=report.date,
            summary=report.summary,
            comparison=report.comparison,
            has_diet_plan=report.has_diet_plan,
        )


class QuestionRequest(BaseModel):
    question: str = Field(..., description="Question about the latest report")


router = APIRouter(prefix="/api/v1", tags=["reports"])


# ═══════════════════════════════════════════════════════════
# DEPENDENCIES
# ═══════════════════════════════════════════════════════════


def get_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> UserId:
    try:
        return UserId(value=x_user_id)
    except PydanticValidationError:
        raise HTTPException(status_code=401, detail="Missing user identity")


def get_upload_service(request: Request) -> ReportUploadService:
    return request.app.state.upload_service  # type: ignore[no-any-return]


def get_report_queries(request: Request) -> ReportQueryService:
    return request.app.state.report_queries  # type: ignore[no-any-return]


def get_diet_plan_queries(request: Request) -> DietPlanQueryService:
    return request.app.state.diet_plan_queries  # type: ignore[no-any-return]


def get_chat_service(request: Request) -> ReportChatService:
    return request.app.state.chat_service  # type: ignore[no-any-return]


def parse_report_id(report_id: str) -> ReportId:
    try:
        return ReportId.from_string(report_id)
    except PydanticValidationError:
        raise ReportNotFoundError(f"Report {report_id} not found")


# ═══════════════════════════════════════════════════════════
# REPORTS
# ═══════════════════════════════════════════════════════════


@router.post("/reports", response_model=ReportCreatedResponse, status_code=201)
async def upload_report(
    file: UploadFile = File(..., description="Medical report PDF"),
    user_id: UserId = Depends(get_user_id),
    service: ReportUploadService = Depends(get_upload_service),
) -> ReportCreatedResponse:
    data = await file.read()
    report = await service.upload(user_id=user_id, file_name=file.filename or "", data=data)
    return ReportCreatedResponse.from_report(report)


@router.get("/reports", response_model=List[ReportView])
async def list_reports(
    user_id: UserId = Depends(get_user_id),
    queries: ReportQueryService = Depends(get_report_queries),
) -> List[ReportView]:
    return await queries.history(user_id)


@router.get("/reports/{report_id}", response_model=ReportView)
async def get_report(
    report_id: str,
    user_id: UserId = Depends(get_user_id),
    queries: ReportQueryService = Depends(get_report_queries),
) -> ReportView:
    return await queries.get_report(user_id, parse_report_id(report_id))


# ═══════════════════════════════════════════════════════════
# DIET PLANS
# ═══════════════════════════════════════════════════════════


@router.get("/reports/{report_id}/diet-plan", response_model=DietPlanView)
async def get_report_diet_plan(
    report_id: str,
    user_id: UserId = Depends(get_user_id),
    queries: DietPlanQueryService = Depends(get_diet_plan_queries),
) -> DietPlanView:
    return await queries.for_report(user_id, parse_report_id(report_id))


@router.get("/diet-plan", response_model=DietPlanView)
async def get_latest_diet_plan(
    user_id: UserId = Depends(get_user_id),
    queries: DietPlanQueryService = Depends(get_diet_plan_queries),
) -> DietPlanView:
    return await queries.latest(user_id)


# ═══════════════════════════════════════════════════════════
# CHAT
# ═══════════════════════════════════════════════════════════


@router.get("/chat/greeting", response_model=ChatMessage)
async def chat_greeting(
    user_id: UserId = Depends(get_user_id),
    chat: ReportChatService = Depends(get_chat_service),
) -> ChatMessage:
    return await chat.greeting(user_id)


@router.post("/chat", response_model=ChatMessage)
async def ask_question(
    payload: QuestionRequest,
    user_id: UserId = Depends(get_user_id),
    chat: ReportChatService = Depends(get_chat_service),
) -> ChatMessage:
    return await chat.ask(user_id, payload.question)
