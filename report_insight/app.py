from __future__ import annotations

# Standard library
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

# Third-party
import structlog
from dotenv import load_dotenv
from fastapi import FastAPI

# Local application imports
from report_insight.api.errors import register_exception_handlers
from report_insight.api.reports import router as reports_router
from report_insight.application.chat.chat_service import ReportChatService
from report_insight.application.report.queries import (
    DietPlanQueryService,
    ReportQueryService,
)
from report_insight.application.report.upload_service import ReportUploadService
from report_insight.domain.diet_plan.segmenter import DietPlanSegmenter
from report_insight.domain.report.ports import IReportRepository, ITextGenerator
from report_insight.infrastructure.ai.factory import create_text_generator
from report_insight.infrastructure.config import (
    get_app_version,
    get_log_level,
    get_max_upload_bytes,
    get_openai_api_key,
    get_repository_backend,
    get_text_generator_mode,
    mask_secret,
)
from report_insight.infrastructure.pdf.pdf_extractor import PypdfTextExtractor
from report_insight.infrastructure.persistence.factory import (
    create_mongo_client,
    create_report_repository,
)

load_dotenv()

APP_VERSION = get_app_version()


def configure_logging(level: Optional[str] = None) -> None:
    """Stdlib logging at LOG_LEVEL, structlog rendering on top of it."""
    log_level = getattr(logging, (level or get_log_level()).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def wire_services(
    app: FastAPI,
    repository: IReportRepository,
    generator: ITextGenerator,
    max_upload_bytes: Optional[int] = None,
) -> None:
    """Build the use cases on app.state; one segmenter shared by every diet plan view."""
    segmenter = DietPlanSegmenter()
    app.state.repository = repository
    app.state.upload_service = ReportUploadService(
        repository=repository,
        extractor=PypdfTextExtractor(),
        generator=generator,
        max_upload_bytes=max_upload_bytes or get_max_upload_bytes(),
    )
    app.state.report_queries = ReportQueryService(repository)
    app.state.diet_plan_queries = DietPlanQueryService(repository, segmenter)
    app.state.chat_service = ReportChatService(repository, generator)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown: generator client and database connection."""
    configure_logging()
    logger = structlog.get_logger("startup")

    logger.info(
        "startup.config",
        text_generator=get_text_generator_mode(),
        repository_backend=get_repository_backend(),
        openai_key_masked=mask_secret(get_openai_api_key()),
        version=APP_VERSION,
    )

    mongo_client: Any = create_mongo_client()
    try:
        repository = create_report_repository(mongo_client)

        async with create_text_generator() as generator:
            wire_services(app, repository, generator)
            logger.info(
                "lifespan.ready",
                generator=type(generator).__name__,
                repository=type(repository).__name__,
            )
            yield
            logger.info("lifespan.shutdown")
    finally:
        if mongo_client is not None:
            mongo_client.close()


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Application factory; tests wire services themselves with use_lifespan=False."""
    application = FastAPI(
        title="Report Insight API",
        version=APP_VERSION,
        lifespan=lifespan if use_lifespan else None,
    )
    register_exception_handlers(application)
    application.include_router(reports_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @application.get("/version")
    async def version() -> dict[str, str]:
        return {"version": APP_VERSION}

    return application


app = create_app()
