"""Repository Factory for Persistence Layer.

Environment-based repository selection with graceful fallback to in-memory.
Strategy:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

Usage:
    from report_insight.infrastructure.persistence.factory import (
        create_report_repository,
    )

    repo = create_report_repository()  # inmemory
    repo = create_report_repository(mongo_client)  # mongodb, if selected
"""

from typing import Any, Optional, Union

from motor.motor_asyncio import AsyncIOMotorClient

from report_insight.infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    get_repository_backend,
)
from report_insight.infrastructure.persistence.in_memory.report_repository import (
    InMemoryReportRepository,
)
from report_insight.infrastructure.persistence.mongodb.report_repository import (
    MongoReportRepository,
)


def create_mongo_client() -> Optional[AsyncIOMotorClient]:  # type: ignore[type-arg]
    """Create a Motor client when REPOSITORY_BACKEND=mongodb, else None.

    Raises:
        ValueError: If mongodb selected but MONGODB_URI not set
    """
    if get_repository_backend() != "mongodb":
        return None

    uri = get_mongodb_uri()
    if not uri:
        raise ValueError(
            "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
            "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
        )
    return AsyncIOMotorClient(uri, tz_aware=True)


def create_report_repository(
    mongo_client: Optional[Any] = None,
) -> Union[InMemoryReportRepository, MongoReportRepository]:
    """Create report repository based on REPOSITORY_BACKEND env var.

    Environment variable: REPOSITORY_BACKEND
    Values:
        - "inmemory": In-memory repository (default, fast, transient)
        - "mongodb": MongoDB repository (persistent, requires MONGODB_URI)

    Args:
        mongo_client: Motor client, required for mongodb

    Raises:
        ValueError: If mongodb selected but no client given
    """
    if get_repository_backend() == "mongodb":
        if mongo_client is None:
            raise ValueError("REPOSITORY_BACKEND=mongodb requires a Motor client")
        return MongoReportRepository(mongo_client[get_mongodb_database()])

    return InMemoryReportRepository()
