"""
MongoDB implementation of report repository.

Storage design:
- Collection: reports
- Unique index on report_id
- Compound index on (user_id, date DESC) for newest-first queries
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from report_insight.domain.report.models import Report
from report_insight.domain.shared.errors import DatabaseError
from report_insight.domain.shared.value_objects import ReportId, UserId

logger = structlog.get_logger(__name__)


class MongoReportRepository:
    """
    MongoDB implementation of IReportRepository.

    Example:
        >>> from motor.motor_asyncio import AsyncIOMotorClient
        >>> client = AsyncIOMotorClient("mongodb://localhost:27017")
        >>> repository = MongoReportRepository(client.report_insight)
        >>> await repository.insert(report)
    """

    COLLECTION_NAME = "reports"

    def __init__(self, db: AsyncIOMotorDatabase[Any]):
        """
        Initialize repository with MongoDB database.

        Creates indexes on first use.

        Args:
            db: Motor AsyncIOMotorDatabase instance
        """
        self.db = db
        self.collection = db[self.COLLECTION_NAME]
        self._indexes_created = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_created:
            return

        await self.collection.create_index(
            "report_id",
            unique=True,
            name="unique_report_id",
        )
        await self.collection.create_index(
            [("user_id", 1), ("date", DESCENDING)],
            name="idx_user_recent",
        )

        self._indexes_created = True

    def _to_document(self, report: Report) -> Dict[str, Any]:
        return {
            "report_id": report.report_id.value,
            "user_id": report.user_id.value,
            "file_name": report.file_name,
            "date": report.date,
            "summary": report.summary,
            "comparison": report.comparison,
            "diet_plan": report.diet_plan,
        }

    def _from_document(self, doc: Dict[str, Any]) -> Report:
        return Report(
            report_id=ReportId(value=doc["report_id"]),
            user_id=UserId(value=doc["user_id"]),
            file_name=doc["file_name"],
            date=doc["date"],
            summary=doc["summary"],
            comparison=doc.get("comparison"),
            diet_plan=doc.get("diet_plan"),
        )

    async def insert(self, report: Report) -> None:
        try:
            await self._ensure_indexes()
            await self.collection.insert_one(self._to_document(report))
        except PyMongoError as e:
            logger.error("mongo.insert_failed", report_id=report.report_id.value, error=str(e))
            raise DatabaseError(f"Failed to store report {report.report_id}: {e}") from e

    async def query(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        require_diet_plan: bool = False,
    ) -> List[Report]:
        filter_: Dict[str, Any] = {"user_id": user_id.value}
        if require_diet_plan:
            filter_["diet_plan"] = {"$regex": r"\S"}

        try:
            await self._ensure_indexes()
            cursor = self.collection.find(filter_).sort("date", DESCENDING)
            if limit is not None:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error("mongo.query_failed", user_id=user_id.value, error=str(e))
            raise DatabaseError(f"Failed to query reports: {e}") from e

        return [self._from_document(doc) for doc in docs]

    async def get_by_id(self, report_id: ReportId, user_id: UserId) -> Optional[Report]:
        try:
            await self._ensure_indexes()
            doc = await self.collection.find_one(
                {"report_id": report_id.value, "user_id": user_id.value}
            )
        except PyMongoError as e:
            raise DatabaseError(f"Failed to load report {report_id}: {e}") from e

        if doc is None:
            return None
        return self._from_document(doc)
