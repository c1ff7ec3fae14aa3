import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.core.schemas import OrderBy
from ..base_crud import RecordStore
from ...models.common.activity_history import ActivityHistory

logger = logging.getLogger(__name__)


class ActivityHistoryService:

    def __init__(self, session_factory=SessionLocal):
        self.store = RecordStore(ActivityHistory, session_factory)

    def record(
        self,
        title: str,
        model: str,
        model_id: UUID,
        details: Optional[str] = None,
        metadata: Optional[Any] = None,
        db: Optional[Session] = None,
    ) -> ActivityHistory:
        logger.info("%s: %s %s", title, model, model_id)
        return self.store.create({
            "title": title,
            "details": details,
            "perform_date": datetime.utcnow(),
            "model": model,
            "model_id": model_id,
            "extra": metadata,
        }, db)

    def get_for(self, model: str, model_id: UUID, db: Optional[Session] = None):
        return self.store.get(
            {"model": model, "model_id": model_id},
            order_by=[OrderBy(field="perform_date", direction="desc")],
            db=db,
        )
