from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ActivityHistoryOut(BaseModel):
    id: UUID
    title: str
    details: Optional[str] = None
    perform_date: datetime
    model: str
    model_id: UUID
    metadata: Optional[Any] = Field(None, validation_alias="extra")

    model_config = {"from_attributes": True, "populate_by_name": True, "protected_namespaces": ()}
