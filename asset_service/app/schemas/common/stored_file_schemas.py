from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class StoredFileOut(BaseModel):
    id: UUID
    file_name: str
    content_type: str
    size: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
