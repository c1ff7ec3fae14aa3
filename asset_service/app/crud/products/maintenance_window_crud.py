from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.core.schemas import OrderBy, PaginationOptions
from ..base_crud import RecordStore
from ...models.products.maintenance_windows import MaintenanceWindow


class MaintenanceWindowService:

    def __init__(self, session_factory=SessionLocal):
        self.store = RecordStore(MaintenanceWindow, session_factory)

    def get(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: Optional[PaginationOptions] = None,
        order_by: Optional[List[OrderBy]] = None,
        count: bool = False,
        db: Optional[Session] = None,
    ):
        return self.store.get(filters, pagination, order_by, count, db)

    def get_by_id(self, record_id: UUID, db: Optional[Session] = None):
        return self.store.get_by_id(record_id, db)

    def create(self, data, db: Optional[Session] = None) -> MaintenanceWindow:
        return self.store.create(data, db)

    def update(self, data, db: Optional[Session] = None) -> MaintenanceWindow:
        return self.store.update(data, db)

    def delete(self, record_id: UUID, db: Optional[Session] = None) -> bool:
        return self.store.delete(record_id, db)
