import logging
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.core.schemas import OrderBy, PaginationOptions
from ..base_crud import RecordStore, to_record_data
from ..common.file_storage_crud import (
    ATTACHMENT_CONTENT_TYPES,
    IMAGE_CONTENT_TYPES,
    DatabaseFileStorage,
    default_file_storage,
)
from ...models.products.products import Product
from .product_status_crud import ProductStatusService

logger = logging.getLogger(__name__)

# set only by commissioning / maintenance changes
DERIVED_FIELDS = ("status", "min_maintenance_date", "max_maintenance_date")


class ProductService:

    def __init__(
        self,
        session_factory=SessionLocal,
        file_storage: Optional[DatabaseFileStorage] = None,
        status_service: Optional[ProductStatusService] = None,
    ):
        self.store = RecordStore(Product, session_factory)
        self.file_storage = file_storage or default_file_storage()
        self.status_service = status_service or ProductStatusService(session_factory)

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

    def _prepare(self, data, session: Session) -> dict:
        data = to_record_data(data)
        for field in DERIVED_FIELDS:
            data.pop(field, None)

        if data.get("photo") is not None:
            data["photo"] = self.file_storage.store_payload(
                data["photo"], session, IMAGE_CONTENT_TYPES)
        if data.get("attachments") is not None:
            data["attachments"] = self.file_storage.replace_payloads(
                data["attachments"], session, ATTACHMENT_CONTENT_TYPES)
        if data.get("active", True) is None:
            data.pop("active")
        return data

    def _sync_maintenance_dates(self, product: Product, data: dict, session: Session):
        if data.get("maintenance_date") is None:
            return
        if self.status_service.product_has_active_commissioning(product.id, session):
            self.status_service.update_product_maintenance_dates(product.id, session)

    def create(self, data, db: Optional[Session] = None) -> Product:
        def work(session: Session):
            record = self._prepare(data, session)
            record.pop("id", None)

            product = self.store.create(record, session)
            logger.info("Created product %s (%s)", product.id, product.serial_number)
            self._sync_maintenance_dates(product, record, session)
            return product

        return self.store.transaction(db, work)

    def update(self, data, db: Optional[Session] = None) -> Product:
        def work(session: Session):
            record = self._prepare(data, session)

            product = self.store.update(record, session)
            self._sync_maintenance_dates(product, record, session)
            return product

        return self.store.transaction(db, work)

    def delete(self, record_id: UUID, db: Optional[Session] = None) -> bool:
        return self.store.delete(record_id, db)
