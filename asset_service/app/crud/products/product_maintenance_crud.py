import logging
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.core.exceptions import NotFoundException, ValidationException
from shared.core.schemas import OrderBy, PaginationOptions
from ..base_crud import RecordStore, to_record_data
from ..common.activity_history_crud import ActivityHistoryService
from ..common.file_storage_crud import ATTACHMENT_CONTENT_TYPES, DatabaseFileStorage, default_file_storage
from ...enum.product_enum import CommissioningOutcome, MaintenanceType
from ...models.products.product_maintenance import ProductMaintenance
from ...models.products.products import Product
from .product_status_crud import ProductStatusService

logger = logging.getLogger(__name__)


class ProductMaintenanceService:

    def __init__(
        self,
        session_factory=SessionLocal,
        file_storage: Optional[DatabaseFileStorage] = None,
        status_service: Optional[ProductStatusService] = None,
        activity_history: Optional[ActivityHistoryService] = None,
    ):
        self.store = RecordStore(ProductMaintenance, session_factory)
        self.file_storage = file_storage or default_file_storage()
        self.status_service = status_service or ProductStatusService(session_factory)
        self.activity_history = activity_history or ActivityHistoryService(session_factory)

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

    def _store_attachments(self, data: dict, session: Session):
        if data.get("attachments") is not None:
            data["attachments"] = self.file_storage.replace_payloads(
                data["attachments"], session, ATTACHMENT_CONTENT_TYPES)

    def _require_approved_commissioning(self, session: Session, product_id: UUID):
        commissioning = self.status_service.active_commissioning(session, product_id)
        if not commissioning:
            logger.warning("Rejected maintenance for product %s: no active commissioning", product_id)
            raise ValidationException("A commissioning must be issued for this product.")
        if commissioning.outcome != CommissioningOutcome.passed.value:
            logger.warning("Rejected maintenance for product %s: commissioning %s not approved",
                           product_id, commissioning.id)
            raise ValidationException("The commissioning for this product has not been approved.")

    def create(self, data, db: Optional[Session] = None) -> ProductMaintenance:
        data = to_record_data(data)
        data.pop("id", None)
        if data.get("active") is None:
            data["active"] = True

        def work(session: Session):
            product_id = self.store.coerce("product_id", data.get("product_id"))
            if not product_id:
                raise ValidationException("product_id is required")
            if not session.get(Product, product_id):
                raise NotFoundException("Product not found")

            self._require_approved_commissioning(session, product_id)
            self._store_attachments(data, session)

            data["product_id"] = product_id
            maintenance = self.store.create(data, session)
            self.status_service.update_product_status(product_id, session)

            if maintenance.active and maintenance.type == MaintenanceType.preventive_maintenance.value:
                self.status_service.update_next_product_maintenance_dates(product_id, session)

            self.activity_history.record(
                "Maintenance recorded",
                "product",
                product_id,
                details=maintenance.name,
                metadata={"maintenance_id": str(maintenance.id), "type": maintenance.type},
                db=session,
            )
            return maintenance

        return self.store.transaction(db, work)

    def update(self, data, db: Optional[Session] = None) -> ProductMaintenance:
        data = to_record_data(data)
        if data.get("active", True) is None:
            data.pop("active")

        def work(session: Session):
            current = self.store.get_by_id(data.get("id"), session)
            if not current:
                raise NotFoundException("ProductMaintenance not found")
            previous_product_id = current.product_id

            self._store_attachments(data, session)
            maintenance = self.store.update(data, session)

            self.status_service.update_product_status(maintenance.product_id, session)
            if previous_product_id != maintenance.product_id:
                self.status_service.update_product_status(previous_product_id, session)
            return maintenance

        return self.store.transaction(db, work)

    def delete(self, record_id: UUID, db: Optional[Session] = None) -> bool:
        def work(session: Session):
            maintenance = self.store.get_by_id(record_id, session)
            if not maintenance:
                raise NotFoundException("ProductMaintenance not found")

            deleted = self.store.delete(maintenance.id, session)
            self.status_service.update_product_status(maintenance.product_id, session)
            return deleted

        return self.store.transaction(db, work)
