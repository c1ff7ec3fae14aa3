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
from ...enum.product_enum import CommissioningOutcome
from ...models.products.product_commissioning import ProductCommissioning
from ...models.products.products import Product
from .product_status_crud import ProductStatusService

logger = logging.getLogger(__name__)


class ProductCommissioningService:
    """
    Commissioning records of products.

    At most one commissioning per product is active; every mutation here
    re-derives the product status inside the same transaction.
    """

    def __init__(
        self,
        session_factory=SessionLocal,
        file_storage: Optional[DatabaseFileStorage] = None,
        status_service: Optional[ProductStatusService] = None,
        activity_history: Optional[ActivityHistoryService] = None,
        replace_passed: bool = False,
    ):
        self.store = RecordStore(ProductCommissioning, session_factory)
        self.file_storage = file_storage or default_file_storage()
        self.status_service = status_service or ProductStatusService(session_factory)
        self.activity_history = activity_history or ActivityHistoryService(session_factory)
        self.replace_passed = replace_passed

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

    def create(self, data, db: Optional[Session] = None) -> ProductCommissioning:
        data = to_record_data(data)
        data.pop("id", None)

        def work(session: Session):
            product_id = self.store.coerce("product_id", data.get("product_id"))
            if not product_id:
                raise ValidationException("product_id is required")
            if not session.get(Product, product_id):
                raise NotFoundException("Product not found")

            existing = self.store.get({"product_id": product_id, "active": True}, db=session)
            if any(c.outcome == CommissioningOutcome.passed.value for c in existing):
                if not self.replace_passed:
                    logger.warning("Rejected commissioning for product %s: an active passed "
                                   "commissioning already exists", product_id)
                    raise ValidationException("A commissioning already exists for this product.")
                logger.info("Replacing active passed commissioning of product %s", product_id)

            self._store_attachments(data, session)

            for commissioning in existing:
                commissioning.active = False
            session.flush()

            data["product_id"] = product_id
            data["active"] = True
            commissioning = self.store.create(data, session)
            self.status_service.update_product_status(product_id, session)

            self.activity_history.record(
                "Product commissioned",
                "product",
                product_id,
                details=commissioning.details,
                metadata={
                    "commissioning_id": str(commissioning.id),
                    "outcome": commissioning.outcome,
                },
                db=session,
            )
            return commissioning

        return self.store.transaction(db, work)

    def update(self, data, db: Optional[Session] = None) -> ProductCommissioning:
        data = to_record_data(data)
        if data.get("active", True) is None:
            data.pop("active")

        def work(session: Session):
            current = self.store.get_by_id(data.get("id"), session)
            if not current:
                raise NotFoundException("ProductCommissioning not found")

            previous_product_id = current.product_id
            product_id = self.store.coerce("product_id", data.get("product_id")) or current.product_id

            if data.get("active", current.active):
                others = self.store.get(
                    {"product_id": product_id, "active": True, "id": {"ne": current.id}},
                    count=True,
                    db=session,
                )
                if others:
                    logger.warning("Rejected commissioning update %s: product %s already has "
                                   "an active commissioning", current.id, product_id)
                    raise ValidationException(
                        "Another active commissioning exists for this product.")

            self._store_attachments(data, session)
            commissioning = self.store.update(data, session)

            self.status_service.update_product_status(commissioning.product_id, session)
            if previous_product_id != commissioning.product_id:
                self.status_service.update_product_status(previous_product_id, session)
            return commissioning

        return self.store.transaction(db, work)

    def delete(self, record_id: UUID, db: Optional[Session] = None) -> bool:
        def work(session: Session):
            commissioning = self.store.get_by_id(record_id, session)
            if not commissioning:
                raise NotFoundException("ProductCommissioning not found")

            deleted = self.store.delete(commissioning.id, session)
            self.status_service.update_product_status(commissioning.product_id, session)
            return deleted

        return self.store.transaction(db, work)

    def update_decommission(self, data, db: Optional[Session] = None) -> ProductCommissioning:
        """
        Deactivate a commissioning and mark its product as decommissioned.
        This is the only transition that sets the product status directly.
        """
        data = to_record_data(data)
        data["active"] = False

        def work(session: Session):
            commissioning = self.store.update(data, session)
            self.status_service.set_decommissioned(commissioning.product_id, session)

            self.activity_history.record(
                "Product decommissioned",
                "product",
                commissioning.product_id,
                details=data.get("details"),
                metadata={"commissioning_id": str(commissioning.id)},
                db=session,
            )
            return commissioning

        return self.store.transaction(db, work)
