import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional
from uuid import UUID

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from shared.core.database import SessionLocal
from shared.core.exceptions import NotFoundException, ValidationException
from shared.core.transaction import run_transaction
from ...enum.product_enum import CommissioningOutcome, MaintenanceRecurrency, MaintenanceType, ProductStatus
from ...models.products.maintenance_windows import MaintenanceWindow
from ...models.products.product_commissioning import ProductCommissioning
from ...models.products.product_maintenance import ProductMaintenance
from ...models.products.products import Product

logger = logging.getLogger(__name__)

RECURRENCY_INTERVALS = {
    MaintenanceRecurrency.daily.value: relativedelta(days=1),
    MaintenanceRecurrency.weekly.value: relativedelta(weeks=1),
    MaintenanceRecurrency.monthly.value: relativedelta(months=1),
    MaintenanceRecurrency.quarterly.value: relativedelta(months=3),
    MaintenanceRecurrency.semi_annually.value: relativedelta(months=6),
    MaintenanceRecurrency.annually.value: relativedelta(years=1),
}


def recurrency_interval(window: MaintenanceWindow) -> relativedelta:
    base = RECURRENCY_INTERVALS.get(window.recurrency)
    if base is None:
        raise ValidationException(
            f"Unsupported maintenance recurrency '{window.recurrency}'")
    return base * (window.recurrency_interval or 1)


def resolve_product_status(
    commissioning: Optional[ProductCommissioning],
    maintenances: Iterable[ProductMaintenance],
) -> ProductStatus:
    """
    Derive a product status from its latest active commissioning and its
    maintenance records. Inactive records are ignored.

    Precedence: service > preventive maintenance > passed commissioning.
    """
    active_types = {m.type for m in maintenances if m.active}

    if MaintenanceType.service.value in active_types:
        return ProductStatus.under_service
    if MaintenanceType.preventive_maintenance.value in active_types:
        return ProductStatus.in_preventive_maintenance
    if (
        commissioning is not None
        and commissioning.active
        and commissioning.outcome == CommissioningOutcome.passed.value
    ):
        return ProductStatus.active
    return ProductStatus.awaiting_commissioning


class ProductStatusService:
    """Keeps the derived status and maintenance dates of products in sync."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    # ----------------- Read side -----------------

    def _get_product(self, db: Session, product_id: UUID) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise NotFoundException("Product not found")
        return product

    def active_commissioning(self, db: Session, product_id: UUID) -> Optional[ProductCommissioning]:
        return (
            db.query(ProductCommissioning)
            .filter(
                ProductCommissioning.product_id == product_id,
                ProductCommissioning.active == True
            )
            .order_by(ProductCommissioning.created_at.desc())
            .first()
        )

    def active_maintenances(self, db: Session, product_id: UUID) -> List[ProductMaintenance]:
        return (
            db.query(ProductMaintenance)
            .filter(
                ProductMaintenance.product_id == product_id,
                ProductMaintenance.active == True
            )
            .all()
        )

    def maintenance_window(self, db: Session, product: Product) -> MaintenanceWindow:
        for window_id in product.maintenance_window_ids or []:
            window = db.get(MaintenanceWindow, window_id)
            if window and window.active:
                return window
        raise ValidationException("Maintenance window not found")

    def _require_commissioned(self, db: Session, product: Product):
        commissioning = self.active_commissioning(db, product.id)
        if not commissioning or commissioning.outcome != CommissioningOutcome.passed.value:
            raise ValidationException(
                "Product not commissioned, must be commissioned to update maintenance dates")

    # ----------------- Operations -----------------

    def update_product_status(self, product_id: UUID, db: Optional[Session] = None) -> Product:
        def work(session: Session):
            product = self._get_product(session, product_id)
            status = resolve_product_status(
                self.active_commissioning(session, product_id),
                self.active_maintenances(session, product_id),
            )

            if product.status != status.value:
                logger.info("Product %s status %s -> %s",
                            product_id, product.status, status.value)
            product.status = status.value
            session.flush()
            return product

        return run_transaction(db, work, self.session_factory)

    def set_decommissioned(self, product_id: UUID, db: Optional[Session] = None) -> Product:
        def work(session: Session):
            product = self._get_product(session, product_id)
            logger.info("Product %s status %s -> %s", product_id,
                        product.status, ProductStatus.decommissioned.value)
            product.status = ProductStatus.decommissioned.value
            session.flush()
            return product

        return run_transaction(db, work, self.session_factory)

    def product_has_active_commissioning(self, product_id: UUID, db: Optional[Session] = None) -> bool:
        def work(session: Session):
            commissioning = self.active_commissioning(session, product_id)
            return commissioning is not None and commissioning.outcome == CommissioningOutcome.passed.value

        return run_transaction(db, work, self.session_factory)

    def update_next_product_maintenance_dates(self, product_id: UUID, db: Optional[Session] = None) -> Product:
        """
        Advance the product's maintenance date by one recurrence of its
        maintenance window and recompute the tolerance bounds around it.
        """
        def work(session: Session):
            product = self._get_product(session, product_id)
            self._require_commissioned(session, product)
            window = self.maintenance_window(session, product)

            previous = product.maintenance_date or date.today()
            maintenance_date = previous + recurrency_interval(window)

            product.maintenance_date = maintenance_date
            product.min_maintenance_date = maintenance_date - timedelta(days=window.days_before)
            product.max_maintenance_date = maintenance_date + timedelta(days=window.days_after)
            session.flush()

            logger.info("Product %s next maintenance due %s (%s .. %s)", product_id,
                        product.maintenance_date, product.min_maintenance_date,
                        product.max_maintenance_date)
            return product

        return run_transaction(db, work, self.session_factory)

    def update_product_maintenance_dates(self, product_id: UUID, db: Optional[Session] = None) -> Product:
        """Recompute the tolerance bounds around the current maintenance date."""
        def work(session: Session):
            product = self._get_product(session, product_id)
            self._require_commissioned(session, product)
            window = self.maintenance_window(session, product)

            if not product.maintenance_date:
                raise ValidationException("Product has no maintenance date")

            product.min_maintenance_date = product.maintenance_date - timedelta(days=window.days_before)
            product.max_maintenance_date = product.maintenance_date + timedelta(days=window.days_after)
            session.flush()
            return product

        return run_transaction(db, work, self.session_factory)
