from dataclasses import dataclass

from fastapi import Request

from shared.core.config import Settings, settings as default_settings
from shared.core.database import SessionLocal
from ..crud.common.activity_history_crud import ActivityHistoryService
from ..crud.common.file_storage_crud import DatabaseFileStorage
from ..crud.products.maintenance_window_crud import MaintenanceWindowService
from ..crud.products.product_commissioning_crud import ProductCommissioningService
from ..crud.products.product_crud import ProductService
from ..crud.products.product_maintenance_crud import ProductMaintenanceService
from ..crud.products.product_status_crud import ProductStatusService


@dataclass
class Services:
    session_factory: object
    file_storage: DatabaseFileStorage
    activity_history: ActivityHistoryService
    product_status: ProductStatusService
    products: ProductService
    product_commissioning: ProductCommissioningService
    product_maintenance: ProductMaintenanceService
    maintenance_windows: MaintenanceWindowService


def build_services(session_factory=SessionLocal, settings: Settings = default_settings) -> Services:
    file_storage = DatabaseFileStorage(
        settings.FILE_BUCKET_NAME, settings.MAX_UPLOAD_SIZE_MB)
    activity_history = ActivityHistoryService(session_factory)
    product_status = ProductStatusService(session_factory)

    return Services(
        session_factory=session_factory,
        file_storage=file_storage,
        activity_history=activity_history,
        product_status=product_status,
        products=ProductService(session_factory, file_storage, product_status),
        product_commissioning=ProductCommissioningService(
            session_factory,
            file_storage,
            product_status,
            activity_history,
            replace_passed=settings.COMMISSIONING_REPLACE_PASSED,
        ),
        product_maintenance=ProductMaintenanceService(
            session_factory, file_storage, product_status, activity_history),
        maintenance_windows=MaintenanceWindowService(session_factory),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
