# app/router/products/maintenance_window_router.py
from uuid import UUID

from fastapi import APIRouter, Depends

from shared.core.exceptions import NotFoundException
from shared.helpers.json_response_helper import records_out, success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.services import Services, get_services
from ...schemas.products.maintenance_window_schemas import (
    MaintenanceWindowCreate,
    MaintenanceWindowOut,
    MaintenanceWindowRequest,
    MaintenanceWindowUpdate,
)

router = APIRouter(
    prefix="/api/maintenance-windows",
    tags=["maintenance windows"],
)


@router.get("/all", response_model=None)
def get_maintenance_windows(
        params: MaintenanceWindowRequest = Depends(),
        services: Services = Depends(get_services)):
    filters = {
        "active": params.active,
        "recurrency": params.recurrency.value if params.recurrency else None,
    }
    result = services.maintenance_windows.get(
        {k: v for k, v in filters.items() if v is not None},
        pagination=params.pagination(),
        order_by=params.ordering(),
    )
    return success_response(data=records_out(result, MaintenanceWindowOut))


@router.get("/{window_id:uuid}", response_model=None)
def get_maintenance_window(
        window_id: UUID,
        services: Services = Depends(get_services)):
    window = services.maintenance_windows.get_by_id(window_id)
    if not window:
        raise NotFoundException("Maintenance window not found")
    return success_response(data=MaintenanceWindowOut.model_validate(window))


@router.post("/create", response_model=None)
def create_maintenance_window(
        window: MaintenanceWindowCreate,
        services: Services = Depends(get_services)):
    result = services.maintenance_windows.create(window)
    return success_response(
        data=MaintenanceWindowOut.model_validate(result),
        message="Maintenance window created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/update", response_model=None)
def update_maintenance_window(
        window: MaintenanceWindowUpdate,
        services: Services = Depends(get_services)):
    result = services.maintenance_windows.update(window)
    return success_response(
        data=MaintenanceWindowOut.model_validate(result),
        message="Maintenance window updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{window_id:uuid}", response_model=None)
def delete_maintenance_window(
        window_id: UUID,
        services: Services = Depends(get_services)):
    deleted = services.maintenance_windows.delete(window_id)
    return success_response(
        data={"deleted": deleted},
        message="Maintenance window deleted successfully" if deleted else "Maintenance window already deleted",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
