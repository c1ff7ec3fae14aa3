# app/router/products/product_maintenance_router.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile

from shared.core.exceptions import NotFoundException
from shared.helpers.file_upload_helper import parse_form_payload, read_uploads
from shared.helpers.json_response_helper import records_out, success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.services import Services, get_services
from ...schemas.products.product_maintenance_schemas import (
    ProductMaintenanceCreate,
    ProductMaintenanceOut,
    ProductMaintenanceRequest,
    ProductMaintenanceUpdate,
)

router = APIRouter(
    prefix="/api/product-maintenance",
    tags=["product maintenance"],
)


@router.get("/all", response_model=None)
def get_maintenances(
        params: ProductMaintenanceRequest = Depends(),
        services: Services = Depends(get_services)):
    filters = {
        "active": params.active,
        "product_id": params.product_id,
        "type": params.type.value if params.type else None,
    }
    result = services.product_maintenance.get(
        {k: v for k, v in filters.items() if v is not None},
        pagination=params.pagination(),
        order_by=params.ordering(),
    )
    return success_response(data=records_out(result, ProductMaintenanceOut))


@router.get("/{maintenance_id:uuid}", response_model=None)
def get_maintenance(
        maintenance_id: UUID,
        services: Services = Depends(get_services)):
    maintenance = services.product_maintenance.get_by_id(maintenance_id)
    if not maintenance:
        raise NotFoundException("Maintenance not found")
    return success_response(data=ProductMaintenanceOut.model_validate(maintenance))


@router.post("/create", response_model=None)
async def create_maintenance(
    maintenance: str = Form(...),   # JSON string
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    data = parse_form_payload(
        maintenance, ProductMaintenanceCreate, await read_uploads(attachments))
    result = services.product_maintenance.create(data)
    return success_response(
        data=ProductMaintenanceOut.model_validate(result),
        message="Maintenance recorded successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/update", response_model=None)
async def update_maintenance(
    maintenance: str = Form(...),
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    data = parse_form_payload(
        maintenance, ProductMaintenanceUpdate, await read_uploads(attachments))
    result = services.product_maintenance.update(data)
    return success_response(
        data=ProductMaintenanceOut.model_validate(result),
        message="Maintenance updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{maintenance_id:uuid}", response_model=None)
def delete_maintenance(
        maintenance_id: UUID,
        services: Services = Depends(get_services)):
    deleted = services.product_maintenance.delete(maintenance_id)
    return success_response(
        data={"deleted": deleted},
        message="Maintenance deleted successfully" if deleted else "Maintenance already deleted",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
