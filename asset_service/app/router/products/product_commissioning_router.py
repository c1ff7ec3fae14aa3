# app/router/products/product_commissioning_router.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile

from shared.core.exceptions import NotFoundException
from shared.helpers.file_upload_helper import parse_form_payload, read_uploads
from shared.helpers.json_response_helper import records_out, success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.services import Services, get_services
from ...schemas.products.product_commissioning_schemas import (
    ProductCommissioningCreate,
    ProductCommissioningOut,
    ProductCommissioningRequest,
    ProductCommissioningUpdate,
    ProductDecommissionRequest,
)

router = APIRouter(
    prefix="/api/product-commissioning",
    tags=["product commissioning"],
)


@router.get("/all", response_model=None)
def get_commissionings(
        params: ProductCommissioningRequest = Depends(),
        services: Services = Depends(get_services)):
    filters = {
        "active": params.active,
        "product_id": params.product_id,
        "outcome": params.outcome.value if params.outcome else None,
    }
    result = services.product_commissioning.get(
        {k: v for k, v in filters.items() if v is not None},
        pagination=params.pagination(),
        order_by=params.ordering(),
    )
    return success_response(data=records_out(result, ProductCommissioningOut))


@router.get("/{commissioning_id:uuid}", response_model=None)
def get_commissioning(
        commissioning_id: UUID,
        services: Services = Depends(get_services)):
    commissioning = services.product_commissioning.get_by_id(commissioning_id)
    if not commissioning:
        raise NotFoundException("Commissioning not found")
    return success_response(data=ProductCommissioningOut.model_validate(commissioning))


@router.post("/create", response_model=None)
async def create_commissioning(
    commissioning: str = Form(...),   # JSON string
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    data = parse_form_payload(
        commissioning, ProductCommissioningCreate, await read_uploads(attachments))
    result = services.product_commissioning.create(data)
    return success_response(
        data=ProductCommissioningOut.model_validate(result),
        message="Product commissioned successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/update", response_model=None)
async def update_commissioning(
    commissioning: str = Form(...),
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    data = parse_form_payload(
        commissioning, ProductCommissioningUpdate, await read_uploads(attachments))
    result = services.product_commissioning.update(data)
    return success_response(
        data=ProductCommissioningOut.model_validate(result),
        message="Commissioning updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.put("/decommission", response_model=None)
def decommission_product(
        payload: ProductDecommissionRequest,
        services: Services = Depends(get_services)):
    result = services.product_commissioning.update_decommission(payload)
    return success_response(
        data=ProductCommissioningOut.model_validate(result),
        message="Product decommissioned successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{commissioning_id:uuid}", response_model=None)
def delete_commissioning(
        commissioning_id: UUID,
        services: Services = Depends(get_services)):
    deleted = services.product_commissioning.delete(commissioning_id)
    return success_response(
        data={"deleted": deleted},
        message="Commissioning deleted successfully" if deleted else "Commissioning already deleted",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
