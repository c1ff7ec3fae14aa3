# app/router/products/product_router.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile

from shared.core.exceptions import NotFoundException
from shared.helpers.file_upload_helper import parse_form_payload, read_upload, read_uploads
from shared.helpers.json_response_helper import records_out, success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.services import Services, get_services
from ...schemas.common.activity_history_schemas import ActivityHistoryOut
from ...schemas.products.products_schemas import ProductCreate, ProductOut, ProductRequest, ProductUpdate

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
)


@router.get("/all", response_model=None)
def get_products(
        params: ProductRequest = Depends(),
        services: Services = Depends(get_services)):
    filters = {"active": params.active}
    if params.status:
        filters["status"] = params.status.value
    if params.serial_number:
        filters["serial_number"] = params.serial_number

    result = services.products.get(
        {k: v for k, v in filters.items() if v is not None},
        pagination=params.pagination(),
        order_by=params.ordering(),
    )
    return success_response(data=records_out(result, ProductOut))


@router.get("/{product_id:uuid}", response_model=None)
def get_product(
        product_id: UUID,
        services: Services = Depends(get_services)):
    product = services.products.get_by_id(product_id)
    if not product:
        raise NotFoundException("Product not found")
    return success_response(data=ProductOut.model_validate(product))


@router.get("/{product_id:uuid}/history", response_model=None)
def get_product_history(
        product_id: UUID,
        services: Services = Depends(get_services)):
    entries = services.activity_history.get_for("product", product_id)
    return success_response(data=records_out(entries, ActivityHistoryOut))


@router.post("/create", response_model=None)
async def create_product(
    product: str = Form(...),   # JSON string
    photo: Optional[UploadFile] = File(None),
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    product_data = parse_form_payload(
        product, ProductCreate, await read_uploads(attachments), photo=await read_upload(photo))
    result = services.products.create(product_data)
    return success_response(
        data=ProductOut.model_validate(result),
        message="Product created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/update", response_model=None)
async def update_product(
    product: str = Form(...),
    photo: Optional[UploadFile] = File(None),
    attachments: Optional[List[UploadFile]] = File(None),
    services: Services = Depends(get_services)
):
    product_data = parse_form_payload(
        product, ProductUpdate, await read_uploads(attachments), photo=await read_upload(photo))
    result = services.products.update(product_data)
    return success_response(
        data=ProductOut.model_validate(result),
        message="Product updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


# ---------------- Delete Product (Soft Delete) ----------------
@router.delete("/{product_id:uuid}", response_model=None)
def delete_product(
        product_id: UUID,
        services: Services = Depends(get_services)):
    deleted = services.products.delete(product_id)
    return success_response(
        data={"deleted": deleted},
        message="Product deleted successfully" if deleted else "Product already deleted",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
