from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from shared.core.schemas import FileUpload, ListQueryParams
from ...enum.product_enum import ProductCondition, ProductStatus


class ProductBase(BaseModel):
    product_type_ids: List[UUID] = Field(..., min_length=1)
    vendor_ids: List[UUID] = Field(..., min_length=1)
    make_ids: List[UUID] = Field(..., min_length=1)
    product_model: str = Field(..., min_length=1, max_length=128)
    serial_number: str = Field(..., min_length=1, max_length=128)
    acquired_date: date
    acquired_price: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., ge=0)
    condition: ProductCondition
    maintenance_window_ids: List[UUID] = []
    location_id: UUID
    warranty_date: date
    remarks: Optional[str] = ""
    maintenance_date: Optional[date] = None


class ProductCreate(ProductBase):
    photo: Optional[Union[FileUpload, str]] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None
    active: Optional[bool] = True

    model_config = {"use_enum_values": True}


# status is derived from commissioning / maintenance records and is never accepted here
class ProductUpdate(BaseModel):
    id: UUID
    product_type_ids: Optional[List[UUID]] = None
    vendor_ids: Optional[List[UUID]] = None
    make_ids: Optional[List[UUID]] = None
    product_model: Optional[str] = Field(None, min_length=1, max_length=128)
    serial_number: Optional[str] = Field(None, min_length=1, max_length=128)
    acquired_date: Optional[date] = None
    acquired_price: Optional[Decimal] = Field(None, ge=0)
    current_price: Optional[Decimal] = Field(None, ge=0)
    condition: Optional[ProductCondition] = None
    maintenance_window_ids: Optional[List[UUID]] = None
    location_id: Optional[UUID] = None
    warranty_date: Optional[date] = None
    remarks: Optional[str] = None
    maintenance_date: Optional[date] = None
    photo: Optional[Union[FileUpload, str]] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None
    active: Optional[bool] = None

    model_config = {"use_enum_values": True}


class ProductOut(ProductBase):
    id: UUID
    photo: Optional[str] = None
    attachments: List[str] = []
    status: ProductStatus
    min_maintenance_date: Optional[date] = None
    max_maintenance_date: Optional[date] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductRequest(ListQueryParams):
    status: Optional[ProductStatus] = None
    serial_number: Optional[str] = None
