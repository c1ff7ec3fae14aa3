import datetime as dt
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from shared.core.schemas import FileUpload, ListQueryParams
from ...enum.product_enum import MaintenanceType


class ProductMaintenanceCreate(BaseModel):
    product_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: MaintenanceType
    date: Optional[dt.date] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None
    active: Optional[bool] = True

    model_config = {"use_enum_values": True}


class ProductMaintenanceUpdate(BaseModel):
    id: UUID
    product_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[MaintenanceType] = None
    date: Optional[dt.date] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None
    active: Optional[bool] = None

    model_config = {"use_enum_values": True}


class ProductMaintenanceOut(BaseModel):
    id: UUID
    product_id: UUID
    name: str
    description: Optional[str] = None
    type: MaintenanceType
    date: Optional[dt.date] = None
    attachments: List[str] = []
    active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class ProductMaintenanceRequest(ListQueryParams):
    product_id: Optional[UUID] = None
    type: Optional[MaintenanceType] = None
