from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from shared.core.schemas import ListQueryParams
from ...enum.product_enum import MaintenanceRecurrency


class MaintenanceWindowBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    days_before: int = Field(..., ge=0)
    days_after: int = Field(..., ge=0)
    recurrency: MaintenanceRecurrency
    recurrency_interval: int = Field(1, ge=1)

    model_config = {"use_enum_values": True}


class MaintenanceWindowCreate(MaintenanceWindowBase):
    active: Optional[bool] = True


class MaintenanceWindowUpdate(BaseModel):
    id: UUID
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    days_before: Optional[int] = Field(None, ge=0)
    days_after: Optional[int] = Field(None, ge=0)
    recurrency: Optional[MaintenanceRecurrency] = None
    recurrency_interval: Optional[int] = Field(None, ge=1)
    active: Optional[bool] = None

    model_config = {"use_enum_values": True}


class MaintenanceWindowOut(MaintenanceWindowBase):
    id: UUID
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "use_enum_values": True}


class MaintenanceWindowRequest(ListQueryParams):
    recurrency: Optional[MaintenanceRecurrency] = None
