from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel

from shared.core.schemas import FileUpload, ListQueryParams
from ...enum.product_enum import CommissioningOutcome


class ProductCommissioningCreate(BaseModel):
    product_id: UUID
    outcome: CommissioningOutcome
    details: Optional[str] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None

    model_config = {"use_enum_values": True}


class ProductCommissioningUpdate(BaseModel):
    id: UUID
    product_id: Optional[UUID] = None
    outcome: Optional[CommissioningOutcome] = None
    details: Optional[str] = None
    attachments: Optional[List[Union[FileUpload, str]]] = None
    active: Optional[bool] = None

    model_config = {"use_enum_values": True}


class ProductDecommissionRequest(BaseModel):
    id: UUID
    details: Optional[str] = None


class ProductCommissioningOut(BaseModel):
    id: UUID
    product_id: UUID
    outcome: CommissioningOutcome
    details: Optional[str] = None
    attachments: List[str] = []
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductCommissioningRequest(ListQueryParams):
    product_id: Optional[UUID] = None
    outcome: Optional[CommissioningOutcome] = None
