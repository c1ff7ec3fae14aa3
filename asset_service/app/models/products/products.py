# app/models/products/products.py
import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, Date, DateTime, Numeric, String, Text, Uuid, JSON
from shared.core.database import Base, UUIDList
from ...enum.product_enum import ProductStatus


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_type_ids = Column(UUIDList, nullable=False, default=list)
    vendor_ids = Column(UUIDList, nullable=False, default=list)
    make_ids = Column(UUIDList, nullable=False, default=list)
    product_model = Column(String(128), nullable=False)
    serial_number = Column(String(128), nullable=False, index=True)
    acquired_date = Column(Date, nullable=False)
    acquired_price = Column(Numeric(14, 2), nullable=False)
    current_price = Column(Numeric(14, 2), nullable=False)
    condition = Column(String(16), nullable=False)
    maintenance_window_ids = Column(UUIDList, nullable=False, default=list)
    # file storage references
    photo = Column(String(64), nullable=True)
    attachments = Column(JSON, nullable=False, default=list)
    location_id = Column(Uuid, nullable=False)
    warranty_date = Column(Date, nullable=False)
    remarks = Column(Text, nullable=True, default="")

    # derived from commissioning / maintenance records
    status = Column(String(32), nullable=False,
                    default=ProductStatus.awaiting_commissioning.value)
    min_maintenance_date = Column(Date, nullable=True)
    maintenance_date = Column(Date, nullable=True)
    max_maintenance_date = Column(Date, nullable=True)

    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Product(id={self.id}, serial_number='{self.serial_number}', status='{self.status}')>"
