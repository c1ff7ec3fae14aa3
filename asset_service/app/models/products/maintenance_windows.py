# app/models/products/maintenance_windows.py
import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Uuid
from shared.core.database import Base


class MaintenanceWindow(Base):
    __tablename__ = "maintenance_windows"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    days_before = Column(Integer, nullable=False, default=0)
    days_after = Column(Integer, nullable=False, default=0)
    recurrency = Column(String(32), nullable=False)
    # multiplier applied to the recurrency unit (e.g. 2 x weekly)
    recurrency_interval = Column(Integer, nullable=False, default=1)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
