import uuid
from datetime import date, datetime
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, JSON, String, Text, Uuid
from shared.core.database import Base


class ProductMaintenance(Base):
    __tablename__ = "product_maintenance"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid, ForeignKey(
        "products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(32), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    attachments = Column(JSON, nullable=False, default=list)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
