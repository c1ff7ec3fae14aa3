import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, JSON, String, Text, Uuid, text
from shared.core.database import Base


class ProductCommissioning(Base):
    __tablename__ = "product_commissioning"
    __table_args__ = (
        # at most one active commissioning per product
        Index(
            "uq_product_commissioning_active_product",
            "product_id",
            unique=True,
            postgresql_where=text("active"),
            sqlite_where=text("active = 1"),
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid, ForeignKey(
        "products.id", ondelete="CASCADE"), nullable=False, index=True)
    outcome = Column(String(8), nullable=False)
    details = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=False, default=list)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
