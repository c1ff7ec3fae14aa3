import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, JSON, String, Text, Uuid
from shared.core.database import Base


class ActivityHistory(Base):
    __tablename__ = "activity_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    details = Column(Text, nullable=True)
    perform_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    # name of the model the entry refers to, e.g. "product"
    model = Column(String(64), nullable=False)
    model_id = Column(Uuid, nullable=False, index=True)
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", JSON, nullable=True)
