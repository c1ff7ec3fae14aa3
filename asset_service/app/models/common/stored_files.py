from sqlalchemy import Column, String, DateTime, Integer, LargeBinary, Uuid
import uuid
from datetime import datetime
from shared.core.database import Base


class StoredFile(Base):
    __tablename__ = "stored_files"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bucket_name = Column(String(64), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(128), nullable=False)
    size = Column(Integer, nullable=False)
    file_data = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
