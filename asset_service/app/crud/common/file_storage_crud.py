import logging
from typing import Any, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import InternalServerException, NotFoundException, ValidationException
from shared.core.schemas import FileUpload
from ...models.common.stored_files import StoredFile

logger = logging.getLogger(__name__)

ATTACHMENT_CONTENT_TYPES = [
    "image/jpeg",
    "image/png",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
]

# prefix match, any image type is accepted as a photo
IMAGE_CONTENT_TYPES = ["image/"]


class FileValidator:

    def __init__(self, max_size: int):
        self.max_size = max_size

    def validate(self, file: FileUpload, allowed_types: Optional[List[str]] = None):
        if allowed_types and not any(
            file.content_type == allowed or (allowed.endswith("/") and file.content_type.startswith(allowed))
            for allowed in allowed_types
        ):
            raise ValidationException(
                f"Uploaded file type is not allowed. Allowed types are: {', '.join(allowed_types)}")

        if file.size > self.max_size:
            raise ValidationException(
                f"File size exceeds the limit of {self.max_size // (1024 * 1024)}MB")


class DatabaseFileStorage:
    """
    File storage kept in the `stored_files` table.

    Writes go through the caller's session, so files uploaded during a
    transaction that is rolled back disappear with it.
    """

    def __init__(self, bucket_name: str, max_size_mb: int = 5):
        self.bucket_name = bucket_name
        self.validator = FileValidator(max_size_mb * 1024 * 1024)

    def upload(self, file: FileUpload, db: Session, allowed_types: Optional[List[str]] = None) -> str:
        if not isinstance(file, FileUpload):
            raise ValidationException("Invalid file")
        self.validator.validate(file, allowed_types)

        stored = StoredFile(
            bucket_name=self.bucket_name,
            file_name=file.filename[:255],
            content_type=file.content_type,
            size=file.size,
            file_data=file.data,
        )
        try:
            db.add(stored)
            db.flush()
        except SQLAlchemyError as e:
            logger.exception("File upload failed for %s", file.filename)
            raise InternalServerException(f"File upload failed: {e}")

        logger.info("Stored file %s (%s bytes) as %s", stored.file_name, stored.size, stored.id)
        return str(stored.id)

    def upload_many(self, files: Iterable[FileUpload], db: Session,
                    allowed_types: Optional[List[str]] = None) -> List[str]:
        return [self.upload(file, db, allowed_types) for file in files]

    def download(self, reference: str, db: Session) -> StoredFile:
        try:
            file_id = UUID(str(reference))
        except ValueError:
            raise NotFoundException("File not found")

        stored = (
            db.query(StoredFile)
            .filter(StoredFile.id == file_id, StoredFile.bucket_name == self.bucket_name)
            .first()
        )
        if not stored:
            raise NotFoundException("File not found")
        return stored

    def store_payload(self, value: Any, db: Session, allowed_types: Optional[List[str]] = None) -> Optional[str]:
        """Upload `value` when it is a file payload; existing references pass through."""
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, dict):
            value = FileUpload.model_validate(value)
        return self.upload(value, db, allowed_types)

    def replace_payloads(self, values: Optional[Iterable[Any]], db: Session,
                         allowed_types: Optional[List[str]] = None) -> List[str]:
        return [self.store_payload(value, db, allowed_types) for value in values or []]


def default_file_storage() -> DatabaseFileStorage:
    return DatabaseFileStorage(settings.FILE_BUCKET_NAME, settings.MAX_UPLOAD_SIZE_MB)
