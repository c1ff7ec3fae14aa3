import json
from typing import List, Optional, Type, TypeVar

from fastapi import UploadFile
from pydantic import BaseModel

from shared.core.exceptions import ValidationException
from shared.core.schemas import FileUpload

SchemaType = TypeVar("SchemaType", bound=BaseModel)


async def read_upload(file: Optional[UploadFile]) -> Optional[FileUpload]:
    if not file or not file.filename:
        return None
    return FileUpload(
        filename=file.filename[:255],
        content_type=file.content_type or "application/octet-stream",
        data=await file.read(),
    )


async def read_uploads(files: Optional[List[UploadFile]]) -> List[FileUpload]:
    uploads = []
    for file in files or []:
        upload = await read_upload(file)
        if upload:
            uploads.append(upload)
    return uploads


def parse_form_payload(
    value: str,
    schema: Type[SchemaType],
    attachments: Optional[List[FileUpload]] = None,
    **files,
) -> SchemaType:
    """
    Validate a multipart JSON form field against `schema`.

    Uploaded attachments are appended to the payload's existing attachment
    references; other uploaded files (e.g. `photo`) replace the field.
    """
    try:
        payload = json.loads(value)
    except json.JSONDecodeError:
        raise ValidationException("Request payload is not valid JSON")
    if not isinstance(payload, dict):
        raise ValidationException("Request payload must be a JSON object")

    if attachments:
        payload["attachments"] = list(payload.get("attachments") or []) + attachments
    for field, upload in files.items():
        if upload is not None:
            payload[field] = upload

    return schema.model_validate(payload)
