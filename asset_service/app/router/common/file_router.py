# app/router/common/file_router.py
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from shared.core.transaction import run_transaction
from shared.helpers.json_response_helper import success_response
from ...core.services import Services, get_services
from ...schemas.common.stored_file_schemas import StoredFileOut

router = APIRouter(
    prefix="/api/files",
    tags=["files"],
)


def _load(services: Services, reference: str):
    return run_transaction(
        None,
        lambda db: services.file_storage.download(reference, db),
        services.session_factory,
    )


def content_disposition(file_name: str) -> str:
    # ascii fallback for old clients, RFC 5987 name for everyone else
    fallback = "".join(ch for ch in file_name if " " <= ch <= "~" and ch not in '"\\')
    return f"attachment; filename=\"{fallback or 'download'}\"; filename*=UTF-8''{quote(file_name, safe='')}"


@router.get("/{reference}")
def download_file(
        reference: str,
        services: Services = Depends(get_services)):
    stored = _load(services, reference)
    return Response(
        content=stored.file_data,
        media_type=stored.content_type,
        headers={"Content-Disposition": content_disposition(stored.file_name)},
    )


@router.get("/{reference}/info", response_model=None)
def get_file_info(
        reference: str,
        services: Services = Depends(get_services)):
    return success_response(data=StoredFileOut.model_validate(_load(services, reference)))
