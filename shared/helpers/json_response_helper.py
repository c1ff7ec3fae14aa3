# shared/helpers/json_response_helper.py
from typing import Any, Optional

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult, PaginatedResult


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )


def failure_result(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, errors: Optional[Any] = None) -> dict:
    return JsonOutResult(
        data=None,
        status="Failure",
        status_code=status_code,
        message=message,
        errors=errors
    ).model_dump(mode="json")


def records_out(result: Any, schema):
    """Convert ORM records (a page or a plain list) to `schema` instances."""
    if isinstance(result, PaginatedResult):
        result.docs = [schema.model_validate(doc) for doc in result.docs]
        return result
    return [schema.model_validate(doc) for doc in result]
