# shared/helpers/json_response_helper.py
from fastapi import HTTPException, status
from typing import Any

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400):
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=None,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )


# Error taxonomy shared by every lifecycle operation

def validation_error(message: str, status_code: str = AppStatusCode.REQUIRED_VALIDATION_ERROR):
    return error_response(message, status_code=status_code, http_status=status.HTTP_400_BAD_REQUEST)


def not_found_error(message: str):
    return error_response(message, status_code=AppStatusCode.NOT_FOUND, http_status=status.HTTP_404_NOT_FOUND)


def invalid_transition_error(message: str):
    return error_response(
        message,
        status_code=AppStatusCode.INVALID_STATUS_TRANSITION,
        http_status=status.HTTP_409_CONFLICT
    )


def conflict_error(message: str, status_code: str = AppStatusCode.DUPLICATE_ADD_ERROR):
    return error_response(message, status_code=status_code, http_status=status.HTTP_409_CONFLICT)


def forbidden_error(message: str = "Not authorized to perform this action"):
    return error_response(message, status_code=AppStatusCode.UNAUTHORIZED_ACTION, http_status=status.HTTP_403_FORBIDDEN)


def store_error(message: str):
    return error_response(message, status_code=AppStatusCode.OPERATION_FAILED, http_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
