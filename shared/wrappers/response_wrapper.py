import json
import logging
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

ENVELOPE_KEYS = {"status", "status_code", "message"}


def _passthrough_headers(response):
    return {k: v for k, v in response.headers.items() if k.lower() != "content-length"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps every JSON response in the ``JsonOutResult`` envelope."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error on %s %s",
                             request.method, request.url.path)
            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=AppStatusCode.OPERATION_FAILED,
                message=f"Internal Server Error: {e}",
            ).model_dump()
            return JSONResponse(content=wrapped_error, status_code=500)

        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            data = None

        # Already wrapped (success_response or an exception handler)
        if isinstance(data, dict) and ENVELOPE_KEYS.issubset(data.keys()):
            return JSONResponse(
                content=data,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        if 200 <= response.status_code < 400:
            wrapped = JsonOutResult(
                data=data,
                status="Success",
                status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
                message="Data retrieved successfully"
            ).model_dump()
        else:
            message = ""
            if isinstance(data, dict):
                message = str(data.get("detail") or data.get("message") or "")
            wrapped = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(response.status_code),
                message=message or "An unexpected error occurred",
            ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers=_passthrough_headers(response),
        )
