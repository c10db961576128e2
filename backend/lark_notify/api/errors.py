from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from lark_notify.domain.notifications.errors import (
    LarkNotificationError,
    MalformedPayloadError,
    MissingPayloadError,
    MissingUrlError,
    TemplateRenderError,
    WebhookStatusError,
)


@dataclass(slots=True)
class ApiError(Exception):
    status_code: int
    code: str
    message: str
    details: dict | None = None


_NOTIFICATION_ERROR_CODES: tuple[tuple[type[LarkNotificationError], int, str], ...] = (
    (MissingUrlError, 400, "LARK_URL_MISSING"),
    (MissingPayloadError, 400, "LARK_PAYLOAD_MISSING"),
    (MalformedPayloadError, 400, "LARK_PAYLOAD_MALFORMED"),
    (TemplateRenderError, 400, "LARK_TEMPLATE_INVALID"),
    (WebhookStatusError, 502, "LARK_WEBHOOK_REJECTED"),
)


def raise_api_error(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict | None = None,
) -> NoReturn:
    raise ApiError(status_code=status_code, code=code, message=message, details=details)


def raise_notification_error(exc: LarkNotificationError) -> NoReturn:
    for error_type, status_code, code in _NOTIFICATION_ERROR_CODES:
        if isinstance(exc, error_type):
            details = None
            if isinstance(exc, WebhookStatusError):
                details = {"upstream_status": exc.status_code}
            raise ApiError(status_code=status_code, code=code, message=str(exc), details=details) from exc
    raise ApiError(status_code=400, code="LARK_NOTIFICATION_INVALID", message=str(exc)) from exc


def install_api_error_handlers(application: FastAPI) -> None:
    @application.exception_handler(ApiError)
    async def _handle_api_error(_, exc: ApiError) -> JSONResponse:  # type: ignore[override]
        error_payload: dict = {
            "code": exc.code,
            "message": exc.message,
        }
        if exc.details is not None:
            error_payload["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content={"error": error_payload})
