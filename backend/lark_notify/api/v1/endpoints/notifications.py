from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
import httpx

from lark_notify.api.deps import get_lark_webhook_service
from lark_notify.api.errors import raise_api_error, raise_notification_error
from lark_notify.api.v1.dto.notifications import LarkIncomingWebhookIn
from lark_notify.application.container import build_run_context, build_task
from lark_notify.application.notifications.service import LarkWebhookApplicationService
from lark_notify.domain.notifications.errors import LarkNotificationError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/lark/incoming-webhook", status_code=status.HTTP_204_NO_CONTENT)
def send_lark_incoming_webhook(
    body: LarkIncomingWebhookIn,
    service: LarkWebhookApplicationService = Depends(get_lark_webhook_service),
) -> Response:
    options = body.options.model_dump(exclude_none=True) if body.options is not None else None
    try:
        task = build_task(
            url=body.url,
            payload=body.payload,
            options=options,
            secret=body.secret,
            fail_on_non_2xx=body.fail_on_non_2xx,
        )
        service.send(task=task, context=build_run_context(body.variables))
    except LarkNotificationError as exc:
        raise_notification_error(exc)
    except httpx.HTTPError as exc:
        logger.warning("Lark webhook request failed: %s", exc)
        raise_api_error(
            status_code=502,
            code="LARK_UPSTREAM_UNAVAILABLE",
            message=str(exc) or exc.__class__.__name__,
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
