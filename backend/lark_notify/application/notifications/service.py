from __future__ import annotations

from collections.abc import Callable
import json
import logging
import time
from typing import Any

from lark_notify.application.notifications.context import RunContext
from lark_notify.domain.notifications.errors import MissingPayloadError, MissingUrlError, WebhookStatusError
from lark_notify.domain.notifications.schemas import HttpOptions, LarkIncomingWebhookTask
from lark_notify.domain.notifications.services import (
    apply_signature,
    is_2xx,
    is_success,
    lark_error,
    parse_payload,
)
from lark_notify.infrastructure.clients.lark_webhook import LarkWebhookClient

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


def send_lark_incoming_webhook(
    *,
    url: str,
    payload: str | None,
    render: Callable[[str], str],
    client: LarkWebhookClient,
    secret: str | None = None,
    fail_on_non_2xx: bool = False,
    log: logging.Logger | None = None,
    clock: Callable[[], float] = time.time,
) -> None:
    """Render ``url`` and ``payload`` and POST the payload to the Lark webhook.

    The client is closed when this returns or raises. A response other than
    200 only skips the success log, unless ``fail_on_non_2xx`` is set and the
    status is outside 2xx, in which case ``WebhookStatusError`` is raised.
    """
    log = log or logger
    with client:
        rendered_url = render(url).strip()
        if not rendered_url:
            raise MissingUrlError()

        document = _prepare_message(payload, render)
        if secret:
            document = apply_signature(document, secret=render(secret).strip(), timestamp=int(clock()))

        log.debug("Send Lark webhook: %s", json.dumps(document, ensure_ascii=False))
        response = client.post_json(rendered_url, document, _JSON_HEADERS)
        log.debug("Response: %s", response.body)

        if is_success(response.status_code):
            log.info("Request succeeded")
            business_error = lark_error(response.body)
            if business_error is not None:
                log.warning(
                    "Lark rejected the message: code=%s msg=%s",
                    business_error.code,
                    business_error.message,
                )
        elif fail_on_non_2xx and not is_2xx(response.status_code):
            raise WebhookStatusError(status_code=response.status_code, body=response.body)


def _prepare_message(payload: str | None, render: Callable[[str], str]) -> Any:
    if payload is None:
        raise MissingPayloadError()
    return parse_payload(render(payload))


class LarkWebhookApplicationService:
    def __init__(
        self,
        *,
        client_factory: Callable[[HttpOptions], LarkWebhookClient] = LarkWebhookClient,
    ) -> None:
        self._client_factory = client_factory

    def send(self, *, task: LarkIncomingWebhookTask, context: RunContext) -> None:
        send_lark_incoming_webhook(
            url=task.url,
            payload=task.payload,
            render=context.render,
            client=self._client_factory(task.options),
            secret=task.secret,
            fail_on_non_2xx=task.fail_on_non_2xx,
            log=context.logger,
        )
