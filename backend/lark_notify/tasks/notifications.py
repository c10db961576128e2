from __future__ import annotations

from typing import Any

from celery.utils.log import get_task_logger

from lark_notify.application.container import build_lark_webhook_service, build_run_context, build_task
from lark_notify.core.celery_app import celery_app

task_logger = get_task_logger(__name__)


@celery_app.task(name="lark_notify.tasks.notifications.lark_incoming_webhook")
def lark_incoming_webhook(
    url: str,
    payload: str | None = None,
    variables: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
    secret: str | None = None,
    fail_on_non_2xx: bool | None = None,
) -> None:
    task = build_task(
        url=url,
        payload=payload,
        options=options,
        secret=secret,
        fail_on_non_2xx=fail_on_non_2xx,
    )
    context = build_run_context(variables, logger=task_logger)
    build_lark_webhook_service().send(task=task, context=context)
    return None
