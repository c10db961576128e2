from __future__ import annotations

from celery import Celery

from lark_notify.core.config import settings

celery_app = Celery(
    "lark_notify",
    broker=settings.redis_url,
    include=["lark_notify.tasks.notifications"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_hijack_root_logger=False,
)
