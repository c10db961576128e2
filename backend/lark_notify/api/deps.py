from __future__ import annotations

from lark_notify.application.container import build_lark_webhook_service
from lark_notify.application.notifications.service import LarkWebhookApplicationService


def get_lark_webhook_service() -> LarkWebhookApplicationService:
    return build_lark_webhook_service()
