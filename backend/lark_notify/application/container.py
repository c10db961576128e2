from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
import logging
from typing import Any

from lark_notify.application.notifications.context import RunContext
from lark_notify.application.notifications.service import LarkWebhookApplicationService
from lark_notify.core.config import settings
from lark_notify.domain.notifications.schemas import HttpOptions, LarkIncomingWebhookTask
from lark_notify.infrastructure.secrets.env_store import EnvSecretStore
from lark_notify.infrastructure.templating.renderer import JinjaTemplateRenderer

_HTTP_OPTION_FIELDS = {item.name for item in fields(HttpOptions)}


def build_http_options(overrides: Mapping[str, Any] | None = None) -> HttpOptions:
    values: dict[str, Any] = {
        "connect_timeout": settings.lark_connect_timeout_seconds,
        "read_timeout": settings.lark_read_timeout_seconds,
        "proxy_url": settings.lark_proxy_url,
        "verify_ssl": settings.lark_verify_ssl,
    }
    for key, value in (overrides or {}).items():
        if key not in _HTTP_OPTION_FIELDS:
            raise ValueError(f"Unknown HTTP option: {key}")
        if value is not None:
            values[key] = value
    if "headers" in values:
        values["headers"] = {str(k): str(v) for k, v in values["headers"].items()}
    return HttpOptions(**values)


def build_task(
    *,
    url: str,
    payload: str | None = None,
    options: Mapping[str, Any] | None = None,
    secret: str | None = None,
    fail_on_non_2xx: bool | None = None,
) -> LarkIncomingWebhookTask:
    return LarkIncomingWebhookTask(
        url=url,
        payload=payload,
        options=build_http_options(options),
        secret=secret if secret is not None else settings.lark_signing_secret,
        fail_on_non_2xx=settings.lark_fail_on_non_2xx if fail_on_non_2xx is None else fail_on_non_2xx,
    )


def build_run_context(
    variables: Mapping[str, Any] | None = None,
    *,
    logger: logging.Logger | None = None,
) -> RunContext:
    secrets = EnvSecretStore(prefix=settings.secret_env_prefix)
    renderer = JinjaTemplateRenderer(variables=variables, secret_lookup=secrets.get)
    if logger is None:
        return RunContext(render=renderer.render)
    return RunContext(render=renderer.render, logger=logger)


def build_lark_webhook_service() -> LarkWebhookApplicationService:
    return LarkWebhookApplicationService()
