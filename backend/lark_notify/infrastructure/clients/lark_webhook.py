from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from lark_notify.domain.notifications.schemas import HttpOptions, WebhookResponse

_DEFAULT_TIMEOUT_SECONDS = 10.0


def build_timeout(options: HttpOptions) -> httpx.Timeout:
    connect = options.connect_timeout if options.connect_timeout is not None else _DEFAULT_TIMEOUT_SECONDS
    read = options.read_timeout if options.read_timeout is not None else _DEFAULT_TIMEOUT_SECONDS
    return httpx.Timeout(connect=connect, read=read, write=read, pool=connect)


def build_proxy(options: HttpOptions) -> httpx.Proxy | None:
    if not options.proxy_url:
        return None
    if options.proxy_username:
        return httpx.Proxy(
            options.proxy_url,
            auth=(options.proxy_username, options.proxy_password or ""),
        )
    return httpx.Proxy(options.proxy_url)


def build_http_client(
    options: HttpOptions,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    auth: httpx.BasicAuth | None = None
    if options.basic_auth_user:
        auth = httpx.BasicAuth(options.basic_auth_user, options.basic_auth_password or "")

    kwargs: dict[str, Any] = {
        "timeout": build_timeout(options),
        "follow_redirects": options.follow_redirects,
        "verify": options.verify_ssl,
        "auth": auth,
        "default_encoding": options.default_charset,
    }
    if options.connection_pool_idle_timeout is not None:
        kwargs["limits"] = httpx.Limits(keepalive_expiry=options.connection_pool_idle_timeout)
    if transport is not None:
        kwargs["transport"] = transport
    else:
        kwargs["proxy"] = build_proxy(options)
    return httpx.Client(**kwargs)


class LarkWebhookClient:
    """Synchronous JSON poster scoped to a single task invocation."""

    def __init__(
        self,
        options: HttpOptions | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._options = options or HttpOptions()
        self._client = build_http_client(self._options, transport=transport)

    def __enter__(self) -> LarkWebhookClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def post_json(self, url: str, body: Any, headers: Mapping[str, str] | None = None) -> WebhookResponse:
        request_headers: dict[str, str] = dict(self._options.headers)
        if headers:
            request_headers.update(headers)
        # Any casing of a caller supplied content type is replaced.
        request_headers = {k: v for k, v in request_headers.items() if k.lower() != "content-type"}
        request_headers["Content-Type"] = "application/json"

        response = self._client.post(url, json=body, headers=request_headers)
        return WebhookResponse(status_code=response.status_code, body=response.text)
