from __future__ import annotations

from dataclasses import dataclass, field

from lark_notify.domain.notifications.errors import MissingUrlError


@dataclass(slots=True, frozen=True)
class HttpOptions:
    connect_timeout: float | None = None
    read_timeout: float | None = None
    connection_pool_idle_timeout: float | None = None
    headers: dict[str, str] = field(default_factory=dict)
    basic_auth_user: str | None = None
    basic_auth_password: str | None = None
    proxy_url: str | None = None
    proxy_username: str | None = None
    proxy_password: str | None = None
    follow_redirects: bool = True
    verify_ssl: bool = True
    default_charset: str = "utf-8"


@dataclass(slots=True, frozen=True)
class WebhookResponse:
    status_code: int
    body: str


@dataclass(slots=True, frozen=True)
class LarkIncomingWebhookTask:
    url: str
    payload: str | None = None
    options: HttpOptions = field(default_factory=HttpOptions)
    secret: str | None = None
    fail_on_non_2xx: bool = False

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise MissingUrlError()
