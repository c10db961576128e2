from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HttpOptionsIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    connect_timeout: float | None = Field(default=None, gt=0)
    read_timeout: float | None = Field(default=None, gt=0)
    connection_pool_idle_timeout: float | None = Field(default=None, gt=0)
    headers: dict[str, str] | None = None
    basic_auth_user: str | None = None
    basic_auth_password: str | None = None
    proxy_url: str | None = None
    proxy_username: str | None = None
    proxy_password: str | None = None
    follow_redirects: bool | None = None
    verify_ssl: bool | None = None
    default_charset: str | None = None


class LarkIncomingWebhookIn(BaseModel):
    url: str = Field(min_length=1, description="Lark(Feishu) incoming webhook URL")
    payload: str | None = Field(default=None, description="Lark(Feishu) message payload")
    variables: dict[str, Any] = Field(default_factory=dict)
    options: HttpOptionsIn | None = None
    secret: str | None = None
    fail_on_non_2xx: bool | None = None
