from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lark_notify.api.deps import get_lark_webhook_service
from lark_notify.api.errors import install_api_error_handlers
from lark_notify.api.v1.router import api_router
from lark_notify.application.notifications.service import LarkWebhookApplicationService
from lark_notify.domain.notifications.schemas import HttpOptions
from lark_notify.infrastructure.clients.lark_webhook import LarkWebhookClient


@dataclass(slots=True)
class FakeLarkEndpoint:
    status_code: int = 200
    body: str = '{"code":0,"msg":"success"}'
    fail_with: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)
    options: list[HttpOptions] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        return httpx.Response(self.status_code, text=self.body)

    def client_factory(self, options: HttpOptions) -> LarkWebhookClient:
        self.options.append(options)
        return LarkWebhookClient(options, transport=httpx.MockTransport(self.handle))


@pytest.fixture
def lark_endpoint() -> FakeLarkEndpoint:
    return FakeLarkEndpoint()


@pytest.fixture
def api_client(lark_endpoint: FakeLarkEndpoint) -> Generator[TestClient, None, None]:
    app = FastAPI()
    install_api_error_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_lark_webhook_service] = lambda: LarkWebhookApplicationService(
        client_factory=lark_endpoint.client_factory
    )
    with TestClient(app) as client:
        yield client
