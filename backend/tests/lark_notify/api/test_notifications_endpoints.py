from __future__ import annotations

import json

import httpx

ENDPOINT = "/api/v1/notifications/lark/incoming-webhook"
LARK_URL = "https://open.larksuite.com/open-apis/bot/v2/hook/abc"


def test_health(api_client) -> None:
    response = api_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_send_renders_and_posts_payload(api_client, lark_endpoint) -> None:
    response = api_client.post(
        ENDPOINT,
        json={
            "url": LARK_URL,
            "payload": '{"msg_type":"text","content":{"text":"Flow {{ flow.id }} failed"}}',
            "variables": {"flow": {"id": "unreliable_flow"}},
            "options": {"read_timeout": 3},
        },
    )

    assert response.status_code == 204
    assert len(lark_endpoint.requests) == 1
    assert str(lark_endpoint.requests[0].url) == LARK_URL
    assert json.loads(lark_endpoint.requests[0].content) == {
        "msg_type": "text",
        "content": {"text": "Flow unreliable_flow failed"},
    }
    assert lark_endpoint.options[0].read_timeout == 3


def test_non_200_upstream_is_not_an_error_by_default(api_client, lark_endpoint) -> None:
    lark_endpoint.status_code = 500

    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": "{}"})

    assert response.status_code == 204


def test_non_2xx_upstream_is_reported_when_requested(api_client, lark_endpoint) -> None:
    lark_endpoint.status_code = 500

    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": "{}", "fail_on_non_2xx": True})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "LARK_WEBHOOK_REJECTED"
    assert response.json()["error"]["details"] == {"upstream_status": 500}


def test_missing_payload_is_rejected_without_request(api_client, lark_endpoint) -> None:
    response = api_client.post(ENDPOINT, json={"url": LARK_URL})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "LARK_PAYLOAD_MISSING"
    assert lark_endpoint.requests == []


def test_malformed_payload_is_rejected_without_request(api_client, lark_endpoint) -> None:
    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": "{invalid}"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "LARK_PAYLOAD_MALFORMED"
    assert lark_endpoint.requests == []


def test_non_finite_numbers_are_rejected_as_malformed(api_client, lark_endpoint) -> None:
    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": '{"a": NaN}'})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "LARK_PAYLOAD_MALFORMED"
    assert lark_endpoint.requests == []


def test_payload_can_be_built_with_message_helpers(api_client, lark_endpoint) -> None:
    response = api_client.post(
        ENDPOINT,
        json={
            "url": LARK_URL,
            "payload": "{{ text_message('Flow ' ~ flow.id ~ ' failed') | tojson }}",
            "variables": {"flow": {"id": "daily"}},
        },
    )

    assert response.status_code == 204
    assert json.loads(lark_endpoint.requests[0].content) == {
        "msg_type": "text",
        "content": {"text": "Flow daily failed"},
    }


def test_url_is_required(api_client, lark_endpoint) -> None:
    empty = api_client.post(ENDPOINT, json={"url": "", "payload": "{}"})
    blank = api_client.post(ENDPOINT, json={"url": "   ", "payload": "{}"})

    assert empty.status_code == 422
    assert blank.status_code == 400
    assert blank.json()["error"]["code"] == "LARK_URL_MISSING"
    assert lark_endpoint.requests == []


def test_undefined_template_variable_is_rejected(api_client, lark_endpoint) -> None:
    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": '{"text":"{{ execution.id }}"}'})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "LARK_TEMPLATE_INVALID"
    assert lark_endpoint.requests == []


def test_transport_failure_maps_to_upstream_unavailable(api_client, lark_endpoint) -> None:
    lark_endpoint.fail_with = httpx.ConnectError("connection refused")

    response = api_client.post(ENDPOINT, json={"url": LARK_URL, "payload": "{}"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "LARK_UPSTREAM_UNAVAILABLE"


def test_unknown_http_option_is_rejected(api_client) -> None:
    response = api_client.post(
        ENDPOINT,
        json={"url": LARK_URL, "payload": "{}", "options": {"retries": 3}},
    )

    assert response.status_code == 422
