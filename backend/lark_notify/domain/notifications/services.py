from __future__ import annotations

import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any

from lark_notify.domain.notifications.errors import MalformedPayloadError


@dataclass(slots=True, frozen=True)
class LarkBusinessError:
    code: int
    message: str


def parse_payload(rendered: str | None) -> Any:
    if rendered is None:
        raise MalformedPayloadError("rendered payload is empty")
    try:
        return json.loads(rendered, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError(str(exc)) from exc


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are Python extensions, not JSON.
    raise MalformedPayloadError(f"unexpected token {name!r}")


def sign(timestamp: int, secret: str) -> str:
    """Compute the Lark custom bot signature.

    The key is ``"{timestamp}\\n{secret}"`` and the message is empty, as
    described in the custom bot security settings guide.
    """
    string_to_sign = f"{timestamp}\n{secret}"
    digest = hmac.new(string_to_sign.encode("utf-8"), digestmod=hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def apply_signature(document: Any, *, secret: str | None, timestamp: int) -> Any:
    if not secret or not isinstance(document, dict):
        return document
    signed = dict(document)
    signed["timestamp"] = str(timestamp)
    signed["sign"] = sign(timestamp, secret)
    return signed


def is_success(status_code: int) -> bool:
    return status_code == 200


def is_2xx(status_code: int) -> bool:
    return 200 <= status_code < 300


def lark_error(body: str) -> LarkBusinessError | None:
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    # Older bot endpoints answer with StatusCode/StatusMessage.
    code = data.get("code", data.get("StatusCode"))
    if not isinstance(code, int) or isinstance(code, bool) or code == 0:
        return None
    message = data.get("msg", data.get("StatusMessage")) or ""
    return LarkBusinessError(code=code, message=str(message))
