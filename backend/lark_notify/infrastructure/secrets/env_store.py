from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
import os

from lark_notify.domain.notifications.errors import SecretNotFoundError


class EnvSecretStore:
    """Secrets stored as base64 values in ``<prefix><NAME>`` environment variables."""

    def __init__(self, *, prefix: str = "SECRET_", environ: Mapping[str, str] | None = None) -> None:
        self._prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def get(self, name: str) -> str:
        raw = self._environ.get(f"{self._prefix}{name.strip().upper()}")
        if raw is None:
            raise SecretNotFoundError(name)
        try:
            return base64.b64decode(raw.strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise SecretNotFoundError(name) from exc
