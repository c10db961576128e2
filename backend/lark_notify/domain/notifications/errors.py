from __future__ import annotations


class LarkNotificationError(ValueError):
    """Base error for Lark incoming webhook notifications."""


class MissingPayloadError(LarkNotificationError):
    """Raised when the task has no payload to send."""

    def __init__(self) -> None:
        super().__init__("'payload' must be provided")


class MalformedPayloadError(LarkNotificationError):
    """Raised when the rendered payload is not valid JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"'payload' is not valid JSON: {detail}")
        self.detail = detail


class MissingUrlError(LarkNotificationError):
    """Raised when the webhook url is empty."""

    def __init__(self) -> None:
        super().__init__("'url' must not be empty")


class TemplateRenderError(LarkNotificationError):
    """Raised when a template cannot be rendered against the run context."""


class SecretNotFoundError(TemplateRenderError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot find secret for key '{name}'")
        self.name = name


class WebhookStatusError(LarkNotificationError):
    """Raised for a non-2xx webhook response when the task asks to fail on it."""

    def __init__(self, *, status_code: int, body: str) -> None:
        super().__init__(f"Lark webhook responded with HTTP {status_code}")
        self.status_code = status_code
        self.body = body
