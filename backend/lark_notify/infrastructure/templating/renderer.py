from __future__ import annotations

from collections.abc import Callable, Mapping
import json
from typing import Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from lark_notify.domain.notifications import messages
from lark_notify.domain.notifications.errors import TemplateRenderError

MESSAGE_BUILDERS: dict[str, Callable[..., dict[str, Any]]] = {
    "text_message": messages.text_message,
    "post_message": messages.post_message,
    "share_chat_message": messages.share_chat_message,
    "image_message": messages.image_message,
    "interactive_message": messages.interactive_message,
    "text_element": messages.text_element,
    "link_element": messages.link_element,
    "at_element": messages.at_element,
}


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class JinjaTemplateRenderer:
    """Render task properties against the execution variables.

    Uses the ``{{ expression }}`` syntax of the engine templates. Undefined
    variables fail the render instead of producing empty strings, and
    ``secret('NAME')`` resolves through the injected lookup. The message
    builders are available as globals, so a payload can be written as
    ``{{ text_message('Flow ' ~ flow.id ~ ' failed') | tojson }}``.
    """

    def __init__(
        self,
        *,
        variables: Mapping[str, Any] | None = None,
        secret_lookup: Callable[[str], str] | None = None,
    ) -> None:
        self._variables = dict(variables or {})
        self._environment = SandboxedEnvironment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._environment.globals.update(MESSAGE_BUILDERS)
        self._environment.globals["secret"] = self._secret
        # Plain JSON, no HTML-safe escaping of <, > and &.
        self._environment.filters["tojson"] = _to_json
        self._secret_lookup = secret_lookup

    def render(self, template: str) -> str:
        if "{{" not in template and "{%" not in template:
            return template
        try:
            return self._environment.from_string(template).render(self._variables)
        except TemplateRenderError:
            raise
        except TemplateError as exc:
            raise TemplateRenderError(f"Unable to render template: {exc}") from exc

    def _secret(self, name: str) -> str:
        if self._secret_lookup is None:
            raise TemplateRenderError("secret() is not available in this context")
        return self._secret_lookup(name)
