"""Builders for the message types accepted by Lark custom bots.

Each builder returns a JSON-ready dict that can be dumped into a task
``payload`` template.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def text_message(text: str) -> dict[str, Any]:
    return {"msg_type": "text", "content": {"text": text}}


def post_message(
    *,
    title: str,
    content: Sequence[Sequence[dict[str, Any]]],
    locale: str = "zh_cn",
) -> dict[str, Any]:
    """Rich text message.

    ``content`` is a list of paragraphs, each a list of inline elements such as
    ``{"tag": "text", "text": "..."}``, ``{"tag": "a", "text": "...", "href": "..."}``
    or ``{"tag": "at", "user_id": "..."}``.
    """
    return {
        "msg_type": "post",
        "content": {
            "post": {
                locale: {
                    "title": title,
                    "content": [list(paragraph) for paragraph in content],
                }
            }
        },
    }


def share_chat_message(share_chat_id: str) -> dict[str, Any]:
    return {"msg_type": "share_chat", "content": {"share_chat_id": share_chat_id}}


def image_message(image_key: str) -> dict[str, Any]:
    return {"msg_type": "image", "content": {"image_key": image_key}}


def interactive_message(
    *,
    elements: Sequence[dict[str, Any]],
    title: str | None = None,
    template: str | None = None,
) -> dict[str, Any]:
    card: dict[str, Any] = {"elements": list(elements)}
    if title is not None:
        header: dict[str, Any] = {"title": {"content": title, "tag": "plain_text"}}
        if template:
            header["template"] = template
        card["header"] = header
    return {"msg_type": "interactive", "card": card}


def text_element(text: str) -> dict[str, Any]:
    return {"tag": "text", "text": text}


def link_element(text: str, href: str) -> dict[str, Any]:
    return {"tag": "a", "text": text, "href": href}


def at_element(user_id: str) -> dict[str, Any]:
    return {"tag": "at", "user_id": user_id}
