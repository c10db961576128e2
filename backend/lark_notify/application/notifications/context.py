from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging

_TASK_LOGGER = logging.getLogger("lark_notify.task")


@dataclass(slots=True, frozen=True)
class RunContext:
    """What a task invocation gets from the engine: rendering and a logger."""

    render: Callable[[str], str]
    logger: logging.Logger = field(default=_TASK_LOGGER)
