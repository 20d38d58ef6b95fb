"""Callback interface for stream consumers.

Hides how a surface (CLI printer, TUI) is told about changes to the
answer being built.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class StreamHandlers:
    """Optional callbacks fired while a turn streams.

    ``on_tool_call`` fires only when a tool invocation enters ``running``.
    """

    on_meta: Callable[[], None] | None = None
    on_reasoning_delta: Callable[[str], None] | None = None
    on_text_delta: Callable[[str], None] | None = None
    on_tool_call: Callable[[str], None] | None = None
    on_error: Callable[[str], None] | None = None
