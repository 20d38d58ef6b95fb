"""Terminal UI module for codeask.

Provides a Textual-based TUI for a chat session.

Module structure (each module hides a design decision):
- formatting.py: How messages and chunks are rendered
- history.py: Which earlier questions the input recalls
- widgets.py: Custom widgets (transcript, question input, status bar)
- styles.py: CSS styling (layout decisions)
- app.py: Application orchestration (user interaction flow)
"""

from .app import CodeaskApp, run_textual_tui
from .formatting import format_message, role_label
from .widgets import HistoryInput, StatusBar, TranscriptView

__all__ = [
    "CodeaskApp",
    "HistoryInput",
    "StatusBar",
    "TranscriptView",
    "format_message",
    "role_label",
    "run_textual_tui",
]
