"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#transcript {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.message {
    height: auto;
    margin-bottom: 1;
}

.message-label {
    height: 1;
}

.message-body {
    height: auto;
}

#question-input {
    height: 3;
    border: round $accent;

    &:focus {
        border: round $accent-lighten-1;
    }
}

#status-bar {
    height: 1;
    background: $boost;
    color: $text-muted;
    padding: 0 1;
}
"""
