"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat Panel - the widget window
   ============================================ */
#chat-panel {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0;
}

#chat-history {
    height: 1fr;
    background: $surface;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Message Bubbles
   ============================================ */
.chat-message {
    height: auto;
    max-width: 80%;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    background: $secondary 40%;
    border: round $secondary;
    margin: 1 0 0 8;
}

.assistant-message {
    background: $panel;
    border: round $border;

    &.-pending .message-content {
        color: $text-muted;
        text-style: bold;
    }

    &.-error {
        border: round $error;
        .message-content {
            color: $error;
        }
    }
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

.message-content {
    height: auto;
}

/* ============================================
   Input Bar
   ============================================ */
#chat-input-bar {
    height: auto;
    max-height: 8;
    padding: 0 1;
    background: $panel;

    &.-disabled {
        opacity: 60%;
    }
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 6;
}

#send-btn {
    width: auto;
    min-width: 8;
}

#disclaimer {
    height: 1;
    width: 100%;
    content-align: center middle;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    display: none;
    height: auto;
    min-height: 6;
    max-height: 14;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}
"""
