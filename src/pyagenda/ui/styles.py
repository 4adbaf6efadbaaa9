"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout, top to bottom: header, message list, scroll control bar,
log panel (hidden by default), input bar, footer.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

Header {
    background: $primary;
    color: white;
    text-style: bold;
}

/* ============================================
   Message List
   ============================================ */
#chat-history {
    height: 1fr;
    padding: 1 2;
    background: $background;
    scrollbar-gutter: stable;
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
}

/* User messages - blue tint */
.user-message {
    background: $primary 15%;
    border-left: tall $primary;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

/* Assistant messages - white */
.assistant-message {
    background: $surface;
    border-left: tall $secondary;

    & .message-header {
        color: $text-muted;
        text-style: bold;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
}

#typing-indicator {
    height: auto;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Scroll Control Bar
   ============================================ */
#jump-bar {
    height: 1;
    align-horizontal: right;
    padding: 0 2;
}

#jump-btn {
    height: 1;
    min-width: 20;
    border: none;
    background: $secondary;
    color: white;

    &:hover {
        background: $accent;
    }
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    padding: 1 2;
    background: $surface;
    border-top: solid $border;
}

#chat-input {
    width: 1fr;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    width: 10;
    margin: 0 0 0 1;
    background: $primary;
    color: white;
    border: none;
    text-style: bold;

    &:hover {
        background: $accent;
    }
}

/* ============================================
   Markdown Content Styling
   ============================================ */
Markdown {
    margin: 0;
    padding: 0;
    background: transparent;
}

MarkdownFence {
    margin: 1 0;
}

MarkdownTable {
    margin: 1 0;
}
"""
