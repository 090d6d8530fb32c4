"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout: session sidebar on the left, transcript and composer on the right,
optional log panel under the transcript.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - Sidebar + Main Column
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 1;
    grid-columns: 34 1fr;
    background: $background;
}

/* ============================================
   Sidebar - New Chat, Session List, Clear All
   ============================================ */
#sidebar {
    height: 100%;
    background: $panel;
    border-right: solid $border;
    padding: 0 1;
}

#new-chat-btn, #clear-all-btn {
    width: 100%;
    margin: 1 0 0 0;
}

#clear-all-btn {
    margin: 0 0 1 0;
}

SessionList {
    height: 1fr;
    margin: 1 0;
    background: transparent;
    border: round $primary 40%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;

    &:focus {
        border: round $primary;
    }

    & > SessionItem {
        height: auto;
        padding: 0 1;
        background: transparent;
    }

    & > SessionItem.-highlight {
        background: $primary 20%;
    }
}

.session-title {
    text-style: bold;
    color: $foreground;
}

.session-meta {
    color: $text-muted;
}

/* ============================================
   Main Column - Transcript, Indicator, Composer
   ============================================ */
#main {
    height: 100%;
    padding: 0 1;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $secondary;
    }
}

#chat-history.-maximized {
    height: 100%;
}

EmptyState {
    height: 1fr;
    align: center middle;
    background: $panel;
    border: round $border;
}

#welcome-title {
    width: auto;
    text-style: bold;
    color: $primary;
    margin-bottom: 1;
}

#welcome-text {
    width: 60;
    text-align: center;
    color: $text-muted;
    margin-bottom: 1;
}

ThinkingIndicator {
    height: 1;
    padding: 0 2;
    color: $warning;
    text-style: italic;
}

#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    margin: 1 0;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:disabled {
        color: $text-disabled;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
    }

    &:disabled {
        background: $surface;
        border: tall $border;
        color: $text-disabled;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.message-header, .message-content {
    height: auto;
    padding: 0;
    margin: 0;
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-information {
        border: tall $primary;
    }

    &.-warning {
        border: tall $warning;
    }

    &.-error {
        border: tall $error;
    }
}
"""
