"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Deep slate background with a teal primary and warm amber highlights
MENTOR_DUSK = Theme(
    name="mentor-dusk",
    primary="#5eead4",      # Teal - session list, composer focus
    secondary="#c4b5fd",    # Lavender - tutor messages
    accent="#fbbf24",       # Amber - dialogs, highlights
    foreground="#e2e8f0",
    background="#0b1120",
    success="#86efac",      # Green - user messages, send button
    warning="#fdba74",
    error="#fda4af",
    surface="#111827",
    panel="#0f172a",
    dark=True,
    variables={
        "block-cursor-foreground": "#0b1120",
        "block-cursor-background": "#5eead4",
        "block-cursor-text-style": "bold",
        "block-cursor-blurred-foreground": "#e2e8f0",
        "block-cursor-blurred-background": "#334155",
        "block-hover-background": "#1e293b 30%",

        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#0b1120",
        "input-selection-background": "#5eead4 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "scrollbar": "#1e293b",
        "scrollbar-hover": "#334155",
        "scrollbar-active": "#5eead4",
        "scrollbar-background": "#0f172a",
        "scrollbar-corner-color": "#0f172a",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#0b1120",
        "footer-key-foreground": "#fbbf24",
        "footer-key-background": "#1e293b",
        "footer-description-foreground": "#94a3b8",

        "text-muted": "#64748b",
        "text-disabled": "#334155",
    },
)
