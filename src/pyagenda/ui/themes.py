"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Light slate/blue palette: blue header and user bubbles, white replies
AGENDA_LIGHT = Theme(
    name="agenda-light",
    primary="#2563eb",      # Blue 600 - header, send button
    secondary="#3b82f6",    # Blue 500 - scroll control
    accent="#1d4ed8",       # Blue 700 - hover states
    foreground="#1f2937",   # Gray 800 - body text
    background="#f3f4f6",   # Gray 100 - page background
    success="#16a34a",
    warning="#d97706",
    error="#dc2626",
    surface="#ffffff",      # Assistant bubbles, input bar
    panel="#e5e7eb",        # Gray 200 - log panel
    dark=False,
    variables={
        "block-cursor-foreground": "#ffffff",
        "block-cursor-background": "#2563eb",
        "input-cursor-background": "#1f2937",
        "input-selection-background": "#60a5fa 30%",

        "border": "#d1d5db",
        "border-blurred": "#e5e7eb",

        "scrollbar": "#cbd5e1",
        "scrollbar-hover": "#94a3b8",
        "scrollbar-active": "#2563eb",
        "scrollbar-background": "#f3f4f6",

        "footer-foreground": "#374151",
        "footer-background": "#e5e7eb",
        "footer-key-foreground": "#1d4ed8",

        "text-muted": "#6b7280",
    },
)
