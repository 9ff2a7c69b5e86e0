"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Navy and gold, matching the firm's website
HSB_NAVY = Theme(
    name="hsb-navy",
    primary="#d4a93c",      # Gold - send button, focus accents
    secondary="#5b7bb5",    # Muted blue - assistant bubbles
    accent="#f0cf74",       # Light gold - highlights
    foreground="#e2e8f0",   # Slate 200 - body text
    background="#0a1628",   # Navy 950 - deepest background
    success="#4ade80",      # Green - online indicator
    warning="#fbbf24",      # Amber - warnings
    error="#f87171",        # Red - fallback bubbles
    surface="#102a43",      # Navy 900 - main surface
    panel="#0f1f38",        # Navy 925 - panel backgrounds
    dark=True,
    variables={
        "block-cursor-foreground": "#0a1628",
        "block-cursor-background": "#d4a93c",
        "block-cursor-text-style": "bold",

        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#0a1628",
        "input-selection-background": "#d4a93c 30%",

        "border": "#334e68",
        "border-blurred": "#243b53",

        "scrollbar": "#243b53",
        "scrollbar-hover": "#334e68",
        "scrollbar-active": "#d4a93c",
        "scrollbar-background": "#0f1f38",
        "scrollbar-corner-color": "#0f1f38",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#0a1628",
        "footer-key-foreground": "#d4a93c",
        "footer-key-background": "#243b53",
        "footer-description-foreground": "#94a3b8",

        "text-muted": "#94a3b8",
        "text-disabled": "#475569",
    },
)
