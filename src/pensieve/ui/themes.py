"""Theme definitions for the TUI.

This module hides the design decisions about:
- The colour choices offered by the colour picker
- How a colour choice becomes a Textual theme

Every theme shares the Catppuccin Mocha surfaces; only the accent colour
the user picked changes.
"""

from textual.theme import Theme

# Colour choices (name -> primary accent)
PALETTE: dict[str, str] = {
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "mauve": "#cba6f7",
    "pink": "#f5c2e7",
    "red": "#f38ba8",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "teal": "#94e2d5",
}

DEFAULT_COLOR = "blue"


def theme_name(color: str) -> str:
    return f"pensieve-{color}"


def build_theme(color: str) -> Theme:
    """Build the theme for a palette colour.

    Raises:
        KeyError: If ``color`` is not in the palette
    """
    primary = PALETTE[color]
    return Theme(
        name=theme_name(color),
        primary=primary,
        secondary="#cba6f7",
        accent=primary,
        foreground="#cdd6f4",
        background="#11111b",
        success="#a6e3a1",
        warning="#fab387",
        error="#f38ba8",
        surface="#1e1e2e",
        panel="#181825",
        dark=True,
        variables={
            "block-cursor-foreground": "#11111b",
            "block-cursor-background": primary,
            "block-cursor-text-style": "bold",
            "input-cursor-background": "#cdd6f4",
            "input-cursor-foreground": "#11111b",
            "input-selection-background": f"{primary} 30%",
            "border": "#45475a",
            "border-blurred": "#313244",
            "scrollbar": "#313244",
            "scrollbar-hover": "#45475a",
            "scrollbar-active": primary,
            "scrollbar-background": "#181825",
            "footer-background": "#11111b",
            "footer-key-foreground": primary,
            "footer-key-background": "#313244",
            "text-muted": "#6c7086",
        },
    )


def all_themes() -> list[Theme]:
    """One theme per palette colour."""
    return [build_theme(color) for color in PALETTE]
