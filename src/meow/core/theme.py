#!/usr/bin/env python3
"""
MEOW THEME - The Palette
------------------------
Maps semantic roles (number, highlight, error, ...) to concrete terminal
styling. Rendering code only ever names roles; this module is the single
place where a role becomes an escape sequence.

Two variants exist: enabled (classic 16-colour SGR codes) and disabled
(every role renders as bare text). A theme is built once and never mutated;
turning colour off swaps in the disabled variant wholesale.

Author: Meow Team
Date: 2026-10-19
"""

import logging
from typing import Dict, Mapping, Optional

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

logger = logging.getLogger("meow.theme")

RAINBOW_ROLES = (
    "rainbow.red",
    "rainbow.yellow",
    "rainbow.green",
    "rainbow.cyan",
    "rainbow.blue",
    "rainbow.magenta",
)

DEFAULT_ROLE_STYLES: Dict[str, str] = {
    "normal": "none",
    "number": "yellow",
    "highlight": "cyan",
    "error": "red",
    "success": "green",
    "filename": "magenta",
    "rainbow.red": "red",
    "rainbow.yellow": "yellow",
    "rainbow.green": "green",
    "rainbow.cyan": "cyan",
    "rainbow.blue": "blue",
    "rainbow.magenta": "magenta",
}

class ColorTheme:
    """
    Resolves roles to styled strings through rich's Style engine.
    """

    def __init__(self, enabled: bool, overrides: Optional[Mapping[str, str]] = None):
        self._enabled = enabled
        styles: Dict[str, Style] = {
            role: Style.parse(definition) for role, definition in DEFAULT_ROLE_STYLES.items()
        }
        for role, definition in (overrides or {}).items():
            if role not in styles:
                logger.warning(f"Ignoring style for unknown role '{role}'")
                continue
            try:
                styles[role] = Style.parse(str(definition))
            except StyleSyntaxError as e:
                logger.warning(f"Invalid style '{definition}' for role '{role}': {e}")
        self._overrides = dict(overrides or {})
        self.rich_theme = Theme(styles, inherit=False)

    @classmethod
    def probe(cls, overrides: Optional[Mapping[str, str]] = None,
              console: Optional[Console] = None) -> "ColorTheme":
        """Enables colour only when standard output is an interactive terminal."""
        console = console or Console()
        return cls(console.is_terminal, overrides)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def disabled(self) -> "ColorTheme":
        """The colourless counterpart of this theme."""
        return ColorTheme(False, self._overrides)

    def style_for(self, role: str) -> Style:
        return self.rich_theme.styles.get(role, Style.null())

    def paint(self, text: str, role: Optional[str]) -> str:
        """Wraps text in the escape codes of a role, or returns it untouched."""
        if not self._enabled or role is None:
            return text
        return self.style_for(role).render(text, color_system=ColorSystem.STANDARD)
