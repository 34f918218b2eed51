"""
Text Renderer
=============

Headless numpy-backed cell grid. Used for tests, the Gymnasium "ansi" and
"rgb_array" render modes, and anywhere a window is not available.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config
from flappy_dragon.dragon_core.surface import Color, DisplaySurface

BOX_GLYPH = "@"
BAR_GLYPH = "#"
EMPTY_GLYPH = " "


class TextSurface(DisplaySurface):
    """
    Display surface that writes into arrays instead of a window.

    - `chars`: (height, width) unicode glyphs
    - `fg`, `bg`: (height, width, 3) uint8 colors
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        width: Optional[int] = None,
        height: Optional[int] = None
    ):
        """
        Initialize surface.

        Args:
            config: Game configuration. Uses default if None.
            width: Override grid width in cells.
            height: Override grid height in cells.
        """
        if config is None:
            config = get_config()

        self._width = width or config.screen.width
        self._height = height or config.screen.height
        self._default_fg = np.array(config.colors.text, dtype=np.uint8)
        self._default_bg = np.array(config.colors.menu_background, dtype=np.uint8)

        self.chars = np.full((self._height, self._width), EMPTY_GLYPH, dtype="<U1")
        self.fg = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        self.bg = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        self.cls()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _fill(self, x: int, y: int, width: int, height: int,
              glyph: str, fg: Color, bg: Color) -> None:
        """Fill a clipped rectangle of cells."""
        x0, x1 = max(0, x), min(self._width, x + width)
        y0, y1 = max(0, y), min(self._height, y + height)
        if x0 >= x1 or y0 >= y1:
            return
        self.chars[y0:y1, x0:x1] = glyph
        self.fg[y0:y1, x0:x1] = fg
        self.bg[y0:y1, x0:x1] = bg

    def cls(self) -> None:
        self.cls_bg(tuple(self._default_bg))

    def cls_bg(self, color: Color) -> None:
        self.chars.fill(EMPTY_GLYPH)
        self.fg[:] = self._default_fg
        self.bg[:] = color

    def draw_box(self, x: int, y: int, width: int, height: int,
                 fg: Color, bg: Color) -> None:
        self._fill(x, y, width, height, BOX_GLYPH, fg, bg)

    def draw_bar_horizontal(self, x: int, y: int, width: int, height: int,
                            fg: Color, bg: Color) -> None:
        self._fill(x, y, width, height, BAR_GLYPH, fg, bg)

    def _print(self, x: int, y: int, text: str,
               fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        if not 0 <= y < self._height:
            return
        for i, char in enumerate(text):
            col = x + i
            if col < 0:
                continue
            if col >= self._width:
                break
            self.chars[y, col] = char
            if fg is not None:
                self.fg[y, col] = fg
            if bg is not None:
                self.bg[y, col] = bg

    def print(self, x: int, y: int, text: str) -> None:
        self._print(x, y, text, fg=tuple(self._default_fg))

    def print_centered(self, y: int, text: str) -> None:
        self.print(self.centered_x(text), y, text)

    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        self._print(self.centered_x(text), y, text, fg=fg, bg=bg)

    def char_at(self, x: int, y: int) -> str:
        """Glyph at a cell."""
        return str(self.chars[y, x])

    def row_text(self, y: int) -> str:
        """One row as a string, trailing blanks stripped."""
        return "".join(self.chars[y]).rstrip()

    def to_string(self) -> str:
        """Whole frame as newline-separated rows."""
        return "\n".join("".join(row) for row in self.chars)

    def to_rgb_array(self) -> np.ndarray:
        """
        One pixel per cell: glyph cells take the foreground color, empty
        cells the background.

        Returns:
            (height, width, 3) uint8 array.
        """
        glyph_mask = (self.chars != EMPTY_GLYPH)[..., None]
        return np.where(glyph_mask, self.fg, self.bg).astype(np.uint8)
