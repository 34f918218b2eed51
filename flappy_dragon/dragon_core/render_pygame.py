"""
Pygame Renderer
===============

Windowed display surface. Each logical cell is a tile of
tile_width x tile_height pixels.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config
from flappy_dragon.dragon_core.surface import Color, DisplaySurface


class PygameSurface(DisplaySurface):
    """
    DisplaySurface backed by a pygame window.

    Draw calls go to the back buffer; call present() once per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        tile_size: Optional[int] = None
    ):
        """
        Initialize pygame and open the window.

        Args:
            config: Game configuration. Uses default if None.
            tile_size: Square tile size in pixels. Uses config tiles if None.

        Raises:
            ImportError: If pygame is not installed.
            pygame.error: If the display cannot be created.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameSurface. Install: pip install pygame")

        if config is None:
            config = get_config()

        self._config = config
        self._width = config.screen.width
        self._height = config.screen.height
        self._tile_w = tile_size or config.screen.tile_width
        self._tile_h = tile_size or config.screen.tile_height

        if not pygame.get_init():
            pygame.init()

        self._screen = pygame.display.set_mode(
            (self._width * self._tile_w, self._height * self._tile_h)
        )
        pygame.display.set_caption(config.screen.title)

        pygame.font.init()
        self._font = pygame.font.SysFont("monospace", self._tile_h, bold=True)
        self._glyph_cache: Dict[Tuple[str, Color], "pygame.Surface"] = {}

        self._text_color = config.colors.text
        self._default_bg = config.colors.menu_background

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _cell_rect(self, x: int, y: int, width: int = 1, height: int = 1) -> "pygame.Rect":
        return pygame.Rect(
            x * self._tile_w, y * self._tile_h,
            width * self._tile_w, height * self._tile_h
        )

    def _glyph(self, char: str, color: Color) -> "pygame.Surface":
        key = (char, color)
        glyph = self._glyph_cache.get(key)
        if glyph is None:
            glyph = self._font.render(char, True, color)
            self._glyph_cache[key] = glyph
        return glyph

    def cls(self) -> None:
        self._screen.fill(self._default_bg)

    def cls_bg(self, color: Color) -> None:
        self._screen.fill(color)

    def draw_box(self, x: int, y: int, width: int, height: int,
                 fg: Color, bg: Color) -> None:
        rect = self._cell_rect(x, y, width, height)
        pygame.draw.rect(self._screen, bg, rect)
        pygame.draw.rect(self._screen, fg, rect, width=max(1, self._tile_w // 6))

    def draw_bar_horizontal(self, x: int, y: int, width: int, height: int,
                            fg: Color, bg: Color) -> None:
        rect = self._cell_rect(x, y, width, height)
        pygame.draw.rect(self._screen, bg, rect)
        pygame.draw.rect(self._screen, fg, rect.inflate(-2, -2))

    def _print(self, x: int, y: int, text: str, fg: Color,
               bg: Optional[Color] = None) -> None:
        # Monospace: one glyph per cell keeps text on the grid
        for i, char in enumerate(text):
            rect = self._cell_rect(x + i, y)
            if bg is not None:
                pygame.draw.rect(self._screen, bg, rect)
            if char != " ":
                glyph = self._glyph(char, fg)
                self._screen.blit(glyph, glyph.get_rect(center=rect.center))

    def print(self, x: int, y: int, text: str) -> None:
        self._print(x, y, text, self._text_color)

    def print_centered(self, y: int, text: str) -> None:
        self._print(self.centered_x(text), y, text, self._text_color)

    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        self._print(self.centered_x(text), y, text, fg, bg)

    def present(self) -> None:
        """Flip the back buffer to the window."""
        pygame.display.flip()

    def close(self) -> None:
        """Clean up pygame resources."""
        self._glyph_cache.clear()
        pygame.quit()
