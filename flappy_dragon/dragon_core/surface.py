"""
Display Surface
===============

Boundary contract between the game core and whatever draws it.

The core only ever writes to a surface; it never reads anything back.
Coordinates are logical cells, with (0, 0) at the top-left corner.
Implementations must clip writes that fall outside the grid.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Color = Tuple[int, int, int]


class GameKey(Enum):
    """Discrete keys the game understands."""
    SPACE = "space"
    P = "p"
    Q = "q"
    ESCAPE = "escape"

    @property
    def label(self) -> str:
        """Upper-case name as shown in on-screen hints."""
        return self.value.upper()


@dataclass
class FrameContext:
    """
    Everything the frame driver hands to the core for one frame.

    The driver owns `quitting`: the core may set it but never clears it.
    """
    surface: "DisplaySurface"
    frame_time_ms: float = 0.0
    key: Optional[GameKey] = None
    quitting: bool = False


class DisplaySurface(ABC):
    """Abstract cell-grid display."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Grid width in cells."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Grid height in cells."""

    @abstractmethod
    def cls(self) -> None:
        """Clear the screen to the default background."""

    @abstractmethod
    def cls_bg(self, color: Color) -> None:
        """Clear the screen to a background color."""

    @abstractmethod
    def draw_box(self, x: int, y: int, width: int, height: int,
                 fg: Color, bg: Color) -> None:
        """Draw a filled box."""

    @abstractmethod
    def draw_bar_horizontal(self, x: int, y: int, width: int, height: int,
                            fg: Color, bg: Color) -> None:
        """Draw a horizontal bar segment."""

    @abstractmethod
    def print(self, x: int, y: int, text: str) -> None:
        """Print left-aligned text starting at (x, y)."""

    @abstractmethod
    def print_centered(self, y: int, text: str) -> None:
        """Print text horizontally centered on row y."""

    @abstractmethod
    def print_color_centered(self, y: int, fg: Color, bg: Color, text: str) -> None:
        """Print centered text with explicit colors."""

    def centered_x(self, text: str) -> int:
        """Column at which `text` starts when centered."""
        return max(0, (self.width - len(text)) // 2)
