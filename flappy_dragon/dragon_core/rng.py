"""
RNG - Obstacle Placement
========================

One generator per game, threaded into every obstacle spawn so a seed
reproduces a whole run.
"""

from __future__ import annotations

import random
from typing import Optional


class ObstacleRng:
    """
    Seeded source for obstacle offsets and gap centers.

    Ranges are half-open: `randrange(lo, hi)` never returns `hi`.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize generator.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed the generator was last reset with."""
        return self._seed

    def spawn_offset(self, screen_width: int) -> int:
        """Horizontal distance ahead of the reference point, in [W, 2W)."""
        return self._rng.randrange(screen_width, screen_width * 2)

    def gap_y(self, low: int, high: int) -> int:
        """Gap center row in [low, high)."""
        return self._rng.randrange(low, high)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator with optional new seed.

        Args:
            seed: New random seed. If None the generator keeps drawing
                from where it is, so the next run gets a fresh course.
        """
        if seed is not None:
            self._seed = seed
            self._rng = random.Random(seed)
