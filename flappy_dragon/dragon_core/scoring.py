"""
Scoring System
==============

One point per obstacle the dragon flies past.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    obstacle_x: int
    frame_count: int

    def __repr__(self) -> str:
        return f"ScoreEvent(+{self.points} at x={self.obstacle_x}, tick={self.frame_count})"


class ScoreTracker:
    """
    Tracks the run's score.

    The score can only grow; `reset` is the only way back to zero.
    """

    POINTS_PER_OBSTACLE = 1

    def __init__(self):
        self._score: int = 0
        self._events: list = []

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def obstacles_cleared(self) -> int:
        """Number of obstacles passed this run."""
        return len(self._events)

    def apply_clear(self, obstacle_x: int, frame_count: int) -> ScoreEvent:
        """
        Award points for passing the obstacle at `obstacle_x`.

        Returns:
            ScoreEvent describing the points awarded.
        """
        event = ScoreEvent(
            points=self.POINTS_PER_OBSTACLE,
            obstacle_x=obstacle_x,
            frame_count=frame_count
        )
        self._score += event.points
        self._events.append(event)
        return event

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._events = []
