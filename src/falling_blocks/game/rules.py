from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ScoringRules:
    lock_points: int = 4
    row_points: Optional[int] = None  # None means one point per grid column
    points_per_level: int = 100
    max_level: int = 10

    def points_for_row(self, width: int) -> int:
        return width if self.row_points is None else self.row_points

    def level_for_score(self, score: int) -> int:
        return min(self.max_level, max(1, 1 + score // self.points_per_level))

    def step_delay(self, level: int, soft_drop: bool = False) -> int:
        """Ticks between two gravity steps: max_level + 1 - level, or 1 when dropping."""
        if soft_drop:
            return 1
        return self.max_level + 1 - level
