"""Mutable session state owned by the workout player."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal


Phase = Literal["exercising", "resting", "paused", "complete"]


@dataclass
class SessionState:
    started_at: datetime
    exercise_index: int = 0
    set_number: int = 1
    phase: Phase = "exercising"
    paused: bool = False
    countdown_sec: int = 0
    hold_running: bool = False
    completed_sets: dict[str, int] = field(default_factory=dict)

    @property
    def completed_set_count(self) -> int:
        return sum(self.completed_sets.values())


@dataclass(frozen=True)
class PlayerSnapshot:
    workout_name: str
    exercise_index: int
    exercise_total: int
    exercise_name: str
    exercise_target: str
    exercise_is_timed: bool
    set_number: int
    set_total: int
    phase: Phase
    countdown_sec: int
    hold_running: bool
    completed_set_count: int
    total_set_count: int
    progress_pct: float
    next_exercise_name: str | None
    next_exercise_target: str | None
