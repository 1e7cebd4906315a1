"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    sets: int
    reps: int | None = None
    hold_sec: int | None = None
    rest_sec: int = 0
    instructions: str = ""
    tips: str | None = None

    def __post_init__(self) -> None:
        if self.sets < 1:
            raise ValueError(f"Exercise '{self.id}': sets must be >= 1")
        if (self.reps is None) == (self.hold_sec is None):
            raise ValueError(
                f"Exercise '{self.id}': exactly one of reps or hold_sec must be set"
            )
        if self.reps is not None and self.reps <= 0:
            raise ValueError(f"Exercise '{self.id}': reps must be > 0")
        if self.hold_sec is not None and self.hold_sec <= 0:
            raise ValueError(f"Exercise '{self.id}': hold_sec must be > 0")
        if self.rest_sec < 0:
            raise ValueError(f"Exercise '{self.id}': rest_sec must be >= 0")

    @property
    def is_timed(self) -> bool:
        return self.hold_sec is not None

    @property
    def target_label(self) -> str:
        if self.reps is not None:
            return f"{self.reps} reps"
        return f"{self.hold_sec}s"


@dataclass(frozen=True)
class WorkoutDefinition:
    id: str
    name: str
    exercises: tuple[Exercise, ...]
    duration_min: int = 0
    calories: int = 0
    difficulty: int = 1
    equipment: tuple[str, ...] = ()
    description: str = ""
    category: str = "Custom"

    def __post_init__(self) -> None:
        if not self.exercises:
            raise ValueError(f"Workout '{self.id}' must contain at least one exercise")
        seen: set[str] = set()
        for exercise in self.exercises:
            if exercise.id in seen:
                raise ValueError(
                    f"Workout '{self.id}': duplicate exercise id '{exercise.id}'"
                )
            seen.add(exercise.id)

    @property
    def total_sets(self) -> int:
        return sum(exercise.sets for exercise in self.exercises)


@dataclass(frozen=True)
class SessionSummary:
    workout_id: str
    workout_name: str
    duration_min: int
    completed_exercises: int
    completed_sets: int
    estimated_calories: int
    completed_at_utc: str
