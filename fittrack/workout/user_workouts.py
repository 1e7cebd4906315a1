"""User-defined workout definitions stored locally."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from fittrack.config import get_settings
from fittrack.workout.model import Exercise, WorkoutDefinition
from fittrack.workout.parser import load_workout, slugify, workout_to_payload


def _default_workouts_dir() -> Path:
    return get_settings().data_dir / "workouts"


@dataclass(frozen=True)
class UserWorkout:
    key: str
    name: str
    category: str
    path: Path


def list_user_workouts(base_dir: Path | None = None) -> list[UserWorkout]:
    root = base_dir or _default_workouts_dir()
    if not root.exists():
        return []
    out: list[UserWorkout] = []
    for file in sorted(root.glob("*.json")):
        try:
            payload = json.loads(file.read_text(encoding="utf-8"))
            name = str(payload.get("name", file.stem))
            category = str(payload.get("category", "Custom"))
        except (json.JSONDecodeError, AttributeError):
            name = file.stem
            category = "Custom"
        out.append(UserWorkout(key=file.stem, name=name, category=category, path=file))
    return out


def load_user_workout(path: Path) -> WorkoutDefinition:
    return load_workout(path)


def save_user_workout(
    *,
    name: str,
    exercises: list[Exercise] | tuple[Exercise, ...],
    category: str = "Custom",
    description: str = "",
    duration_min: int = 0,
    calories: int = 0,
    difficulty: int = 1,
    equipment: tuple[str, ...] = (),
    base_dir: Path | None = None,
    overwrite_key: str | None = None,
) -> Path:
    if not exercises:
        raise ValueError("Workout must include at least one exercise")
    root = base_dir or _default_workouts_dir()
    root.mkdir(parents=True, exist_ok=True)
    key = overwrite_key or slugify(name)
    workout = WorkoutDefinition(
        id=key,
        name=name,
        exercises=tuple(exercises),
        duration_min=duration_min,
        calories=calories,
        difficulty=difficulty,
        equipment=equipment,
        description=description,
        category=category,
    )
    out = root / f"{key}.json"
    out.write_text(
        json.dumps(workout_to_payload(workout), ensure_ascii=True, indent=2),
        encoding="utf-8",
    )
    return out
