"""Workout file parser (CSV/JSON)."""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path

from fittrack.workout.model import Exercise, WorkoutDefinition


class WorkoutParseError(ValueError):
    """Raised when a workout file is invalid."""


def slugify(name: str, fallback: str = "custom-workout") -> str:
    s = re.sub(r"[^a-zA-Z0-9]+", "-", name.strip().lower()).strip("-")
    return s or fallback


def load_workout(path: str | Path) -> WorkoutDefinition:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return _load_json(file_path)
    if suffix == ".csv":
        return _load_csv(file_path)
    raise WorkoutParseError(
        f"Unsupported workout format '{file_path.suffix}'. Use .json or .csv"
    )


def parse_workout_payload(data: object, *, default_name: str) -> WorkoutDefinition:
    if not isinstance(data, dict):
        raise WorkoutParseError("Workout JSON must be an object")

    name_obj = data.get("name", default_name)
    if not isinstance(name_obj, str):
        raise WorkoutParseError("Workout field 'name' must be a string")
    name = name_obj.strip() or default_name

    id_obj = data.get("id")
    workout_id = str(id_obj).strip() if id_obj is not None else ""

    exercises_obj = data.get("exercises")
    if not isinstance(exercises_obj, list):
        raise WorkoutParseError("Workout field 'exercises' must be an array")

    exercises: list[Exercise] = []
    for i, raw in enumerate(exercises_obj):
        if not isinstance(raw, dict):
            raise WorkoutParseError(f"Exercise {i + 1}: must be an object")
        exercises.append(_build_exercise(raw, index=i))

    equipment_obj = data.get("equipment", [])
    if not isinstance(equipment_obj, list):
        raise WorkoutParseError("Workout field 'equipment' must be an array")

    difficulty = _parse_optional_int(data.get("difficulty"), "difficulty")
    if difficulty is None:
        difficulty = 1
    if not 1 <= difficulty <= 5:
        raise WorkoutParseError("Workout field 'difficulty' must be between 1 and 5")

    return _build_workout(
        workout_id=workout_id or slugify(name),
        name=name,
        exercises=exercises,
        duration_min=_parse_optional_int(data.get("duration_min"), "duration_min") or 0,
        calories=_parse_optional_int(data.get("calories"), "calories") or 0,
        difficulty=difficulty,
        equipment=tuple(str(item) for item in equipment_obj),
        description=str(data.get("description") or ""),
        category=str(data.get("category") or "Custom"),
    )


def workout_to_payload(workout: WorkoutDefinition) -> dict[str, object]:
    return {
        "id": workout.id,
        "name": workout.name,
        "category": workout.category,
        "description": workout.description,
        "duration_min": workout.duration_min,
        "calories": workout.calories,
        "difficulty": workout.difficulty,
        "equipment": list(workout.equipment),
        "exercises": [
            {
                "id": exercise.id,
                "name": exercise.name,
                "sets": exercise.sets,
                "reps": exercise.reps,
                "hold_sec": exercise.hold_sec,
                "rest_sec": exercise.rest_sec,
                "instructions": exercise.instructions,
                "tips": exercise.tips,
            }
            for exercise in workout.exercises
        ],
    }


def _load_json(path: Path) -> WorkoutDefinition:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc
    return parse_workout_payload(data, default_name=path.stem)


def _load_csv(path: Path) -> WorkoutDefinition:
    rows: list[Exercise] = []
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        fields = set(reader.fieldnames or [])
        required = {"id", "name", "sets"}
        if not required.issubset(fields) or not fields & {"reps", "hold_sec"}:
            raise WorkoutParseError(
                "CSV must contain headers: id,name,sets,reps|hold_sec[,rest_sec,"
                "instructions,tips]"
            )

        for i, row in enumerate(reader):
            rows.append(_build_exercise(row, index=i))

    return _build_workout(
        workout_id=slugify(path.stem),
        name=path.stem,
        exercises=rows,
    )


def _build_exercise(raw: dict[str, object], *, index: int) -> Exercise:
    exercise_id = str(raw.get("id") or "").strip()
    name = str(raw.get("name") or "").strip()
    if not name:
        raise WorkoutParseError(f"Exercise {index + 1}: name is required")

    sets = _parse_int_field(raw=raw.get("sets"), field_name="sets", index=index)
    reps = _parse_optional_int(raw.get("reps"), "reps", index=index)
    hold_sec = _parse_optional_int(raw.get("hold_sec"), "hold_sec", index=index)
    rest_sec = _parse_optional_int(raw.get("rest_sec"), "rest_sec", index=index) or 0

    if sets <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: sets must be > 0")
    if (reps is None) == (hold_sec is None):
        raise WorkoutParseError(
            f"Exercise {index + 1}: exactly one of reps or hold_sec is required"
        )
    if reps is not None and reps <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: reps must be > 0")
    if hold_sec is not None and hold_sec <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: hold_sec must be > 0")
    if rest_sec < 0:
        raise WorkoutParseError(f"Exercise {index + 1}: rest_sec must be >= 0")

    tips_obj = raw.get("tips")
    tips: str | None
    if tips_obj is None:
        tips = None
    else:
        tips = str(tips_obj).strip() or None

    return Exercise(
        id=exercise_id or slugify(name, fallback=f"exercise-{index + 1}"),
        name=name,
        sets=sets,
        reps=reps,
        hold_sec=hold_sec,
        rest_sec=rest_sec,
        instructions=str(raw.get("instructions") or "").strip(),
        tips=tips,
    )


def _build_workout(
    *,
    workout_id: str,
    name: str,
    exercises: list[Exercise],
    **details: object,
) -> WorkoutDefinition:
    if not exercises:
        raise WorkoutParseError("Workout must contain at least one exercise")
    try:
        return WorkoutDefinition(
            id=workout_id,
            name=name,
            exercises=tuple(exercises),
            **details,  # type: ignore[arg-type]
        )
    except ValueError as exc:
        raise WorkoutParseError(str(exc)) from exc


def _parse_int_field(*, raw: object, field_name: str, index: int) -> int:
    if raw is None:
        raise WorkoutParseError(f"Exercise {index + 1}: invalid {field_name}")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"Exercise {index + 1}: invalid {field_name}") from exc


def _parse_optional_int(
    raw: object, field_name: str, *, index: int | None = None
) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, str) and raw.strip() == "":
        return None
    if index is None:
        try:
            return int(str(raw).strip())
        except ValueError as exc:
            raise WorkoutParseError(f"Workout field '{field_name}' must be an integer") from exc
    return _parse_int_field(raw=raw, field_name=field_name, index=index)
