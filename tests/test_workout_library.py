from __future__ import annotations

import pytest

from fittrack.workout.library import (
    CATEGORIES,
    difficulty_label,
    get_workout,
    list_categories,
    list_workouts,
)


def test_catalog_ids_unique_and_categories_known() -> None:
    workouts = list_workouts()
    ids = [workout.id for workout in workouts]

    assert len(ids) == len(set(ids))
    assert all(workout.category in CATEGORIES for workout in workouts)
    assert all(1 <= workout.difficulty <= 5 for workout in workouts)


def test_push_day_blast_definition() -> None:
    workout = get_workout("push-day-blast")

    assert workout.name == "Push Day Blast"
    assert len(workout.exercises) == 6
    assert workout.calories == 250
    plank = next(exercise for exercise in workout.exercises if exercise.id == "plank")
    assert plank.hold_sec == 30
    assert plank.reps is None


def test_list_workouts_by_category() -> None:
    yoga = list_workouts("Yoga")

    assert [workout.id for workout in yoga] == ["morning-flow"]
    assert list_workouts("Pilates") == ()


def test_list_categories_counts() -> None:
    counts = dict(list_categories())

    assert counts == {"Strength": 3, "Cardio": 1, "HIIT": 1, "Yoga": 1}


def test_get_workout_unknown_id() -> None:
    with pytest.raises(ValueError):
        get_workout("does-not-exist")


def test_difficulty_label() -> None:
    assert difficulty_label(1) == "Beginner"
    assert difficulty_label(3) == "Intermediate"
    assert difficulty_label(5) == "Advanced"
