from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from fittrack.services.database import (
    FitnessGoal,
    GoalsService,
    ProfileService,
    UserProfile,
    WorkoutSessionService,
)
from fittrack.services.errors import PersistenceError
from fittrack.workout.model import SessionSummary


def _client(rows: list[dict[str, Any]] | None = None) -> tuple[MagicMock, MagicMock]:
    query = MagicMock()
    for name in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(query, name).return_value = query
    query.execute.return_value = SimpleNamespace(data=rows if rows is not None else [])
    client = MagicMock()
    client.table.return_value = query
    return client, query


def _summary() -> SessionSummary:
    return SessionSummary(
        workout_id="push-day-blast",
        workout_name="Push Day Blast",
        duration_min=28,
        completed_exercises=6,
        completed_sets=18,
        estimated_calories=250,
        completed_at_utc="2026-03-01T18:30:00+00:00",
    )


def test_get_profile_returns_none_when_missing() -> None:
    client, query = _client([])

    assert ProfileService(client).get_profile("user-1") is None
    client.table.assert_called_once_with("user_profiles")
    query.eq.assert_called_once_with("id", "user-1")


def test_get_profile_maps_row() -> None:
    client, _ = _client(
        [
            {
                "id": "user-1",
                "first_name": "Sam",
                "last_name": "Rivera",
                "weight": 172.5,
                "equipment": ["Dumbbells", "Yoga mat"],
                "unknown_column": "ignored",
            }
        ]
    )

    profile = ProfileService(client).get_profile("user-1")

    assert profile is not None
    assert profile.first_name == "Sam"
    assert profile.weight == 172.5
    assert profile.equipment == ("Dumbbells", "Yoga mat")


def test_create_profile_sends_id_and_lists() -> None:
    profile = UserProfile(
        id="user-1",
        first_name="Sam",
        last_name="Rivera",
        favorite_activities=("Running",),
    )
    client, query = _client([{"id": "user-1", "first_name": "Sam", "last_name": "Rivera"}])

    ProfileService(client).create_profile(profile)

    row = query.insert.call_args.args[0]
    assert row["id"] == "user-1"
    assert row["favorite_activities"] == ["Running"]
    assert "created_at" not in row


def test_profile_errors_raise_persistence_error() -> None:
    client, query = _client()
    query.execute.side_effect = RuntimeError("permission denied")

    with pytest.raises(PersistenceError, match="permission denied"):
        ProfileService(client).get_profile("user-1")


def test_create_goal_omits_server_fields() -> None:
    goal = FitnessGoal(user_id="user-1", type="strength", title="Bench 100kg", progress=40)
    client, query = _client(
        [
            {
                "id": "goal-1",
                "user_id": "user-1",
                "type": "strength",
                "title": "Bench 100kg",
                "progress": 40,
            }
        ]
    )

    created = GoalsService(client).create_goal(goal)

    row = query.insert.call_args.args[0]
    assert "id" not in row
    assert row["status"] == "active"
    assert created.id == "goal-1"


def test_goal_progress_validated() -> None:
    with pytest.raises(ValueError):
        FitnessGoal(user_id="user-1", type="habit", title="Run daily", progress=120)

    client, query = _client()
    with pytest.raises(ValueError):
        GoalsService(client).update_goal("goal-1", {"progress": -1})
    query.update.assert_not_called()


def test_get_goals_newest_first() -> None:
    client, query = _client(
        [
            {"id": "g2", "user_id": "user-1", "type": "habit", "title": "Stretch"},
            {"id": "g1", "user_id": "user-1", "type": "weight", "title": "Lose 5kg"},
        ]
    )

    goals = GoalsService(client).get_goals("user-1")

    assert [goal.id for goal in goals] == ["g2", "g1"]
    query.order.assert_called_once_with("created_at", desc=True)


def test_delete_goal_failure() -> None:
    client, query = _client()
    query.execute.side_effect = RuntimeError("timeout")

    with pytest.raises(PersistenceError):
        GoalsService(client).delete_goal("goal-1")


def test_save_session_maps_summary() -> None:
    client, query = _client(
        [
            {
                "id": "s1",
                "user_id": "user-1",
                "workout_id": "push-day-blast",
                "workout_name": "Push Day Blast",
                "duration": 28,
                "completed_exercises": 6,
                "completed_sets": 18,
                "estimated_calories": 250,
                "completed_at": "2026-03-01T18:30:00+00:00",
            }
        ]
    )

    record = WorkoutSessionService(client).save_session("user-1", _summary())

    client.table.assert_called_once_with("workout_sessions")
    row = query.insert.call_args.args[0]
    assert row["duration"] == 28
    assert row["completed_at"] == "2026-03-01T18:30:00+00:00"
    assert "id" not in row
    assert record.id == "s1"


def test_save_session_failure_raises() -> None:
    client, query = _client()

    with pytest.raises(PersistenceError):
        WorkoutSessionService(client).save_session("user-1", _summary())

    query.execute.side_effect = RuntimeError("insert failed")
    with pytest.raises(PersistenceError, match="insert failed"):
        WorkoutSessionService(client).save_session("user-1", _summary())


def test_get_user_sessions_limit() -> None:
    client, query = _client([])

    assert WorkoutSessionService(client).get_user_sessions("user-1", limit=5) == []
    query.limit.assert_called_once_with(5)
    query.order.assert_called_once_with("completed_at", desc=True)
