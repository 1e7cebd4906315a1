from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from fittrack.core.clock import ManualClock
from fittrack.core.ticker import ManualTicker
from fittrack.services.database import UserProfile, WorkoutSessionRecord
from fittrack.services.errors import PersistenceError
from fittrack.ui.controller import AppController
from fittrack.workout.library import get_workout
from fittrack.workout.model import Exercise, SessionSummary, WorkoutDefinition
from fittrack.workout.session_store import load_recent_summaries


QUICK = WorkoutDefinition(
    id="quick",
    name="Quick",
    exercises=(
        Exercise("a", "A", sets=2, reps=5, rest_sec=10),
        Exercise("b", "B", sets=1, hold_sec=20),
    ),
    calories=90,
)


def _signed_in_controller(
    tmp_path: Path, **services: MagicMock
) -> tuple[AppController, MagicMock, MagicMock]:
    auth = MagicMock()
    auth.sign_in.return_value = SimpleNamespace(user=SimpleNamespace(id="user-1"))
    sessions = MagicMock()
    controller = AppController(
        auth=auth,
        sessions=sessions,
        history_path=tmp_path / "sessions.jsonl",
        **services,
    )
    controller.sign_in("sam@example.com", "hunter22")
    return controller, auth, sessions


def test_completed_workout_is_recorded_locally_and_remotely(tmp_path: Path) -> None:
    controller, _, sessions = _signed_in_controller(tmp_path)
    done: list[SessionSummary] = []
    ticker = ManualTicker()

    player = controller.start_workout(
        QUICK, ticker=ticker, clock=ManualClock(), on_complete=done.append
    )
    player.complete_set()
    ticker.advance(10)
    player.complete_set()
    player.complete_set()

    assert len(done) == 1
    assert controller.last_summary == done[0]
    assert not controller.workout_running
    assert load_recent_summaries(path=tmp_path / "sessions.jsonl") == done
    sessions.save_session.assert_called_once_with("user-1", done[0])
    assert controller.last_error is None


def test_remote_save_failure_keeps_local_history(tmp_path: Path) -> None:
    controller, _, sessions = _signed_in_controller(tmp_path)
    sessions.save_session.side_effect = PersistenceError("Could not save workout session")

    player = controller.start_workout(get_workout("morning-flow"), ticker=ManualTicker())
    for _ in range(player.workout.total_sets):
        player.complete_set()

    assert controller.last_error == "Could not save workout session"
    assert len(load_recent_summaries(path=tmp_path / "sessions.jsonl")) == 1


def test_guest_workout_skips_remote_save(tmp_path: Path) -> None:
    controller = AppController(history_path=tmp_path / "sessions.jsonl")

    player = controller.start_workout(QUICK, ticker=ManualTicker())
    for _ in range(QUICK.total_sets):
        player.complete_set()

    assert not controller.signed_in
    assert controller.last_summary is not None
    with pytest.raises(RuntimeError):
        controller.sign_in("sam@example.com", "hunter22")


def test_only_one_workout_runs_at_a_time(tmp_path: Path) -> None:
    controller = AppController(history_path=tmp_path / "sessions.jsonl")
    controller.start_workout(QUICK, ticker=ManualTicker())

    with pytest.raises(RuntimeError):
        controller.start_workout(QUICK, ticker=ManualTicker())

    controller.exit_workout()
    assert controller.player is None
    controller.start_workout(QUICK, ticker=ManualTicker())
    assert controller.workout_running


def test_exit_workout_cancels_countdown_and_notifies(tmp_path: Path) -> None:
    controller = AppController(history_path=tmp_path / "sessions.jsonl")
    exits: list[int] = []
    ticker = ManualTicker()

    player = controller.start_workout(QUICK, ticker=ticker, on_exit=lambda: exits.append(1))
    player.complete_set()
    assert ticker.active

    controller.exit_workout()

    assert exits == [1]
    assert not ticker.active
    assert not (tmp_path / "sessions.jsonl").exists()


def test_sign_out_ends_running_workout(tmp_path: Path) -> None:
    controller, auth, _ = _signed_in_controller(tmp_path)
    exits: list[int] = []
    controller.start_workout(QUICK, ticker=ManualTicker(), on_exit=lambda: exits.append(1))

    controller.sign_out()

    assert exits == [1]
    assert not controller.signed_in
    auth.sign_out.assert_called_once_with()


def test_restore_session(tmp_path: Path) -> None:
    auth = MagicMock()
    auth.get_session.return_value = SimpleNamespace(user=SimpleNamespace(id="user-9"))
    controller = AppController(auth=auth, history_path=tmp_path / "sessions.jsonl")

    assert controller.restore_session().id == "user-9"
    assert controller.signed_in

    auth.get_session.return_value = None
    assert controller.restore_session() is None
    assert not controller.signed_in


def test_local_history_write_failure_still_completes(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    controller = AppController(history_path=blocker / "sessions.jsonl")
    done: list[SessionSummary] = []

    player = controller.start_workout(QUICK, ticker=ManualTicker(), on_complete=done.append)
    for _ in range(QUICK.total_sets):
        player.complete_set()

    assert len(done) == 1
    assert controller.last_error is not None
    assert "local history" in controller.last_error
    assert not controller.workout_running


def test_recent_sessions_prefers_remote_history_when_signed_in(tmp_path: Path) -> None:
    controller, _, sessions = _signed_in_controller(tmp_path)
    record = WorkoutSessionRecord(
        user_id="user-1",
        workout_id="hiit-inferno",
        workout_name="HIIT Inferno",
        duration=21,
        completed_exercises=3,
        completed_sets=12,
        estimated_calories=320,
        completed_at="2026-03-02T18:00:00+00:00",
    )
    sessions.get_user_sessions.return_value = [record]

    rows = controller.recent_sessions(limit=5)

    sessions.get_user_sessions.assert_called_once_with("user-1", limit=5)
    assert [row.workout_name for row in rows] == ["HIIT Inferno"]
    assert rows[0].duration_min == 21


def test_recent_sessions_falls_back_to_local(tmp_path: Path) -> None:
    controller, _, sessions = _signed_in_controller(tmp_path)
    player = controller.start_workout(QUICK, ticker=ManualTicker())
    for _ in range(QUICK.total_sets):
        player.complete_set()
    sessions.get_user_sessions.side_effect = PersistenceError("Could not load workout sessions")

    rows = controller.recent_sessions()

    assert [row.workout_id for row in rows] == ["quick"]

    guest = AppController(history_path=tmp_path / "sessions.jsonl")
    assert [row.workout_id for row in guest.recent_sessions()] == ["quick"]


def test_save_profile_creates_then_updates(tmp_path: Path) -> None:
    profiles = MagicMock()
    controller, _, _ = _signed_in_controller(tmp_path, profiles=profiles)
    profiles.get_profile.return_value = None

    controller.save_profile(
        "Sam", "Rivera", activity_level="very-active", equipment=("Dumbbells",)
    )

    created = profiles.create_profile.call_args.args[0]
    assert created == UserProfile(
        id="user-1",
        first_name="Sam",
        last_name="Rivera",
        activity_level="very-active",
        equipment=("Dumbbells",),
    )

    profiles.get_profile.return_value = created
    controller.save_profile("Sam", "Rivera-Lee", equipment=("Dumbbells", "Bands"))

    profiles.update_profile.assert_called_once_with(
        "user-1",
        {"first_name": "Sam", "last_name": "Rivera-Lee", "equipment": ["Dumbbells", "Bands"]},
    )


def test_profile_and_goals_need_sign_in(tmp_path: Path) -> None:
    profiles = MagicMock()
    goals = MagicMock()
    controller = AppController(
        history_path=tmp_path / "sessions.jsonl", profiles=profiles, goals=goals
    )

    assert controller.load_profile() is None
    assert controller.list_goals() == []
    with pytest.raises(RuntimeError):
        controller.add_goal("habit", "Stretch daily")
    profiles.get_profile.assert_not_called()
    goals.create_goal.assert_not_called()


def test_goal_management_goes_through_goals_service(tmp_path: Path) -> None:
    goals = MagicMock()
    controller, _, _ = _signed_in_controller(tmp_path, goals=goals)

    controller.add_goal("strength", "Do 25 Push-ups", target_value="25", unit="reps")
    controller.update_goal("goal-1", {"progress": 40})
    controller.remove_goal("goal-1")
    controller.list_goals()

    goal = goals.create_goal.call_args.args[0]
    assert goal.user_id == "user-1"
    assert goal.type == "strength"
    assert goal.target_value == "25"
    goals.update_goal.assert_called_once_with("goal-1", {"progress": 40})
    goals.delete_goal.assert_called_once_with("goal-1")
    goals.get_goals.assert_called_once_with("user-1")


def test_auth_events_track_current_user(tmp_path: Path) -> None:
    auth = MagicMock()
    controller = AppController(auth=auth, history_path=tmp_path / "sessions.jsonl")
    controller.watch_auth()
    relay = auth.on_auth_state_change.call_args.args[0]

    relay("SIGNED_IN", SimpleNamespace(user=SimpleNamespace(id="user-3")))
    assert controller.user.id == "user-3"

    auth.get_current_user.return_value = SimpleNamespace(id="user-3b")
    relay("TOKEN_REFRESHED", None)
    assert controller.user.id == "user-3b"

    exits: list[int] = []
    controller.start_workout(QUICK, ticker=ManualTicker(), on_exit=lambda: exits.append(1))
    relay("SIGNED_OUT", None)
    assert not controller.signed_in
    assert exits == [1]
