from __future__ import annotations

from pathlib import Path

import pytest

from fittrack.cli.main import (
    apply_command,
    build_parser,
    describe_snapshot,
    format_clock,
    resolve_workout,
    run_import,
    run_list,
)
from fittrack.core.player import WorkoutSessionPlayer
from fittrack.core.ticker import ManualTicker
from fittrack.workout.library import get_workout
from fittrack.workout.model import SessionSummary


def _player() -> tuple[WorkoutSessionPlayer, list[SessionSummary], list[int]]:
    summaries: list[SessionSummary] = []
    exits: list[int] = []
    player = WorkoutSessionPlayer(
        get_workout("push-day-blast"),
        on_complete=summaries.append,
        on_exit=lambda: exits.append(1),
        ticker=ManualTicker(),
    )
    return player, summaries, exits


def test_apply_command_drives_player() -> None:
    player, _, exits = _player()

    assert apply_command(player, "d")
    assert player.phase == "resting"
    assert apply_command(player, " PAUSE ")
    assert player.phase == "paused"
    assert apply_command(player, "n")
    assert player.state.exercise_index == 1
    assert apply_command(player, "p")
    assert player.state.exercise_index == 0
    assert apply_command(player, "")
    assert not apply_command(player, "jump")
    assert apply_command(player, "q")
    assert exits == [1]


def test_describe_snapshot_resting_line() -> None:
    player, _, _ = _player()
    apply_command(player, "d")

    line = describe_snapshot(player.snapshot())

    assert line.startswith("[1/6] Push-ups - set 2/")
    assert "Resting 0:45" in line
    assert "| 1/" in line
    assert "Next: Pike Push-ups" in line


def test_format_clock() -> None:
    assert format_clock(0) == "0:00"
    assert format_clock(75) == "1:15"
    assert format_clock(-3) == "0:00"


def test_resolve_workout_by_id_and_file(tmp_path: Path) -> None:
    assert resolve_workout("hiit-inferno").name == "HIIT Inferno"

    workout_file = tmp_path / "mine.csv"
    workout_file.write_text("id,name,sets,reps\nsquat,Squats,3,12\n", encoding="utf-8")
    assert resolve_workout(str(workout_file)).id == "mine"

    with pytest.raises(ValueError):
        resolve_workout("nope", user_dir=tmp_path / "custom")


def test_run_list_prints_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    assert run_list("Yoga") == 0

    out = capsys.readouterr().out
    assert "morning-flow" in out
    assert "push-day-blast" not in out


def test_parser_flags() -> None:
    args = build_parser().parse_args(["--run", "push-day-blast", "--log-level", "DEBUG"])

    assert args.run == "push-day-blast"
    assert args.log_level == "DEBUG"
    assert not args.ui_web


def test_import_saves_custom_workout_and_run_resolves_it(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "Lunch Circuit.csv"
    source.write_text(
        "id,name,sets,reps,hold_sec,rest_sec\nsquat,Squats,3,15,,30\nplank,Plank,2,,45,20\n",
        encoding="utf-8",
    )
    user_dir = tmp_path / "custom"

    assert run_import(str(source), user_dir=user_dir) == 0
    assert "lunch-circuit" in capsys.readouterr().out

    workout = resolve_workout("lunch-circuit", user_dir=user_dir)
    assert workout.name == "Lunch Circuit"
    assert workout.exercises[1].hold_sec == 45
