"""Terminal CLI entrypoint for FitTrack."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Callable

from fittrack.config import get_settings
from fittrack.core.cues import terminal_bell
from fittrack.core.player import WorkoutSessionPlayer
from fittrack.core.state import PlayerSnapshot
from fittrack.core.ticker import AsyncioTicker
from fittrack.ui.controller import AppController
from fittrack.workout.library import difficulty_label, get_workout, list_workouts
from fittrack.workout.model import SessionSummary, WorkoutDefinition
from fittrack.workout.parser import load_workout
from fittrack.workout.session_store import load_recent_summaries
from fittrack.workout.user_workouts import (
    list_user_workouts,
    load_user_workout,
    save_user_workout,
)


COMMAND_HELP = (
    "Commands: d=set done, n=next exercise, p=previous exercise, "
    "pause=pause or resume, h=start hold, s or blank=status, q=quit"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FitTrack workout player")
    parser.add_argument("--list", action="store_true", help="List built-in workouts")
    parser.add_argument("--category", default=None, help="Filter --list by category")
    parser.add_argument("--show", metavar="ID", default=None, help="Show a workout plan")
    parser.add_argument(
        "--run",
        metavar="ID_OR_FILE",
        default=None,
        help="Run a built-in workout (by id) or a .json/.csv workout file in the terminal",
    )
    parser.add_argument(
        "--import",
        dest="import_file",
        metavar="FILE",
        default=None,
        help="Save a .json/.csv workout file as a custom workout",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Show recently completed sessions from local history",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument("--web-host", default=None, help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=None, help="Port for --ui-web")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def resolve_workout(target: str, user_dir: Path | None = None) -> WorkoutDefinition:
    """Resolve a workout file, a built-in id or the key of a saved custom workout."""
    path = Path(target)
    if path.suffix.lower() in {".json", ".csv"}:
        return load_workout(path)
    try:
        return get_workout(target)
    except ValueError:
        for item in list_user_workouts(base_dir=user_dir):
            if item.key == target:
                return load_user_workout(item.path)
        raise


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


def describe_snapshot(snapshot: PlayerSnapshot) -> str:
    head = (
        f"[{snapshot.exercise_index + 1}/{snapshot.exercise_total}] "
        f"{snapshot.exercise_name} - set {snapshot.set_number}/{snapshot.set_total} "
        f"({snapshot.exercise_target})"
    )
    if snapshot.phase == "resting":
        status = f"Resting {format_clock(snapshot.countdown_sec)}"
    elif snapshot.phase == "paused":
        status = f"Paused at {format_clock(snapshot.countdown_sec)}"
    elif snapshot.hold_running:
        status = f"Hold {format_clock(snapshot.countdown_sec)}"
    else:
        status = "Go!"
    progress = (
        f"{snapshot.completed_set_count}/{snapshot.total_set_count} sets "
        f"({snapshot.progress_pct:.0f}%)"
    )
    line = f"{head} | {status} | {progress}"
    if snapshot.next_exercise_name:
        line += f" | Next: {snapshot.next_exercise_name} ({snapshot.next_exercise_target})"
    return line


def describe_summary(summary: SessionSummary) -> str:
    return (
        f"Workout complete: {summary.workout_name} | {summary.duration_min} min | "
        f"{summary.completed_exercises} exercises | {summary.completed_sets} sets | "
        f"~{summary.estimated_calories} kcal"
    )


def apply_command(player: WorkoutSessionPlayer, command: str) -> bool:
    """Apply one terminal command; returns False for unknown commands."""
    actions: dict[str, Callable[[], None]] = {
        "d": player.complete_set,
        "n": player.advance_exercise,
        "p": player.retreat_exercise,
        "pause": player.toggle_pause,
        "h": player.start_hold,
        "s": lambda: None,
        "": lambda: None,
        "q": player.exit,
    }
    action = actions.get(command.strip().lower())
    if action is None:
        return False
    action()
    return True


def run_list(category: str | None) -> int:
    if category == "Custom":
        custom = list_user_workouts()
        if not custom:
            print("No workouts found")
        for item in custom:
            print(f"{item.key:<20} {item.name:<20} {item.category}")
        return 0
    workouts = list_workouts(category)
    if not workouts:
        print("No workouts found")
        return 0
    for workout in workouts:
        print(
            f"{workout.id:<20} {workout.name:<20} {workout.category:<9} "
            f"{workout.duration_min:>3} min  {difficulty_label(workout.difficulty)}"
        )
    return 0


def run_import(source: str, user_dir: Path | None = None) -> int:
    workout = load_workout(source)
    saved = save_user_workout(
        name=workout.name,
        exercises=workout.exercises,
        category=workout.category,
        description=workout.description,
        duration_min=workout.duration_min,
        calories=workout.calories,
        difficulty=workout.difficulty,
        equipment=workout.equipment,
        base_dir=user_dir,
    )
    print(f"Saved '{workout.name}' as {saved.stem} ({saved})")
    return 0


def run_show(target: str) -> int:
    workout = resolve_workout(target)
    print(f"{workout.name} ({workout.category}, {difficulty_label(workout.difficulty)})")
    if workout.description:
        print(workout.description)
    print(
        f"~{workout.duration_min} min | ~{workout.calories} kcal | "
        f"Equipment: {', '.join(workout.equipment) or '-'}"
    )
    for index, exercise in enumerate(workout.exercises, start=1):
        rest = f", rest {exercise.rest_sec}s" if exercise.rest_sec else ""
        print(f"{index:>2}. {exercise.name}: {exercise.sets} x {exercise.target_label}{rest}")
    return 0


def run_history(limit: int = 10) -> int:
    summaries = load_recent_summaries(limit=limit)
    if not summaries:
        print("No completed sessions yet")
        return 0
    for summary in summaries:
        print(
            f"{summary.completed_at_utc[:16]}  {summary.workout_name:<20} "
            f"{summary.duration_min:>3} min  {summary.completed_sets:>3} sets"
        )
    return 0


async def run_terminal_session(
    workout: WorkoutDefinition,
    controller: AppController | None = None,
) -> int:
    ctrl = controller or AppController()
    finished = asyncio.Event()

    def on_complete(summary: SessionSummary) -> None:
        print(describe_summary(summary))
        finished.set()

    def on_exit() -> None:
        print("Workout abandoned")
        finished.set()

    player = ctrl.start_workout(
        workout,
        ticker=AsyncioTicker(),
        cue=terminal_bell,
        on_complete=on_complete,
        on_exit=on_exit,
    )
    print(f"Starting {workout.name}. {COMMAND_HELP}")
    print(describe_snapshot(player.snapshot()))

    loop = asyncio.get_running_loop()
    try:
        while not finished.is_set():
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                ctrl.exit_workout()
                break
            if not apply_command(player, line):
                print(COMMAND_HELP)
                continue
            if not finished.is_set():
                print(describe_snapshot(player.snapshot()))
    finally:
        ctrl.exit_workout()
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.ui_web:
        from fittrack.ui.web_app import run_web_ui

        return run_web_ui(
            host=args.web_host or settings.web_host,
            port=args.web_port or settings.web_port,
        )

    try:
        if args.list:
            return run_list(args.category)
        if args.show:
            return run_show(args.show)
        if args.import_file:
            return run_import(args.import_file)
        if args.history:
            return run_history()
        if args.run:
            workout = resolve_workout(args.run)
            return asyncio.run(run_terminal_session(workout))
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
