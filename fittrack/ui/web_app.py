"""NiceGUI web UI for FitTrack."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nicegui import ui

from fittrack.config import get_settings
from fittrack.core.ticker import AsyncioTicker
from fittrack.services.auth import AuthService
from fittrack.services.database import (
    ACTIVITY_LEVELS,
    GOAL_TIMELINES,
    GOAL_TYPES,
    GoalsService,
    ProfileService,
    WorkoutSessionService,
)
from fittrack.services.errors import FitTrackServiceError
from fittrack.services.supabase_client import get_supabase_client
from fittrack.ui.controller import AppController
from fittrack.workout.library import difficulty_label, list_categories, list_workouts
from fittrack.workout.model import SessionSummary, WorkoutDefinition
from fittrack.workout.user_workouts import list_user_workouts, load_user_workout


logger = logging.getLogger(__name__)

REFRESH_SEC = 0.25

BEEP_JS = """
(() => {
  const ctx = new (window.AudioContext || window.webkitAudioContext)();
  const osc = ctx.createOscillator();
  const gain = ctx.createGain();
  osc.type = 'sine';
  osc.frequency.value = 800;
  osc.connect(gain);
  gain.connect(ctx.destination);
  gain.gain.setValueAtTime(0.3, ctx.currentTime);
  gain.gain.exponentialRampToValueAtTime(0.01, ctx.currentTime + 0.5);
  osc.start(ctx.currentTime);
  osc.stop(ctx.currentTime + 0.5);
  setTimeout(() => ctx.close(), 700);
})();
"""


@dataclass
class WebState:
    screen: str = "catalog"  # auth | profile | goals | catalog | overview | active | complete
    selected: WorkoutDefinition | None = None
    summary: SessionSummary | None = None
    pending_cue: bool = False
    sound: bool = True


def _fmt_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


def _build_controller() -> AppController:
    settings = get_settings()
    if not settings.supabase_configured:
        logger.info("Supabase not configured; running in guest mode with local history")
        return AppController()
    client = get_supabase_client(settings)
    return AppController(
        auth=AuthService(client),
        sessions=WorkoutSessionService(client),
        profiles=ProfileService(client),
        goals=GoalsService(client),
    )


def _needs_onboarding(controller: AppController) -> bool:
    if not controller.signed_in:
        return False
    try:
        return controller.load_profile() is None
    except FitTrackServiceError as exc:
        logger.warning("Profile lookup failed: %s", exc)
        return False


def run_web_ui(*, host: str = "127.0.0.1", port: int = 8088) -> int:
    controller = _build_controller()
    state = WebState()
    sign_in_required = get_settings().supabase_configured
    controller.watch_auth()
    if controller.restore_session() is None and sign_in_required:
        state.screen = "auth"
    elif _needs_onboarding(controller):
        state.screen = "profile"

    ui.add_head_html(
        """
        <style>
          body { background: #111827; color: #e5e7eb; font-family: Arial, "Segoe UI", sans-serif; }
          .ft-card { background: #1f2937; border-radius: 14px; border: 1px solid rgba(148,163,184,.2); }
          .ft-big { font-size: 3rem; font-weight: 700; }
          .ft-muted { color: #9ca3af; }
        </style>
        """
    )

    # --- Auth ---
    with ui.column().classes("w-full max-w-md mx-auto gap-3") as auth_view:
        ui.label("FitTrack").classes("text-2xl font-bold")
        email_input = ui.input("Email").classes("w-full")
        password_input = ui.input("Password", password=True).classes("w-full")
        with ui.row().classes("gap-2"):
            sign_in_btn = ui.button("Sign in")
            sign_up_btn = ui.button("Create account").props("outline")
        auth_error = ui.label("").classes("text-red-400")

    # --- Profile / onboarding ---
    with ui.column().classes("w-full max-w-md mx-auto gap-3") as profile_view:
        profile_title = ui.label("Tell us about yourself").classes("text-2xl font-bold")
        first_name_input = ui.input("First name").classes("w-full")
        last_name_input = ui.input("Last name").classes("w-full")
        with ui.row().classes("w-full gap-2"):
            weight_input = ui.number("Weight", min=0).classes("flex-1")
            weight_unit_select = ui.select(["lbs", "kg"], value="lbs", label="Unit")
        activity_select = ui.select(
            list(ACTIVITY_LEVELS), value="moderately-active", label="Activity level"
        ).classes("w-full")
        frequency_input = ui.number(
            "Workouts per week", value=3, min=1, max=7, step=1
        ).classes("w-full")
        primary_goal_input = ui.input("Primary goal").classes("w-full")
        profile_error = ui.label("").classes("text-red-400")
        with ui.row().classes("gap-2"):
            save_profile_btn = ui.button("Save profile")
            profile_back_btn = ui.button("Back to workouts").props("flat")

    # --- Goals ---
    with ui.column().classes("w-full max-w-3xl mx-auto gap-3") as goals_view:
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Goals").classes("text-2xl font-bold")
            goals_back_btn = ui.button("Back to workouts").props("flat")
        goals_list = ui.column().classes("w-full gap-2")
        ui.label("New goal").classes("text-lg font-semibold")
        with ui.row().classes("w-full gap-2 items-end"):
            goal_type_select = ui.select(list(GOAL_TYPES), value="strength", label="Type")
            goal_title_input = ui.input("Title")
            goal_current_input = ui.input("Current")
            goal_target_input = ui.input("Target")
            goal_unit_input = ui.input("Unit")
            goal_timeline_select = ui.select(
                list(GOAL_TIMELINES), value="3-months", label="Timeline"
            )
            add_goal_btn = ui.button("Add goal")

    # --- Catalog ---
    with ui.column().classes("w-full gap-4") as catalog_view:
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Workouts").classes("text-2xl font-bold")
            with ui.row().classes("items-center gap-2"):
                user_label = ui.label("Guest").classes("ft-muted")
                profile_btn = ui.button("Profile").props("flat")
                goals_btn = ui.button("Goals").props("flat")
                sign_out_btn = ui.button("Sign out").props("flat")
        category_select = ui.select(
            ["All"] + [name for name, _count in list_categories()] + ["Custom"],
            value="All",
            label="Category",
        )
        catalog_grid = ui.grid().classes("w-full grid-cols-1 md:grid-cols-3 gap-3")
        ui.label("Recent sessions").classes("text-lg font-semibold")
        history_table = ui.table(
            columns=[
                {"name": "completed", "label": "Completed", "field": "completed"},
                {"name": "workout", "label": "Workout", "field": "workout"},
                {"name": "mins", "label": "Mins", "field": "mins"},
                {"name": "sets", "label": "Sets", "field": "sets"},
                {"name": "kcal", "label": "kcal", "field": "kcal"},
            ],
            rows=[],
        ).classes("w-full")

    # --- Overview ---
    with ui.column().classes("w-full max-w-3xl mx-auto gap-3") as overview_view:
        back_btn = ui.button("Back to workouts").props("flat")
        overview_title = ui.label("").classes("text-2xl font-bold")
        overview_info = ui.label("").classes("ft-muted")
        overview_list = ui.column().classes("w-full gap-1")
        start_btn = ui.button("Start workout").props("color=positive")

    # --- Active ---
    with ui.column().classes("w-full max-w-3xl mx-auto gap-3") as active_view:
        with ui.row().classes("w-full items-center justify-between"):
            exit_btn = ui.button("Exit").props("flat color=negative")
            active_header = ui.label("").classes("text-lg font-semibold")
            sound_switch = ui.switch("Sound", value=True)
        progress_bar = ui.linear_progress(value=0, show_value=False)
        progress_label = ui.label("").classes("text-xs ft-muted")
        with ui.card().classes("w-full ft-card items-center"):
            phase_label = ui.label("").classes("text-sm ft-muted")
            exercise_label = ui.label("").classes("text-3xl font-bold")
            set_label = ui.label("").classes("text-xl text-blue-400")
            target_label = ui.label("").classes("ft-big")
            countdown_label = ui.label("").classes("ft-big")
            hold_btn = ui.button("Start hold")
        instructions_label = ui.label("").classes("text-sm")
        tips_label = ui.label("").classes("text-sm text-blue-300")
        next_label = ui.label("").classes("text-sm ft-muted")
        with ui.row().classes("w-full justify-center gap-3"):
            prev_btn = ui.button("Previous")
            pause_btn = ui.button("Pause")
            next_btn = ui.button("Next")
        done_btn = ui.button("Set complete").classes("w-full").props("color=positive")

    # --- Complete ---
    with ui.column().classes("w-full max-w-md mx-auto gap-3 items-center") as complete_view:
        ui.label("Workout complete!").classes("text-3xl font-bold")
        complete_info = ui.label("").classes("text-lg")
        sync_warning = ui.label("").classes("text-amber-400")
        dashboard_btn = ui.button("Back to workouts")

    views = {
        "auth": auth_view,
        "profile": profile_view,
        "goals": goals_view,
        "catalog": catalog_view,
        "overview": overview_view,
        "active": active_view,
        "complete": complete_view,
    }

    def show(screen: str) -> None:
        state.screen = screen
        for name, view in views.items():
            view.set_visibility(name == screen)
        if screen == "catalog":
            refresh_catalog()
            refresh_history()
        elif screen == "profile":
            refresh_profile()
        elif screen == "goals":
            refresh_goals()
        refresh_ui()

    def catalog_entries() -> list[WorkoutDefinition]:
        category = category_select.value
        if category == "Custom":
            out: list[WorkoutDefinition] = []
            for item in list_user_workouts():
                try:
                    out.append(load_user_workout(item.path))
                except ValueError as exc:
                    logger.warning("Skipping custom workout %s: %s", item.path, exc)
            return out
        return list(list_workouts(None if category == "All" else category))

    def refresh_catalog() -> None:
        catalog_grid.clear()
        with catalog_grid:
            for workout in catalog_entries():
                with ui.card().classes("ft-card cursor-pointer") as card:
                    ui.label(workout.name).classes("text-lg font-semibold")
                    ui.label(workout.description).classes("text-sm ft-muted")
                    ui.label(
                        f"{workout.duration_min} min | {difficulty_label(workout.difficulty)}"
                        f" | {len(workout.exercises)} exercises"
                    ).classes("text-xs")

                def on_pick(picked: WorkoutDefinition = workout) -> None:
                    state.selected = picked
                    show("overview")

                card.on("click", lambda _e, handler=on_pick: handler())

    def refresh_history() -> None:
        history_table.rows = [
            {
                "completed": summary.completed_at_utc[:16].replace("T", " "),
                "workout": summary.workout_name,
                "mins": summary.duration_min,
                "sets": summary.completed_sets,
                "kcal": summary.estimated_calories,
            }
            for summary in controller.recent_sessions(limit=10)
        ]
        history_table.update()

    def refresh_profile() -> None:
        profile_error.text = ""
        try:
            profile = controller.load_profile()
        except FitTrackServiceError as exc:
            profile_error.text = str(exc)
            return
        if profile is None:
            profile_title.text = "Tell us about yourself"
            return
        profile_title.text = "Your profile"
        first_name_input.value = profile.first_name
        last_name_input.value = profile.last_name
        weight_input.value = profile.weight
        weight_unit_select.value = profile.weight_unit
        if profile.activity_level in ACTIVITY_LEVELS:
            activity_select.value = profile.activity_level
        frequency_input.value = profile.workout_frequency
        primary_goal_input.value = profile.primary_goal or ""

    def on_save_profile() -> None:
        first_name = str(first_name_input.value or "").strip()
        last_name = str(last_name_input.value or "").strip()
        if not first_name or not last_name:
            profile_error.text = "First and last name are required"
            return
        weight = weight_input.value
        try:
            controller.save_profile(
                first_name,
                last_name,
                weight=float(weight) if weight is not None else None,
                weight_unit=str(weight_unit_select.value),
                activity_level=activity_select.value,
                workout_frequency=int(frequency_input.value or 3),
                primary_goal=str(primary_goal_input.value or "").strip() or None,
            )
        except FitTrackServiceError as exc:
            profile_error.text = str(exc)
            return
        ui.notify("Profile saved", color="positive")
        show("catalog")

    def refresh_goals() -> None:
        goals_list.clear()
        try:
            goals = controller.list_goals()
        except FitTrackServiceError as exc:
            ui.notify(str(exc), color="negative")
            return
        with goals_list:
            if not goals:
                ui.label("No goals yet").classes("ft-muted")
            for goal in goals:
                with ui.card().classes("w-full ft-card"):
                    with ui.row().classes("w-full items-center justify-between"):
                        ui.label(goal.title).classes("text-lg font-semibold")
                        ui.label(f"{goal.type} | {goal.timeline} | {goal.status}").classes(
                            "text-xs ft-muted"
                        )
                    if goal.target_value:
                        ui.label(
                            f"{goal.current_value or '-'} -> {goal.target_value} {goal.unit}"
                        ).classes("text-sm")
                    ui.linear_progress(value=goal.progress / 100.0, show_value=False)
                    with ui.row().classes("items-center gap-2"):
                        progress_input = ui.number(
                            "Progress %", value=goal.progress, min=0, max=100, step=5
                        )
                        ui.button(
                            "Update",
                            on_click=lambda _e, gid=goal.id, field=progress_input: goal_action(
                                gid, {"progress": int(field.value or 0)}
                            ),
                        ).props("flat")
                        ui.button(
                            "Complete",
                            on_click=lambda _e, gid=goal.id: goal_action(
                                gid, {"status": "completed", "progress": 100}
                            ),
                        ).props("flat color=positive")
                        ui.button(
                            "Delete",
                            on_click=lambda _e, gid=goal.id: goal_action(gid, None),
                        ).props("flat color=negative")

    def goal_action(goal_id: str | None, updates: dict[str, object] | None) -> None:
        if goal_id is None:
            return
        try:
            if updates is None:
                controller.remove_goal(goal_id)
            else:
                controller.update_goal(goal_id, updates)
        except (FitTrackServiceError, ValueError) as exc:
            ui.notify(str(exc), color="negative")
            return
        refresh_goals()

    def on_add_goal() -> None:
        title = str(goal_title_input.value or "").strip()
        if not title:
            ui.notify("Goal title is required", color="negative")
            return
        try:
            controller.add_goal(
                goal_type_select.value,
                title,
                current_value=str(goal_current_input.value or ""),
                target_value=str(goal_target_input.value or ""),
                unit=str(goal_unit_input.value or ""),
                timeline=str(goal_timeline_select.value),
            )
        except FitTrackServiceError as exc:
            ui.notify(str(exc), color="negative")
            return
        for field in (goal_title_input, goal_current_input, goal_target_input, goal_unit_input):
            field.value = ""
        refresh_goals()

    def refresh_overview() -> None:
        workout = state.selected
        if workout is None:
            return
        overview_title.text = workout.name
        overview_info.text = (
            f"{workout.description} | ~{workout.duration_min} min | ~{workout.calories} kcal"
            f" | {', '.join(workout.equipment) or 'No equipment'}"
        )
        overview_list.clear()
        with overview_list:
            for index, exercise in enumerate(workout.exercises, start=1):
                rest = f", rest {exercise.rest_sec}s" if exercise.rest_sec else ""
                ui.label(
                    f"{index}. {exercise.name}: {exercise.sets} x {exercise.target_label}{rest}"
                )

    def refresh_active() -> None:
        player = controller.player
        if player is None:
            return
        snap = player.snapshot()
        exercise = player.current_exercise
        active_header.text = (
            f"{snap.workout_name} - exercise {snap.exercise_index + 1} of {snap.exercise_total}"
        )
        progress_bar.value = snap.progress_pct / 100.0
        progress_label.text = (
            f"{snap.completed_set_count} of {snap.total_set_count} sets"
            f" | {snap.progress_pct:.0f}% complete"
        )
        resting = player.state.phase == "resting"
        phase_label.text = {"resting": "Rest time", "paused": "Paused"}.get(snap.phase, "Go!")
        exercise_label.text = ("Next up: " if resting else "") + snap.exercise_name
        set_label.text = f"Set {snap.set_number} of {snap.set_total}"
        target_label.text = snap.exercise_target
        target_label.set_visibility(not resting)
        show_countdown = resting or snap.exercise_is_timed
        countdown_label.set_visibility(show_countdown)
        if resting or snap.hold_running:
            countdown_label.text = _fmt_clock(snap.countdown_sec)
        elif exercise.hold_sec is not None:
            countdown_label.text = _fmt_clock(exercise.hold_sec)
        hold_btn.set_visibility(snap.exercise_is_timed and not resting)
        instructions_label.text = exercise.instructions
        tips_label.text = f"Tip: {exercise.tips}" if exercise.tips else ""
        next_label.text = (
            f"Coming up next: {snap.next_exercise_name} ({snap.next_exercise_target})"
            if snap.next_exercise_name
            else ""
        )
        pause_btn.text = "Resume" if snap.phase == "paused" else "Pause"
        prev_btn.set_enabled(snap.exercise_index > 0)
        next_btn.set_enabled(snap.exercise_index < snap.exercise_total - 1)
        done_btn.text = "Complete exercise" if snap.set_number == snap.set_total else "Set complete"

    def refresh_ui() -> None:
        user = controller.user
        user_label.text = getattr(user, "email", None) or "Guest"
        sign_out_btn.set_visibility(controller.signed_in)
        profile_btn.set_visibility(controller.signed_in)
        goals_btn.set_visibility(controller.signed_in)
        if sign_in_required and not controller.signed_in and state.screen != "auth":
            show("auth")
            return
        if state.screen == "overview":
            refresh_overview()
        elif state.screen == "active":
            refresh_active()
            if state.pending_cue:
                state.pending_cue = False
                if state.sound:
                    ui.run_javascript(BEEP_JS)
        elif state.screen == "complete" and state.summary is not None:
            summary = state.summary
            complete_info.text = (
                f"{summary.workout_name}: {summary.duration_min} min, "
                f"{summary.completed_exercises} exercises, {summary.completed_sets} sets, "
                f"~{summary.estimated_calories} kcal"
            )
            sync_warning.text = (
                f"Not synced: {controller.last_error}" if controller.last_error else ""
            )

    def authenticate(sign_up: bool) -> None:
        email = str(email_input.value or "").strip()
        password = str(password_input.value or "")
        if not email or not password:
            auth_error.text = "Email and password are required"
            return
        try:
            if sign_up:
                controller.sign_up(email, password)
            else:
                controller.sign_in(email, password)
        except FitTrackServiceError as exc:
            auth_error.text = str(exc)
            return
        auth_error.text = ""
        password_input.value = ""
        show("profile" if _needs_onboarding(controller) else "catalog")

    def on_sign_out() -> None:
        try:
            controller.sign_out()
        except FitTrackServiceError as exc:
            ui.notify(str(exc), color="negative")
            return
        show("auth")

    def cue() -> None:
        state.pending_cue = True

    def on_complete(summary: SessionSummary) -> None:
        state.summary = summary
        show("complete")

    def on_exit() -> None:
        show("catalog")

    def on_start() -> None:
        if state.selected is None:
            return
        try:
            controller.start_workout(
                state.selected,
                ticker=AsyncioTicker(),
                cue=cue,
                on_complete=on_complete,
                on_exit=on_exit,
            )
        except RuntimeError as exc:
            ui.notify(str(exc), color="negative")
            return
        show("active")

    def player_action(name: str) -> None:
        player = controller.player
        if player is None:
            return
        getattr(player, name)()
        if state.screen == "active":
            refresh_active()

    def on_sound_toggle() -> None:
        state.sound = bool(sound_switch.value)

    sign_in_btn.on_click(lambda: authenticate(sign_up=False))
    sign_up_btn.on_click(lambda: authenticate(sign_up=True))
    sign_out_btn.on_click(on_sign_out)
    category_select.on_value_change(lambda _: refresh_catalog())
    back_btn.on_click(lambda: show("catalog"))
    start_btn.on_click(on_start)
    exit_btn.on_click(controller.exit_workout)
    hold_btn.on_click(lambda: player_action("start_hold"))
    prev_btn.on_click(lambda: player_action("retreat_exercise"))
    pause_btn.on_click(lambda: player_action("toggle_pause"))
    next_btn.on_click(lambda: player_action("advance_exercise"))
    done_btn.on_click(lambda: player_action("complete_set"))
    dashboard_btn.on_click(lambda: show("catalog"))
    profile_btn.on_click(lambda: show("profile"))
    goals_btn.on_click(lambda: show("goals"))
    save_profile_btn.on_click(on_save_profile)
    profile_back_btn.on_click(lambda: show("catalog"))
    goals_back_btn.on_click(lambda: show("catalog"))
    add_goal_btn.on_click(on_add_goal)
    sound_switch.on_value_change(lambda _: on_sound_toggle())

    show(state.screen)
    ui.timer(REFRESH_SEC, refresh_ui)
    ui.run(host=host, port=port, reload=False, title="FitTrack")
    return 0
