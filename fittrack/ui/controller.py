"""Screen-flow controller shared by the web UI and the terminal runner."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from fittrack.core.clock import Clock, utc_now
from fittrack.core.cues import CueCallback, silent_cue
from fittrack.core.player import WorkoutSessionPlayer
from fittrack.core.ticker import Ticker
from fittrack.services.auth import SIGNED_OUT, AuthService
from fittrack.services.database import (
    FitnessGoal,
    GoalsService,
    GoalType,
    ProfileService,
    UserProfile,
    WorkoutSessionService,
)
from fittrack.services.errors import FitTrackServiceError
from fittrack.workout.model import SessionSummary, WorkoutDefinition
from fittrack.workout.session_store import append_summary, load_recent_summaries


logger = logging.getLogger(__name__)


class AppController:
    def __init__(
        self,
        auth: AuthService | None = None,
        sessions: WorkoutSessionService | None = None,
        history_path: Path | None = None,
        profiles: ProfileService | None = None,
        goals: GoalsService | None = None,
    ) -> None:
        self._auth = auth
        self._sessions = sessions
        self._profiles = profiles
        self._goals = goals
        self._history_path = history_path
        self._player: WorkoutSessionPlayer | None = None
        self.user: Any | None = None
        self.last_summary: SessionSummary | None = None
        self.last_error: str | None = None

    @property
    def signed_in(self) -> bool:
        return self.user is not None

    @property
    def player(self) -> WorkoutSessionPlayer | None:
        return self._player

    @property
    def workout_running(self) -> bool:
        return self._player is not None and not self._player.is_disposed

    # --- Identity ---

    def sign_up(self, email: str, password: str) -> Any:
        response = self._require_auth().sign_up(email, password)
        self.user = getattr(response, "user", None)
        return self.user

    def sign_in(self, email: str, password: str) -> Any:
        response = self._require_auth().sign_in(email, password)
        self.user = getattr(response, "user", None)
        return self.user

    def sign_out(self) -> None:
        self.exit_workout()
        self._require_auth().sign_out()
        self.user = None

    def restore_session(self) -> Any | None:
        if self._auth is None:
            return None
        session = self._auth.get_session()
        self.user = getattr(session, "user", None) if session is not None else None
        return self.user

    def watch_auth(self) -> Any | None:
        """Follow provider-side sign-in, sign-out and token refreshes."""
        if self._auth is None:
            return None
        return self._auth.on_auth_state_change(self.handle_auth_event)

    def handle_auth_event(self, event: str, session: Any) -> None:
        if event == SIGNED_OUT:
            self.exit_workout()
            self.user = None
            return
        user = getattr(session, "user", None) if session is not None else None
        if user is None and self._auth is not None:
            user = self._auth.get_current_user()
        if user is not None:
            self.user = user

    # --- Profile and goals ---

    def load_profile(self) -> UserProfile | None:
        if self._profiles is None or self.user is None:
            return None
        return self._profiles.get_profile(self._user_id())

    def save_profile(self, first_name: str, last_name: str, **details: Any) -> UserProfile:
        """Create the profile on first save (onboarding), update it afterwards."""
        profiles = self._require(self._profiles, "Profile storage")
        user_id = self._user_id()
        if profiles.get_profile(user_id) is None:
            return profiles.create_profile(
                UserProfile(id=user_id, first_name=first_name, last_name=last_name, **details)
            )
        updates: dict[str, Any] = {"first_name": first_name, "last_name": last_name}
        for key, value in details.items():
            updates[key] = list(value) if isinstance(value, tuple) else value
        return profiles.update_profile(user_id, updates)

    def list_goals(self) -> list[FitnessGoal]:
        if self._goals is None or self.user is None:
            return []
        return self._goals.get_goals(self._user_id())

    def add_goal(self, goal_type: GoalType, title: str, **details: Any) -> FitnessGoal:
        goals = self._require(self._goals, "Goal storage")
        goal = FitnessGoal(user_id=self._user_id(), type=goal_type, title=title, **details)
        return goals.create_goal(goal)

    def update_goal(self, goal_id: str, updates: Mapping[str, Any]) -> FitnessGoal:
        return self._require(self._goals, "Goal storage").update_goal(goal_id, updates)

    def remove_goal(self, goal_id: str) -> None:
        self._require(self._goals, "Goal storage").delete_goal(goal_id)

    # --- History ---

    def recent_sessions(self, limit: int = 10) -> list[SessionSummary]:
        """Remote history for a signed-in user, local history otherwise."""
        if self._sessions is not None and self.user is not None:
            try:
                records = self._sessions.get_user_sessions(self._user_id(), limit=limit)
            except FitTrackServiceError as exc:
                logger.warning("Remote history unavailable, showing local: %s", exc)
            else:
                return [record.to_summary() for record in records]
        return load_recent_summaries(limit=limit, path=self._history_path)

    # --- Workout ---

    def start_workout(
        self,
        workout: WorkoutDefinition,
        *,
        ticker: Ticker | None = None,
        cue: CueCallback = silent_cue,
        clock: Clock = utc_now,
        on_complete: Callable[[SessionSummary], None] | None = None,
        on_exit: Callable[[], None] | None = None,
    ) -> WorkoutSessionPlayer:
        if self.workout_running:
            raise RuntimeError("Workout already running")

        def _on_complete(summary: SessionSummary) -> None:
            self._record(summary)
            if self._player is not None:
                self._player.dispose()
            if on_complete is not None:
                on_complete(summary)

        def _on_exit() -> None:
            if on_exit is not None:
                on_exit()

        self.last_summary = None
        self.last_error = None
        self._player = WorkoutSessionPlayer(
            workout,
            on_complete=_on_complete,
            on_exit=_on_exit,
            ticker=ticker,
            cue=cue,
            clock=clock,
        )
        logger.info("Workout '%s' started", workout.id)
        return self._player

    def exit_workout(self) -> None:
        if self._player is None:
            return
        self._player.exit()
        self._player = None

    def _record(self, summary: SessionSummary) -> None:
        self.last_summary = summary
        try:
            append_summary(summary, path=self._history_path)
        except OSError as exc:
            logger.error("Could not write local history: %s", exc)
            self.last_error = f"Could not write local history: {exc}"
        if self._sessions is None or self.user is None:
            return
        try:
            self._sessions.save_session(self._user_id(), summary)
        except FitTrackServiceError as exc:
            logger.warning("Workout session not synced: %s", exc)
            self.last_error = str(exc)

    def _user_id(self) -> str:
        if self.user is None:
            raise RuntimeError("Sign in required")
        return str(self.user.id)

    def _require_auth(self) -> AuthService:
        return self._require(self._auth, "Identity provider")

    @staticmethod
    def _require(service: Any, what: str) -> Any:
        if service is None:
            raise RuntimeError(f"{what} not configured")
        return service
