"""Profile, goal and workout session records stored in Supabase tables."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Literal, Mapping

from supabase import Client

from fittrack.services.errors import PersistenceError
from fittrack.workout.model import SessionSummary


logger = logging.getLogger(__name__)

GoalType = Literal["weight", "strength", "endurance", "habit", "custom"]
GoalStatus = Literal["active", "paused", "completed"]

PROFILES_TABLE = "user_profiles"
GOALS_TABLE = "fitness_goals"
SESSIONS_TABLE = "workout_sessions"

ACTIVITY_LEVELS: tuple[str, ...] = (
    "sedentary",
    "lightly-active",
    "moderately-active",
    "very-active",
    "extremely-active",
)
GOAL_TYPES: tuple[str, ...] = ("weight", "strength", "endurance", "habit", "custom")
GOAL_TIMELINES: tuple[str, ...] = ("1-month", "3-months", "6-months", "1-year", "ongoing")


@dataclass(frozen=True)
class UserProfile:
    id: str
    first_name: str
    last_name: str
    weight_unit: str = "lbs"
    height_unit: str = "ft"
    workout_frequency: int = 3
    date_of_birth: str | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    height_feet: int | None = None
    height_inches: int | None = None
    activity_level: str | None = None
    primary_goal: str | None = None
    target_weight: float | None = None
    timeline: str | None = None
    session_duration: str | None = None
    equipment: tuple[str, ...] = ()
    favorite_activities: tuple[str, ...] = ()
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class FitnessGoal:
    user_id: str
    type: GoalType
    title: str
    description: str = ""
    current_value: str = ""
    target_value: str = ""
    unit: str = ""
    timeline: str = "3-months"
    status: GoalStatus = "active"
    progress: int = 0
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.progress <= 100:
            raise ValueError("Goal progress must be between 0 and 100")


@dataclass(frozen=True)
class WorkoutSessionRecord:
    user_id: str
    workout_name: str
    duration: int
    completed_exercises: int
    completed_sets: int
    estimated_calories: int
    completed_at: str
    workout_id: str | None = None
    id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_summary(cls, user_id: str, summary: SessionSummary) -> "WorkoutSessionRecord":
        return cls(
            user_id=user_id,
            workout_id=summary.workout_id,
            workout_name=summary.workout_name,
            duration=summary.duration_min,
            completed_exercises=summary.completed_exercises,
            completed_sets=summary.completed_sets,
            estimated_calories=summary.estimated_calories,
            completed_at=summary.completed_at_utc,
        )

    def to_summary(self) -> SessionSummary:
        return SessionSummary(
            workout_id=self.workout_id or "",
            workout_name=self.workout_name,
            duration_min=self.duration,
            completed_exercises=self.completed_exercises,
            completed_sets=self.completed_sets,
            estimated_calories=self.estimated_calories,
            completed_at_utc=self.completed_at,
        )


_SERVER_FIELDS = ("id", "created_at", "updated_at")


def _from_row(cls: type, row: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    values = {key: value for key, value in row.items() if key in known}
    for key in ("equipment", "favorite_activities"):
        if key in values and values[key] is not None:
            values[key] = tuple(values[key])
    return cls(**values)


def _to_row(record: Any, *, keep_id: bool = False) -> dict[str, Any]:
    row = asdict(record)
    for key in _SERVER_FIELDS:
        if key == "id" and keep_id:
            continue
        row.pop(key, None)
    for key, value in row.items():
        if isinstance(value, tuple):
            row[key] = list(value)
    return row


def _first(data: Any, what: str) -> Mapping[str, Any]:
    if not data:
        raise PersistenceError(f"{what}: no row returned")
    return data[0]


class ProfileService:
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_profile(self, user_id: str) -> UserProfile | None:
        try:
            result = (
                self._client.table(PROFILES_TABLE)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            logger.error("Error getting profile for %s: %s", user_id, exc)
            raise PersistenceError(f"Could not load profile: {exc}") from exc

        if not result.data:
            logger.info("No profile found for user %s", user_id)
            return None
        return _from_row(UserProfile, result.data[0])

    def create_profile(self, profile: UserProfile) -> UserProfile:
        try:
            result = (
                self._client.table(PROFILES_TABLE)
                .insert(_to_row(profile, keep_id=True))
                .execute()
            )
        except Exception as exc:
            logger.error("Error creating profile for %s: %s", profile.id, exc)
            raise PersistenceError(f"Could not create profile: {exc}") from exc
        logger.info("Profile created for user %s", profile.id)
        return _from_row(UserProfile, _first(result.data, "create_profile"))

    def update_profile(self, user_id: str, updates: Mapping[str, Any]) -> UserProfile:
        try:
            result = (
                self._client.table(PROFILES_TABLE)
                .update(dict(updates))
                .eq("id", user_id)
                .execute()
            )
        except Exception as exc:
            logger.error("Error updating profile for %s: %s", user_id, exc)
            raise PersistenceError(f"Could not update profile: {exc}") from exc
        return _from_row(UserProfile, _first(result.data, "update_profile"))


class GoalsService:
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_goals(self, user_id: str) -> list[FitnessGoal]:
        try:
            result = (
                self._client.table(GOALS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as exc:
            logger.error("Error getting goals for %s: %s", user_id, exc)
            raise PersistenceError(f"Could not load goals: {exc}") from exc
        return [_from_row(FitnessGoal, row) for row in result.data or []]

    def create_goal(self, goal: FitnessGoal) -> FitnessGoal:
        try:
            result = self._client.table(GOALS_TABLE).insert(_to_row(goal)).execute()
        except Exception as exc:
            logger.error("Error creating goal '%s': %s", goal.title, exc)
            raise PersistenceError(f"Could not create goal: {exc}") from exc
        logger.info("Goal '%s' created for user %s", goal.title, goal.user_id)
        return _from_row(FitnessGoal, _first(result.data, "create_goal"))

    def update_goal(self, goal_id: str, updates: Mapping[str, Any]) -> FitnessGoal:
        progress = updates.get("progress")
        if progress is not None and not 0 <= int(progress) <= 100:
            raise ValueError("Goal progress must be between 0 and 100")
        try:
            result = (
                self._client.table(GOALS_TABLE)
                .update(dict(updates))
                .eq("id", goal_id)
                .execute()
            )
        except Exception as exc:
            logger.error("Error updating goal %s: %s", goal_id, exc)
            raise PersistenceError(f"Could not update goal: {exc}") from exc
        return _from_row(FitnessGoal, _first(result.data, "update_goal"))

    def delete_goal(self, goal_id: str) -> None:
        try:
            self._client.table(GOALS_TABLE).delete().eq("id", goal_id).execute()
        except Exception as exc:
            logger.error("Error deleting goal %s: %s", goal_id, exc)
            raise PersistenceError(f"Could not delete goal: {exc}") from exc
        logger.info("Goal %s deleted", goal_id)


class WorkoutSessionService:
    def __init__(self, client: Client) -> None:
        self._client = client

    def save_session(self, user_id: str, summary: SessionSummary) -> WorkoutSessionRecord:
        record = WorkoutSessionRecord.from_summary(user_id, summary)
        try:
            result = self._client.table(SESSIONS_TABLE).insert(_to_row(record)).execute()
        except Exception as exc:
            logger.error("Error saving session for %s: %s", user_id, exc)
            raise PersistenceError(f"Could not save workout session: {exc}") from exc
        logger.info("Workout session saved for user %s", user_id)
        return _from_row(WorkoutSessionRecord, _first(result.data, "save_session"))

    def get_user_sessions(self, user_id: str, limit: int = 10) -> list[WorkoutSessionRecord]:
        try:
            result = (
                self._client.table(SESSIONS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("completed_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as exc:
            logger.error("Error getting sessions for %s: %s", user_id, exc)
            raise PersistenceError(f"Could not load workout sessions: {exc}") from exc
        return [_from_row(WorkoutSessionRecord, row) for row in result.data or []]
