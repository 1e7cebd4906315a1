"""Guided workout session player.

The player walks one user through a workout definition exercise by exercise
and set by set. Rest intervals and timed holds count down on an injected
tick source; the end of a rest plays an injected cue. When the last set of
the last exercise is completed the player builds a ``SessionSummary``, hands
it to ``on_complete`` and becomes inert.

Every input is a total function over the state space: calls that make no
sense in the current state (retreating past the first exercise, anything
after completion or exit) are silently ignored.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from fittrack.core.clock import Clock, utc_now
from fittrack.core.cues import CueCallback, silent_cue
from fittrack.core.state import Phase, PlayerSnapshot, SessionState
from fittrack.core.ticker import AsyncioTicker, Ticker
from fittrack.workout.model import Exercise, SessionSummary, WorkoutDefinition


logger = logging.getLogger(__name__)

CompleteCallback = Callable[[SessionSummary], None]
ExitCallback = Callable[[], None]


class WorkoutSessionPlayer:
    def __init__(
        self,
        workout: WorkoutDefinition,
        *,
        on_complete: CompleteCallback,
        on_exit: ExitCallback | None = None,
        ticker: Ticker | None = None,
        cue: CueCallback = silent_cue,
        clock: Clock = utc_now,
    ) -> None:
        self._workout = workout
        self._on_complete = on_complete
        self._on_exit = on_exit
        self._ticker: Ticker = ticker or AsyncioTicker()
        self._cue = cue
        self._clock = clock
        self._disposed = False
        self._summary: SessionSummary | None = None
        self.state = SessionState(started_at=clock())

    @property
    def workout(self) -> WorkoutDefinition:
        return self._workout

    @property
    def current_exercise(self) -> Exercise:
        return self._workout.exercises[self.state.exercise_index]

    @property
    def phase(self) -> Phase:
        """Reported phase; ``paused`` masks the underlying exercising/resting phase."""
        if self.state.phase != "complete" and self.state.paused:
            return "paused"
        return self.state.phase

    @property
    def is_complete(self) -> bool:
        return self.state.phase == "complete"

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def summary(self) -> SessionSummary | None:
        return self._summary

    @property
    def _inert(self) -> bool:
        return self._disposed or self.state.phase == "complete"

    def complete_set(self) -> None:
        if self._inert:
            return

        state = self.state
        exercise = self.current_exercise
        state.completed_sets[exercise.id] = state.completed_sets.get(exercise.id, 0) + 1

        if state.set_number < exercise.sets:
            state.set_number += 1
            if exercise.rest_sec > 0:
                self._start_countdown("resting", exercise.rest_sec)
            else:
                self._enter_exercising()
            return

        if state.exercise_index < len(self._workout.exercises) - 1:
            self._move_to(state.exercise_index + 1)
            return

        self._finish()

    def advance_exercise(self) -> None:
        if self._inert:
            return
        if self.state.exercise_index >= len(self._workout.exercises) - 1:
            return
        self._move_to(self.state.exercise_index + 1)

    def retreat_exercise(self) -> None:
        if self._inert:
            return
        if self.state.exercise_index == 0:
            return
        self._move_to(self.state.exercise_index - 1)

    def toggle_pause(self) -> None:
        """Pause or resume; a resumed countdown waits a full interval before its next step."""
        if self._inert:
            return
        state = self.state
        state.paused = not state.paused
        if state.paused:
            self._ticker.cancel()
        elif state.phase == "resting" or state.hold_running:
            self._ticker.start(self.tick)

    def start_hold(self) -> None:
        """Start (or restart) the hold countdown of a timed exercise."""
        if self._inert:
            return
        exercise = self.current_exercise
        if exercise.hold_sec is None or self.state.phase != "exercising":
            return
        self.state.paused = False
        self._start_countdown("exercising", exercise.hold_sec)

    def tick(self) -> None:
        if self._inert or self.state.paused:
            return

        state = self.state
        if state.phase == "resting":
            state.countdown_sec = max(0, state.countdown_sec - 1)
            if state.countdown_sec == 0:
                self._enter_exercising()
                self._cue()
            return

        if state.hold_running:
            state.countdown_sec = max(0, state.countdown_sec - 1)
            if state.countdown_sec == 0:
                self._ticker.cancel()
                state.hold_running = False

    def exit(self) -> None:
        if self._disposed:
            return
        completed = self.is_complete
        self.dispose()
        if not completed and self._on_exit is not None:
            logger.info("Workout '%s' abandoned", self._workout.id)
            self._on_exit()

    def dispose(self) -> None:
        self._ticker.cancel()
        self._disposed = True

    def snapshot(self) -> PlayerSnapshot:
        state = self.state
        exercises = self._workout.exercises
        index = min(state.exercise_index, len(exercises) - 1)
        exercise = exercises[index]
        upcoming = exercises[index + 1] if index + 1 < len(exercises) else None
        total = self._workout.total_sets
        done = state.completed_set_count
        return PlayerSnapshot(
            workout_name=self._workout.name,
            exercise_index=index,
            exercise_total=len(exercises),
            exercise_name=exercise.name,
            exercise_target=exercise.target_label,
            exercise_is_timed=exercise.is_timed,
            set_number=state.set_number,
            set_total=exercise.sets,
            phase=self.phase,
            countdown_sec=state.countdown_sec,
            hold_running=state.hold_running,
            completed_set_count=done,
            total_set_count=total,
            progress_pct=min(100.0, (done / total) * 100.0),
            next_exercise_name=upcoming.name if upcoming else None,
            next_exercise_target=upcoming.target_label if upcoming else None,
        )

    def _start_countdown(self, phase: Phase, seconds: int) -> None:
        self._ticker.cancel()
        self.state.phase = phase
        self.state.countdown_sec = seconds
        self.state.hold_running = phase == "exercising"
        if not self.state.paused:
            self._ticker.start(self.tick)

    def _enter_exercising(self) -> None:
        self._ticker.cancel()
        self.state.phase = "exercising"
        self.state.countdown_sec = 0
        self.state.hold_running = False

    def _move_to(self, index: int) -> None:
        self.state.exercise_index = index
        self.state.set_number = 1
        self._enter_exercising()

    def _finish(self) -> None:
        self._ticker.cancel()
        state = self.state
        finished_at = self._clock()
        elapsed_sec = (finished_at - state.started_at).total_seconds()
        summary = SessionSummary(
            workout_id=self._workout.id,
            workout_name=self._workout.name,
            duration_min=_round_half_up(elapsed_sec / 60.0),
            completed_exercises=len(self._workout.exercises),
            completed_sets=state.completed_set_count,
            estimated_calories=self._workout.calories,
            completed_at_utc=finished_at.isoformat(),
        )
        state.phase = "complete"
        state.paused = False
        state.countdown_sec = 0
        state.hold_running = False
        self._summary = summary
        logger.info(
            "Workout '%s' complete: %d sets in %d min",
            summary.workout_id,
            summary.completed_sets,
            summary.duration_min,
        )
        self._on_complete(summary)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
