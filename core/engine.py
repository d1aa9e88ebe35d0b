"""Session engine: wires catalog, scheduler, phases, reveal timing and scoring.

Threading model: every command and every scheduler callback must be
dispatched serially by the host (one event loop). The engine does no
locking of its own.
"""

import logging
import random
import time
from typing import Callable

from .catalog import RoundCatalog
from .config import ADVANCE_DELAY_SECONDS, DEFAULT_DIFFICULTY, PICK_QUEUE_SIZE, SPELL_QUEUE_SIZE
from .grid import layout
from .interfaces import CancelToken, DifficultyProvider, ResultSink, RoundSource, Scheduler
from .models import Difficulty, Phase, Result, SessionState, SessionStats, Sport
from .phases import PhaseMachine
from .scheduler import SessionScheduler
from .scoring import ScoreTracker
from .timing import RevealController
from .utils import spelling_matches

logger = logging.getLogger(__name__)


def _sport_key(sport) -> str:
    if isinstance(sport, Sport):
        return sport.value
    return str(sport)


class SessionEngine:
    """Runs one practice session at a time for a single player."""

    def __init__(self, source: RoundSource, difficulty: DifficultyProvider, sink: ResultSink,
                 scheduler: Scheduler, rng: random.Random | None = None,
                 clock: Callable[[], float] = time.time,
                 pick_size: int = PICK_QUEUE_SIZE, spell_size: int = SPELL_QUEUE_SIZE,
                 advance_delay: float = ADVANCE_DELAY_SECONDS):
        self.source = source
        self.difficulty_provider = difficulty
        self.sink = sink
        self.timer = scheduler
        self.rng = rng or random.Random()
        self.clock = clock
        self.pick_size = pick_size
        self.spell_size = spell_size
        self.advance_delay = advance_delay

        self.state = SessionState()
        self.scheduler = SessionScheduler(self.rng)
        self.phases = PhaseMachine()
        self.tracker = ScoreTracker()
        self.reveal = RevealController(scheduler)
        self.catalog_dropped = 0

        self._generation = 0
        self._advance_token: CancelToken | None = None
        self._summary_recorded = False
        self._listeners: list[Callable[[dict], None]] = []
        self._complete_listeners: list[Callable[[SessionStats], None]] = []

    # ---------- Observers ----------

    def subscribe(self, listener: Callable[[dict], None]) -> Callable[[], None]:
        """Register a state-change listener. Returns a function that removes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def on_complete(self, listener: Callable[[SessionStats], None]) -> None:
        """Register a listener for the final stats of each session."""
        self._complete_listeners.append(listener)

    def snapshot(self) -> dict:
        return self.state.to_dict()

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"State listener failed: {type(e).__name__}: {e}")

    def _emit_complete(self, stats: SessionStats) -> None:
        for listener in list(self._complete_listeners):
            try:
                listener(stats.copy())
            except Exception as e:
                logger.error(f"Completion listener failed: {type(e).__name__}: {e}")

    # ---------- Session lifecycle ----------

    def start(self, sport) -> Result:
        """Build fresh queues for a sport and enter the first round."""
        sport = _sport_key(sport)
        self._cancel_timers()
        self._generation += 1

        difficulty = self._current_difficulty()
        catalog = RoundCatalog.from_source(self.source, sport)
        self.catalog_dropped = catalog.dropped
        rounds = catalog.rounds_for(sport)

        self.scheduler = SessionScheduler(self.rng)
        self.scheduler.build(rounds, self.pick_size, self.spell_size)
        self.tracker.reset_session()
        self.phases.reset(len(self.scheduler.pick_queue), len(self.scheduler.spell_queue))
        self.reveal = RevealController(self.timer, on_unlock=self._guarded(self._on_unlock))
        self._summary_recorded = False

        self.state = SessionState(sport=sport, phase=self.phases.phase)
        self.state.difficulty = difficulty
        self.state.pick_total = len(self.scheduler.pick_queue)
        self.state.spell_total = len(self.scheduler.spell_queue)
        self.state.stats = self.tracker.stats

        logger.info(f"Session started: sport={sport}, difficulty={difficulty.value}, "
                    f"pick={self.state.pick_total}, spell={self.state.spell_total}, "
                    f"dropped={catalog.dropped}")

        if self.phases.is_complete:
            self.state.no_content = True
            self._finish()
            return Result.accepted("No words available for this sport")

        self._enter_round()
        self._emit()
        return Result.accepted("Session started")

    def restart(self) -> Result:
        """Discard the current session and start over with the same sport."""
        if self.state.sport is None:
            return Result.rejected("No session to restart")
        return self.start(self.state.sport)

    def end_session(self) -> Result:
        """Stop immediately and record the stats gathered so far."""
        if self.state.sport is None:
            return Result.rejected("No active session")
        if self.state.phase == Phase.COMPLETE:
            return Result.accepted("Session already complete")
        logger.info(f"Session ended early at {self.state.progress_label}")
        self.phases.end()
        self._finish()
        return Result.accepted("Session ended")

    @property
    def is_active(self) -> bool:
        return self.state.sport is not None and self.state.phase != Phase.COMPLETE

    # ---------- Answers ----------

    def submit_pick_answer(self, option: str) -> Result:
        rejection = self._check_input(Phase.PICK)
        if rejection is not None:
            return rejection
        round = self.state.current_round
        self.reveal.lock()
        correct = self.tracker.submit_answer(option, round)
        if not correct:
            self.scheduler.requeue_if_wrong(round, self.phases.index)
            self.state.pick_total = len(self.scheduler.pick_queue)
        return self._answered(round, correct)

    def submit_spelling(self, text: str) -> Result:
        rejection = self._check_input(Phase.SPELL)
        if rejection is not None:
            return rejection
        round = self.state.current_round
        self.reveal.lock()
        correct = self.tracker.record(spelling_matches(text, round.correct_word))
        return self._answered(round, correct)

    def _check_input(self, phase: Phase) -> Result | None:
        if self.state.sport is None:
            return Result.rejected("No active session")
        if self.state.phase == Phase.COMPLETE:
            return Result.rejected("Session is complete")
        if self.state.phase != phase:
            return Result.rejected(f"Not in {phase.value} phase")
        if self._advance_token is not None:
            return Result.rejected("Answer already submitted")
        if self.reveal.locked:
            return Result.rejected("Input is locked")
        return None

    def _answered(self, round, correct: bool) -> Result:
        self._record_attempt(round.correct_word, correct)
        self._advance_token = self.timer.after(self.advance_delay, self._guarded(self._advance))
        self._sync()
        self._emit()
        return Result.accepted("Correct" if correct else f"The word was {round.correct_word}", correct)

    # ---------- Round flow ----------

    def _current_entry(self):
        if self.phases.phase == Phase.PICK:
            return self.scheduler.pick_queue[self.phases.index]
        if self.phases.phase == Phase.SPELL:
            return self.scheduler.spell_queue[self.phases.index]
        return None

    def _enter_round(self) -> None:
        entry = self._current_entry()
        round = entry.round
        self.state.phase = self.phases.phase
        self.state.current_round = round
        if self.phases.phase == Phase.PICK:
            self.state.grid_slots = layout(round.options, self.rng, round.correct_word)
        else:
            self.state.grid_slots = None
        self.reveal.begin_round(self.state.difficulty.seconds_visible)
        self._sync()

    def _on_unlock(self) -> None:
        self._sync()
        self._emit()

    def _advance(self) -> None:
        self._advance_token = None
        previous = self.phases.phase
        phase = self.phases.advance(len(self.scheduler.pick_queue), len(self.scheduler.spell_queue))
        if phase != previous:
            logger.info(f"Phase change: {previous.value} -> {phase.value}")
        if phase == Phase.COMPLETE:
            self._finish()
            return
        self._enter_round()
        self._emit()

    def _finish(self) -> None:
        self._cancel_timers()
        final = self.tracker.snapshot()
        self.state.phase = Phase.COMPLETE
        self.state.current_round = None
        self.state.grid_slots = None
        self.state.stats = final
        self._sync()
        if not self.state.no_content and not self._summary_recorded:
            self._summary_recorded = True
            self._record_summary(final)
        logger.info(f"Session complete: {final.to_dict()}")
        self._emit()
        self._emit_complete(final)

    def _sync(self) -> None:
        state = self.state
        state.prompt_visible = self.reveal.prompt_visible
        state.awaiting_advance = self._advance_token is not None
        state.locked = self.reveal.locked or state.awaiting_advance or state.phase == Phase.COMPLETE
        state.progress_label = self._progress_label()

    def _progress_label(self) -> str:
        if self.state.phase == Phase.PICK:
            return f"Pick {self.phases.index + 1}/{len(self.scheduler.pick_queue)}"
        if self.state.phase == Phase.SPELL:
            return f"Spell {self.phases.index + 1}/{len(self.scheduler.spell_queue)}"
        if self.state.no_content:
            return "No words yet"
        return "Complete"

    # ---------- Timers ----------

    def _guarded(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Wrap a timer callback so it does nothing once its session is gone."""
        generation = self._generation

        def run():
            if generation != self._generation:
                logger.debug("Ignoring timer from a previous session")
                return
            callback()
        return run

    def _cancel_timers(self) -> None:
        self.reveal.cancel()
        if self._advance_token is not None:
            self._advance_token.cancel()
            self._advance_token = None

    # ---------- Collaborators ----------

    def _current_difficulty(self) -> Difficulty:
        try:
            return Difficulty(self.difficulty_provider.current())
        except Exception as e:
            logger.warning(f"Difficulty unavailable, using {DEFAULT_DIFFICULTY}: {e}")
            return Difficulty(DEFAULT_DIFFICULTY)

    def _record_attempt(self, word: str, correct: bool) -> None:
        try:
            self.sink.record_attempt(self.state.sport, word, correct, self.clock())
        except Exception as e:
            logger.warning(f"Could not record attempt for '{word}': {type(e).__name__}: {e}")

    def _record_summary(self, stats: SessionStats) -> None:
        try:
            self.sink.record_session_summary(self.state.sport, stats.copy(), self.clock())
        except Exception as e:
            logger.warning(f"Could not record session summary: {type(e).__name__}: {e}")
