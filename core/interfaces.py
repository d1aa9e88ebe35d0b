"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Callable


class RoundSource(ABC):
    """Abstract base class for the word bank loader."""

    @abstractmethod
    def load(self, sport: str) -> list[dict]:
        """Load round records for a sport. Returns a list of round dicts."""
        pass


class DifficultyProvider(ABC):
    """Abstract base class for the difficulty setting."""

    @abstractmethod
    def current(self):
        """Return the Difficulty to use for the next session."""
        pass


class ResultSink(ABC):
    """Abstract base class for practice result persistence."""

    @abstractmethod
    def record_attempt(self, sport: str, word: str, was_correct: bool, timestamp: float) -> None:
        """Record a single answered round."""
        pass

    @abstractmethod
    def record_session_summary(self, sport: str, stats, timestamp: float) -> None:
        """Record the final SessionStats of a session."""
        pass


class CancelToken(ABC):
    """Handle returned by Scheduler.after."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        pass


class Scheduler(ABC):
    """Abstract base class for delayed callbacks.

    Implementations must dispatch callbacks serially with respect to the
    engine's command handlers.
    """

    @abstractmethod
    def after(self, seconds: float, callback: Callable[[], None]) -> CancelToken:
        """Run callback once after the given delay. Returns a cancel token."""
        pass


class Storage(RoundSource, ResultSink):
    """Abstract base class for a complete storage backend."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict (empty if none saved)."""
        pass

    @abstractmethod
    def save_config(self, config: dict) -> None:
        """Save configuration."""
        pass

    @abstractmethod
    def seed_rounds(self, rounds: list[dict]) -> None:
        """Seed round records into storage, replacing rounds with the same id."""
        pass

    @abstractmethod
    def count_rounds(self, sport: str) -> int:
        """Number of stored rounds for a sport."""
        pass

    @abstractmethod
    def list_session_summaries(self, sport: str | None = None, limit: int = 50) -> list[dict]:
        """Get session summaries, newest first, optionally for one sport."""
        pass

    @abstractmethod
    def list_attempts(self, sport: str | None = None) -> list[dict]:
        """Get per-word attempt records, newest first, optionally for one sport."""
        pass

    @abstractmethod
    def clear_history(self) -> None:
        """Delete all attempts and session summaries."""
        pass
