"""Score and streak bookkeeping for the current session."""

from .models import Round, SessionStats


class ScoreTracker:

    def __init__(self):
        self.stats = SessionStats()

    def reset_session(self) -> None:
        """Zero every counter. Called once when a session starts."""
        self.stats = SessionStats()

    def submit_answer(self, selected: str, round: Round) -> bool:
        """Score a multiple-choice answer. Comparison is exact and case-sensitive."""
        return self.record(selected == round.correct_word)

    def record(self, is_correct: bool) -> bool:
        """Apply an already-judged answer to the counters."""
        stats = self.stats
        stats.total_answered += 1
        if is_correct:
            stats.score += 1
            stats.correct_count += 1
            stats.streak += 1
            stats.best_streak = max(stats.best_streak, stats.streak)
        else:
            stats.incorrect_count += 1
            stats.streak = 0
        return is_correct

    @property
    def accuracy_percent(self) -> int:
        return self.stats.accuracy_percent

    def snapshot(self) -> SessionStats:
        return self.stats.copy()
