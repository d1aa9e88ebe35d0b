"""Progress dashboard built from recorded attempts and session summaries."""

from collections import Counter

from .config import MISSED_WORDS_LIMIT
from .models import Sport


def top_missed_words(attempts: list[dict], sport: str, limit: int = MISSED_WORDS_LIMIT) -> list[dict]:
    """Most frequently missed words for a sport, most misses first."""
    misses = Counter(
        a['word'] for a in attempts
        if a.get('sport') == sport and not a.get('was_correct')
    )
    ordered = sorted(misses.items(), key=lambda item: (-item[1], item[0]))
    return [{'word': word, 'count': count} for word, count in ordered[:limit]]


def sport_progress(attempts: list[dict], sport: str, missed_limit: int = MISSED_WORDS_LIMIT) -> dict:
    """Totals for one sport. Accuracy here is truncated, not rounded."""
    sport_attempts = [a for a in attempts if a.get('sport') == sport]
    total = len(sport_attempts)
    correct = sum(1 for a in sport_attempts if a.get('was_correct'))
    parsed = Sport.parse(sport)
    return {
        'sport': sport,
        'display_name': parsed.display_name if parsed else sport,
        'total': total,
        'correct': correct,
        'accuracy_percent': 0 if total == 0 else (100 * correct) // total,
        'top_missed': top_missed_words(attempts, sport, missed_limit)
    }


def build_dashboard(attempts: list[dict], summaries: list[dict]) -> dict:
    return {
        'sessions_completed': len(summaries),
        'sports': [sport_progress(attempts, sport.value) for sport in Sport]
    }
