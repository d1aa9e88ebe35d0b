"""File-based storage implementation."""

import json
import logging
import os
import uuid
from datetime import datetime, timezone

from core.interfaces import Storage
from core.wordbank import get_seed_data

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: float) -> str:
    """Epoch seconds to an ISO 8601 UTC string."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class FileStorage(Storage):
    """File-based storage implementation.

    Rounds live in sightwords_rounds.json (the built-in word bank is used
    until something is seeded), results in sightwords_history.json.
    """

    def __init__(self, config_file: str = None, state_dir: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/sightwords/config.json')
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or os.environ.get('SIGHTWORDS_STATE_DIR', project_root)

    def _get_rounds_file(self) -> str:
        return os.path.join(self.state_dir, 'sightwords_rounds.json')

    def _get_history_file(self) -> str:
        return os.path.join(self.state_dir, 'sightwords_history.json')

    def _read_json(self, path: str, default):
        if not os.path.exists(path):
            return default
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {path}: {e}")
            return default

    def _write_json(self, path: str, data) -> None:
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    # Config

    def load_config(self) -> dict:
        return self._read_json(self.config_file, {})

    def save_config(self, config: dict) -> None:
        self._write_json(self.config_file, config)

    # Rounds

    def _load_all_rounds(self) -> list[dict]:
        rounds = self._read_json(self._get_rounds_file(), None)
        if rounds is None:
            return get_seed_data()
        return rounds

    def load(self, sport: str) -> list[dict]:
        return [r for r in self._load_all_rounds() if r.get('sport') == sport]

    def seed_rounds(self, rounds: list[dict]) -> None:
        existing = self._read_json(self._get_rounds_file(), [])
        by_id = {r['id']: r for r in existing}
        for r in rounds:
            by_id[r['id']] = r
        self._write_json(self._get_rounds_file(), list(by_id.values()))

    def count_rounds(self, sport: str) -> int:
        return len(self.load(sport))

    # Results

    def _load_history(self) -> dict:
        history = self._read_json(self._get_history_file(), {})
        history.setdefault('attempts', [])
        history.setdefault('sessions', [])
        return history

    def record_attempt(self, sport: str, word: str, was_correct: bool, timestamp: float) -> None:
        try:
            history = self._load_history()
            history['attempts'].insert(0, {
                'id': str(uuid.uuid4()),
                'sport': sport,
                'word': word,
                'was_correct': bool(was_correct),
                'timestamp': format_timestamp(timestamp)
            })
            self._write_json(self._get_history_file(), history)
        except OSError as e:
            logger.error(f"Error recording attempt: {e}")

    def record_session_summary(self, sport: str, stats, timestamp: float) -> None:
        try:
            history = self._load_history()
            record = {'id': str(uuid.uuid4()), 'sport': sport, 'timestamp': format_timestamp(timestamp)}
            record.update(stats.to_dict())
            history['sessions'].insert(0, record)
            self._write_json(self._get_history_file(), history)
        except OSError as e:
            logger.error(f"Error recording session summary: {e}")

    def list_session_summaries(self, sport: str | None = None, limit: int = 50) -> list[dict]:
        sessions = self._load_history()['sessions']
        if sport:
            sessions = [s for s in sessions if s['sport'] == sport]
        return sessions[:limit]

    def list_attempts(self, sport: str | None = None) -> list[dict]:
        attempts = self._load_history()['attempts']
        if sport:
            attempts = [a for a in attempts if a['sport'] == sport]
        return attempts

    def clear_history(self) -> None:
        self._write_json(self._get_history_file(), {'attempts': [], 'sessions': []})
