"""PostgreSQL storage implementation."""

import json
import logging
import os
from datetime import datetime, timezone

import psycopg2
from psycopg2.extras import RealDictCursor

from core.interfaces import Storage

logger = logging.getLogger(__name__)


def _to_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def _serialize_row(row: dict) -> dict:
    """Make a fetched row JSON friendly."""
    row = dict(row)
    for key, value in row.items():
        if hasattr(value, 'isoformat'):
            row[key] = value.isoformat()
        elif key == 'id' and value is not None:
            row[key] = str(value)
    return row


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, config_file: str = None, db_url: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/sightwords/config.json')
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/sightwords'
        )
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS rounds (
                    id VARCHAR(64) PRIMARY KEY,
                    sport VARCHAR(32) NOT NULL,
                    prompt_word VARCHAR(255) NOT NULL,
                    options TEXT[] NOT NULL,
                    correct_word VARCHAR(255) NOT NULL
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_rounds_sport ON rounds(sport)
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS practice_results (
                    id SERIAL PRIMARY KEY,
                    sport VARCHAR(32) NOT NULL,
                    word VARCHAR(255) NOT NULL,
                    was_correct BOOLEAN NOT NULL,
                    timestamp TIMESTAMPTZ NOT NULL
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_practice_results_sport ON practice_results(sport)
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS session_summaries (
                    id SERIAL PRIMARY KEY,
                    sport VARCHAR(32) NOT NULL,
                    score INTEGER NOT NULL,
                    total_answered INTEGER NOT NULL,
                    correct_count INTEGER NOT NULL,
                    incorrect_count INTEGER NOT NULL,
                    accuracy_percent INTEGER NOT NULL,
                    best_streak INTEGER NOT NULL,
                    timestamp TIMESTAMPTZ NOT NULL
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_session_summaries_timestamp
                ON session_summaries(timestamp)
            """)
            # Events log table
            cur.execute("""
                CREATE TABLE IF NOT EXISTS events (
                    id SERIAL PRIMARY KEY,
                    timestamp TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
                    event VARCHAR(50) NOT NULL,
                    user_id VARCHAR(255) NOT NULL,
                    sport VARCHAR(32),
                    data TEXT
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_events_user_id ON events(user_id)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            return {}
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def save_config(self, config: dict) -> None:
        os.makedirs(os.path.dirname(self.config_file), exist_ok=True)
        with open(self.config_file, 'w') as f:
            json.dump(config, f, indent=2)

    # Rounds

    def load(self, sport: str) -> list[dict]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute("""
                SELECT id, sport, prompt_word, options, correct_word
                FROM rounds WHERE sport = %s ORDER BY prompt_word
            """, (sport,))
            return [dict(row) for row in cur.fetchall()]

    def seed_rounds(self, rounds: list[dict]) -> None:
        try:
            with self.conn.cursor() as cur:
                for r in rounds:
                    cur.execute("""
                        INSERT INTO rounds (id, sport, prompt_word, options, correct_word)
                        VALUES (%s, %s, %s, %s, %s)
                        ON CONFLICT (id) DO UPDATE SET
                            sport = EXCLUDED.sport,
                            prompt_word = EXCLUDED.prompt_word,
                            options = EXCLUDED.options,
                            correct_word = EXCLUDED.correct_word
                    """, (r['id'], r['sport'], r['prompt_word'], list(r['options']), r['correct_word']))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error seeding rounds: {e}")
            self.conn.rollback()
            raise

    def count_rounds(self, sport: str) -> int:
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM rounds WHERE sport = %s", (sport,))
                return cur.fetchone()[0]
        except Exception as e:
            logger.error(f"Error counting rounds: {e}")
            return 0

    # Results

    def record_attempt(self, sport: str, word: str, was_correct: bool, timestamp: float) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO practice_results (sport, word, was_correct, timestamp)
                    VALUES (%s, %s, %s, %s)
                """, (sport, word, bool(was_correct), _to_datetime(timestamp)))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error recording attempt: {e}")
            self.conn.rollback()

    def record_session_summary(self, sport: str, stats, timestamp: float) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO session_summaries
                        (sport, score, total_answered, correct_count, incorrect_count,
                         accuracy_percent, best_streak, timestamp)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """, (sport, stats.score, stats.total_answered, stats.correct_count,
                      stats.incorrect_count, stats.accuracy_percent, stats.best_streak,
                      _to_datetime(timestamp)))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error recording session summary: {e}")
            self.conn.rollback()

    def list_session_summaries(self, sport: str | None = None, limit: int = 50) -> list[dict]:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                if sport:
                    cur.execute("""
                        SELECT * FROM session_summaries WHERE sport = %s
                        ORDER BY timestamp DESC LIMIT %s
                    """, (sport, limit))
                else:
                    cur.execute("""
                        SELECT * FROM session_summaries
                        ORDER BY timestamp DESC LIMIT %s
                    """, (limit,))
                return [_serialize_row(row) for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error listing session summaries: {e}")
            return []

    def list_attempts(self, sport: str | None = None) -> list[dict]:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                if sport:
                    cur.execute("""
                        SELECT * FROM practice_results WHERE sport = %s
                        ORDER BY timestamp DESC
                    """, (sport,))
                else:
                    cur.execute("SELECT * FROM practice_results ORDER BY timestamp DESC")
                return [_serialize_row(row) for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error listing attempts: {e}")
            return []

    def clear_history(self) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("DELETE FROM practice_results")
                cur.execute("DELETE FROM session_summaries")
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error clearing history: {e}")
            self.conn.rollback()
            raise

    # Event logging methods
    def log_event(self, event: str, user_id: str, sport: str = None, **data) -> None:
        """Log an event to the database."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO events (event, user_id, sport, data)
                    VALUES (%s, %s, %s, %s)
                """, (event, user_id, sport, json.dumps(data) if data else None))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error logging event: {e}")
            self.conn.rollback()

    def get_user_events(self, user_id: str, event_type: str = None,
                        limit: int = 100) -> list[dict]:
        """Get recent events for a user."""
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                if event_type:
                    cur.execute("""
                        SELECT * FROM events
                        WHERE user_id = %s AND event = %s
                        ORDER BY timestamp DESC LIMIT %s
                    """, (user_id, event_type, limit))
                else:
                    cur.execute("""
                        SELECT * FROM events
                        WHERE user_id = %s
                        ORDER BY timestamp DESC LIMIT %s
                    """, (user_id, limit))
                return [_serialize_row(row) for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error getting user events: {e}")
            return []
