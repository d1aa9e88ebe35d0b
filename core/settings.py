"""Persisted difficulty setting."""

import logging

from .config import DEFAULT_DIFFICULTY
from .interfaces import DifficultyProvider, Storage
from .models import Difficulty

logger = logging.getLogger(__name__)


class SettingsStore(DifficultyProvider):
    """Difficulty stored under the 'difficulty' key of the backend's config."""

    KEY = 'difficulty'

    def __init__(self, storage: Storage):
        self.storage = storage

    def current(self) -> Difficulty:
        try:
            config = self.storage.load_config()
        except Exception as e:
            logger.warning(f"Could not load settings: {e}")
            config = {}
        raw = config.get(self.KEY, DEFAULT_DIFFICULTY)
        try:
            return Difficulty(raw)
        except ValueError:
            logger.warning(f"Unknown difficulty '{raw}', using {DEFAULT_DIFFICULTY}")
            return Difficulty(DEFAULT_DIFFICULTY)

    def set(self, difficulty) -> Difficulty:
        """Save a new difficulty. Raises ValueError for unknown values."""
        difficulty = Difficulty(difficulty)
        try:
            config = self.storage.load_config()
        except Exception:
            config = {}
        config[self.KEY] = difficulty.value
        self.storage.save_config(config)
        return difficulty
