"""Read-only collection of rounds for one sport."""

import logging

from .interfaces import RoundSource
from .models import Round

logger = logging.getLogger(__name__)


class RoundCatalog:
    """In-memory rounds, filtered by exact sport identifier."""

    def __init__(self, rounds=None):
        self._rounds = []
        self.dropped = 0
        for item in rounds or []:
            self.add(item)

    def add(self, item) -> bool:
        """Add a Round or round dict. Malformed records are dropped and counted."""
        if isinstance(item, Round):
            round = item
            if not round.is_well_formed():
                self._drop(round.id, "invalid options or answer")
                return False
        else:
            try:
                round = Round.from_dict(item)
            except (ValueError, TypeError) as e:
                self._drop(item.get('id') if isinstance(item, dict) else None, str(e))
                return False
        self._rounds.append(round)
        return True

    def _drop(self, round_id, reason: str) -> None:
        self.dropped += 1
        logger.warning(f"Skipping malformed round {round_id}: {reason}")

    def __len__(self) -> int:
        return len(self._rounds)

    def rounds_for(self, sport: str) -> list[Round]:
        """All rounds for a sport, in load order. Empty if there are none."""
        return [r for r in self._rounds if r.sport == sport]

    def sports(self) -> list[str]:
        seen = []
        for r in self._rounds:
            if r.sport not in seen:
                seen.append(r.sport)
        return seen

    @classmethod
    def from_source(cls, source: RoundSource, sport: str) -> 'RoundCatalog':
        """Load a sport's rounds. Source failures yield an empty catalog."""
        try:
            records = source.load(sport) or []
        except Exception as e:
            logger.warning(f"Round source failed for {sport}: {type(e).__name__}: {e}")
            records = []
        return cls(records)
