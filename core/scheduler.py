"""Queue construction and adaptive replay for a practice session."""

import logging
import random

from .config import PICK_QUEUE_SIZE, SPELL_QUEUE_SIZE, MAX_REPLAYS, REPLAY_OFFSET
from .models import QueueEntry, Round
from .utils import word_key

logger = logging.getLogger(__name__)


def _unique_by_word(rounds, size: int, taken: set | None = None) -> list[Round]:
    """Take rounds in order, skipping words already taken, until size is reached."""
    taken = set() if taken is None else taken
    selected = []
    for round in rounds:
        if len(selected) >= size:
            break
        key = word_key(round.prompt_word)
        if key in taken:
            continue
        taken.add(key)
        selected.append(round)
    return selected


class SessionScheduler:
    """Builds the pick and spell queues and re-inserts missed pick rounds.

    Queues hold QueueEntry objects; a replayed round reuses its entry so the
    replay counter follows the round around the queue.
    """

    def __init__(self, rng: random.Random | None = None, max_replays: int = MAX_REPLAYS,
                 replay_offset: int = REPLAY_OFFSET):
        self.rng = rng or random.Random()
        self.max_replays = max_replays
        self.replay_offset = replay_offset
        self.pick_queue: list[QueueEntry] = []
        self.spell_queue: list[QueueEntry] = []
        self._replays: dict[str, int] = {}

    def build_pick_queue(self, rounds, size: int = PICK_QUEUE_SIZE) -> list[QueueEntry]:
        """Shuffle the catalog and keep up to size rounds with distinct words."""
        shuffled = [r for r in rounds if r.is_well_formed()]
        self.rng.shuffle(shuffled)
        self.pick_queue = [QueueEntry(r) for r in _unique_by_word(shuffled, size)]
        self._replays = {}
        return self.pick_queue

    def build_spell_queue(self, rounds, excluding=None, size: int = SPELL_QUEUE_SIZE) -> list[QueueEntry]:
        """Pick up to size distinct words, preferring ones not used in the pick queue.

        If there are not enough unused words, the rest is filled from the whole
        catalog, which may repeat pick-phase words.
        """
        if excluding is None:
            excluding = [e.round.prompt_word for e in self.pick_queue]
        used = {word_key(w) for w in excluding}

        shuffled = [r for r in rounds if r.is_well_formed()]
        self.rng.shuffle(shuffled)

        fresh = [r for r in shuffled if word_key(r.prompt_word) not in used]
        taken = set()
        selected = _unique_by_word(fresh, size, taken)
        if len(selected) < size:
            selected += _unique_by_word(shuffled, size - len(selected), taken)
            logger.info(f"Spell queue reuses pick words: {len(selected)}/{size} filled")
        self.spell_queue = [QueueEntry(r) for r in selected]
        return self.spell_queue

    def build(self, rounds, pick_size: int = PICK_QUEUE_SIZE,
              spell_size: int = SPELL_QUEUE_SIZE) -> None:
        rounds = list(rounds)
        self.build_pick_queue(rounds, pick_size)
        self.build_spell_queue(rounds, size=spell_size)

    def replay_count(self, round: Round) -> int:
        return self._replays.get(round.id, 0)

    def requeue_if_wrong(self, round: Round, current_index: int) -> int | None:
        """Re-insert a missed pick round a few rounds later.

        Returns the insertion index, or None when the round has used up its
        replays. Only the pick queue is ever modified.
        """
        count = self._replays.get(round.id, 0)
        if count >= self.max_replays:
            return None
        entry = None
        if 0 <= current_index < len(self.pick_queue) and self.pick_queue[current_index].round.id == round.id:
            entry = self.pick_queue[current_index]
        else:
            for candidate in self.pick_queue:
                if candidate.round.id == round.id:
                    entry = candidate
                    break
        if entry is None:
            entry = QueueEntry(round)

        position = min(current_index + self.replay_offset, len(self.pick_queue))
        count += 1
        self._replays[round.id] = count
        entry.replays = count
        self.pick_queue.insert(position, entry)
        logger.info(f"Requeued '{round.prompt_word}' at {position} (replay {count}/{self.max_replays})")
        return position
