"""Domain models for the sight words practice engine."""

from enum import Enum

from .config import MIN_OPTIONS, MAX_OPTIONS


class Sport(str, Enum):
    """Sports a word bank can belong to."""

    SOCCER = 'soccer'
    BASKETBALL = 'basketball'
    FOOTBALL = 'football'

    @property
    def display_name(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value) -> 'Sport | None':
        """Return the Sport for a string value, or None if unknown."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class Difficulty(str, Enum):
    """Controls how long the prompt word stays on screen."""

    EASY = 'easy'
    NORMAL = 'normal'
    HARD = 'hard'

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def seconds_visible(self) -> float:
        return _SECONDS_VISIBLE[self]


_SECONDS_VISIBLE = {
    Difficulty.EASY: 2.5,
    Difficulty.NORMAL: 1.5,
    Difficulty.HARD: 1.0,
}


class Phase(str, Enum):
    PICK = 'pick'
    SPELL = 'spell'
    COMPLETE = 'complete'


class Round:
    """One prompt word with its multiple-choice options.

    Rounds are never mutated after loading; options are kept as a tuple.
    """

    __slots__ = ('id', 'sport', 'prompt_word', 'options', 'correct_word')

    def __init__(self, id: str, sport: str, prompt_word: str, options, correct_word: str):
        self.id = id
        self.sport = sport
        self.prompt_word = prompt_word
        self.options = tuple(options)
        self.correct_word = correct_word

    def __repr__(self) -> str:
        return f"Round({self.id!r}, {self.prompt_word!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Round):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.id)

    def is_well_formed(self) -> bool:
        """True when options are unique, within bounds and contain the answer."""
        if not (MIN_OPTIONS <= len(self.options) <= MAX_OPTIONS):
            return False
        if len(set(self.options)) != len(self.options):
            return False
        return self.correct_word in self.options

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'sport': self.sport,
            'prompt_word': self.prompt_word,
            'options': list(self.options),
            'correct_word': self.correct_word
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Round':
        """Build a round from a dict. Raises ValueError for malformed records."""
        try:
            options = data['options']
            if isinstance(options, str) or not isinstance(options, (list, tuple)):
                raise ValueError(f"options must be a list, got {type(options).__name__}")
            round = cls(
                id=str(data['id']),
                sport=str(data['sport']),
                prompt_word=str(data['prompt_word']),
                options=[str(o) for o in options],
                correct_word=str(data['correct_word'])
            )
        except KeyError as e:
            raise ValueError(f"Round is missing field {e}") from e
        if not round.is_well_formed():
            raise ValueError(f"Round {round.id} has invalid options or answer")
        return round


class SessionStats:
    """Live scoring for one session. Mutated only by ScoreTracker."""

    def __init__(self):
        self.score = 0
        self.streak = 0
        self.best_streak = 0
        self.total_answered = 0
        self.correct_count = 0
        self.incorrect_count = 0

    @property
    def accuracy_percent(self) -> int:
        """Share of correct answers, rounded half-up. 0 when nothing answered."""
        if self.total_answered == 0:
            return 0
        return (200 * self.correct_count + self.total_answered) // (2 * self.total_answered)

    def copy(self) -> 'SessionStats':
        return SessionStats.from_dict(self.to_dict())

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'streak': self.streak,
            'best_streak': self.best_streak,
            'total_answered': self.total_answered,
            'correct_count': self.correct_count,
            'incorrect_count': self.incorrect_count,
            'accuracy_percent': self.accuracy_percent
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SessionStats':
        stats = cls()
        stats.score = data.get('score', 0)
        stats.streak = data.get('streak', 0)
        stats.best_streak = data.get('best_streak', 0)
        stats.total_answered = data.get('total_answered', 0)
        stats.correct_count = data.get('correct_count', 0)
        stats.incorrect_count = data.get('incorrect_count', 0)
        return stats


class QueueEntry:
    """A scheduled round. Replays of the same round share one entry object."""

    __slots__ = ('round', 'replays')

    def __init__(self, round: Round, replays: int = 0):
        self.round = round
        self.replays = replays

    def __repr__(self) -> str:
        return f"QueueEntry({self.round.prompt_word!r}, replays={self.replays})"


class SessionState:
    """Observable snapshot of the running session."""

    def __init__(self, sport: str | None = None, phase: Phase = Phase.COMPLETE):
        self.sport = sport
        self.phase = phase
        self.current_round: Round | None = None
        self.grid_slots: list | None = None
        self.prompt_visible = False
        self.locked = True
        self.awaiting_advance = False
        self.stats = SessionStats()
        self.progress_label = ''
        self.difficulty: Difficulty | None = None
        self.pick_total = 0
        self.spell_total = 0
        self.no_content = False

    def to_dict(self) -> dict:
        return {
            'sport': self.sport,
            'phase': self.phase.value,
            'current_round': self.current_round.to_dict() if self.current_round else None,
            'grid_slots': list(self.grid_slots) if self.grid_slots is not None else None,
            'prompt_visible': self.prompt_visible,
            'locked': self.locked,
            'awaiting_advance': self.awaiting_advance,
            'stats': self.stats.to_dict(),
            'progress_label': self.progress_label,
            'difficulty': self.difficulty.value if self.difficulty else None,
            'pick_total': self.pick_total,
            'spell_total': self.spell_total,
            'no_content': self.no_content
        }


class Result:
    """Outcome of an engine command."""

    __slots__ = ('ok', 'message', 'correct')

    def __init__(self, ok: bool, message: str = '', correct: bool | None = None):
        self.ok = ok
        self.message = message
        self.correct = correct

    def __repr__(self) -> str:
        return f"Result(ok={self.ok}, message={self.message!r}, correct={self.correct})"

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def accepted(cls, message: str = '', correct: bool | None = None) -> 'Result':
        return cls(True, message, correct)

    @classmethod
    def rejected(cls, message: str) -> 'Result':
        return cls(False, message)

    def to_dict(self) -> dict:
        return {'ok': self.ok, 'message': self.message, 'correct': self.correct}
