from .models import Sport, Difficulty, Phase, Round, SessionStats, QueueEntry, SessionState, Result
from .interfaces import RoundSource, DifficultyProvider, ResultSink, Scheduler, CancelToken, Storage
from .catalog import RoundCatalog
from .scheduler import SessionScheduler
from .phases import PhaseMachine
from .timing import RevealController
from .scoring import ScoreTracker
from .grid import layout
from .engine import SessionEngine
from .settings import SettingsStore
from .utils import normalize_spelling, spelling_matches
from .config import (
    PICK_QUEUE_SIZE, SPELL_QUEUE_SIZE,
    MAX_REPLAYS, REPLAY_OFFSET,
    GRID_SIZE, GRID_FILLED_SLOTS,
    ADVANCE_DELAY_SECONDS, DEFAULT_DIFFICULTY
)

__all__ = [
    'Sport', 'Difficulty', 'Phase', 'Round', 'SessionStats', 'QueueEntry', 'SessionState', 'Result',
    'RoundSource', 'DifficultyProvider', 'ResultSink', 'Scheduler', 'CancelToken', 'Storage',
    'RoundCatalog', 'SessionScheduler', 'PhaseMachine', 'RevealController', 'ScoreTracker',
    'layout', 'SessionEngine', 'SettingsStore',
    'normalize_spelling', 'spelling_matches',
    'PICK_QUEUE_SIZE', 'SPELL_QUEUE_SIZE',
    'MAX_REPLAYS', 'REPLAY_OFFSET',
    'GRID_SIZE', 'GRID_FILLED_SLOTS',
    'ADVANCE_DELAY_SECONDS', 'DEFAULT_DIFFICULTY'
]
