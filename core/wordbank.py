"""Built-in sight words for each sport."""

import uuid

from .config import MAX_OPTIONS

# Namespace for stable round ids
ROUND_NAMESPACE = uuid.UUID('6f1c2d0e-5b7a-4c39-9a51-3e2f8d4b7c10')

SIGHT_WORDS = {
    'soccer': [
        'the', 'and', 'ball', 'goal', 'kick', 'run', 'team', 'play',
        'net', 'pass', 'shoot', 'field', 'fast', 'win', 'go', 'we'
    ],
    'basketball': [
        'hoop', 'jump', 'shot', 'dunk', 'court', 'bounce', 'score',
        'up', 'in', 'can', 'see', 'my', 'you', 'look', 'here', 'it'
    ],
    'football': [
        'catch', 'throw', 'tackle', 'helmet', 'yard', 'down', 'kick',
        'is', 'to', 'said', 'was', 'for', 'he', 'she', 'they', 'are'
    ]
}


def round_id(sport: str, word: str) -> str:
    return str(uuid.uuid5(ROUND_NAMESPACE, f"{sport}:{word}"))


def build_rounds(sport: str, words: list[str], option_count: int = MAX_OPTIONS) -> list[dict]:
    """Turn a word list into round dicts.

    Distractors for each word are the words that follow it in the list,
    wrapping around, so the same list always yields the same rounds.
    """
    rounds = []
    count = min(option_count, len(words))
    for i, word in enumerate(words):
        distractors = [words[(i + k) % len(words)] for k in range(1, count)]
        # Rotate so the answer is not always the first option
        options = [word] + distractors
        shift = i % len(options)
        options = options[shift:] + options[:shift]
        rounds.append({
            'id': round_id(sport, word),
            'sport': sport,
            'prompt_word': word,
            'options': options,
            'correct_word': word
        })
    return rounds


def get_seed_data(sport: str | None = None) -> list[dict]:
    """All built-in rounds, or only those of one sport."""
    rounds = []
    for key, words in SIGHT_WORDS.items():
        if sport is None or key == sport:
            rounds += build_rounds(key, words)
    return rounds


def init_storage(storage) -> None:
    """Seed storage with the built-in rounds."""
    storage.seed_rounds(get_seed_data())
