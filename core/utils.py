"""Utility functions for the sight words engine."""


def normalize_spelling(text: str) -> str:
    """Trim surrounding whitespace and lowercase a typed word."""
    return (text or '').strip().lower()


def spelling_matches(typed: str, expected: str) -> bool:
    """Compare a typed spelling with the expected word after normalizing both."""
    return normalize_spelling(typed) == normalize_spelling(expected)


def word_key(word: str) -> str:
    """Key used to treat prompt words as the same word regardless of case."""
    return (word or '').casefold()
