"""Grid placement for pick rounds: three options and one moving blank."""

import random

from .config import GRID_SIZE, GRID_FILLED_SLOTS


def visible_options(options, correct_word: str | None = None) -> list[str]:
    """Options shown in the grid, at most GRID_FILLED_SLOTS of them.

    When a round has more options than fit, the correct word is always kept
    and the rest are taken in list order.
    """
    options = list(dict.fromkeys(options))
    if len(options) <= GRID_FILLED_SLOTS:
        return options
    if correct_word in options:
        others = [o for o in options if o != correct_word]
        return [correct_word] + others[:GRID_FILLED_SLOTS - 1]
    return options[:GRID_FILLED_SLOTS]


def layout(options, rng: random.Random, correct_word: str | None = None) -> list[str | None]:
    """Place shuffled options around one randomly chosen blank cell.

    Returns a list of GRID_SIZE cells. Exactly one cell is the chosen blank;
    with fewer than GRID_FILLED_SLOTS options the leftover cells are None too.
    """
    shown = visible_options(options, correct_word)
    rng.shuffle(shown)
    blank = rng.randrange(GRID_SIZE)
    slots: list[str | None] = [None] * GRID_SIZE
    free = [i for i in range(GRID_SIZE) if i != blank]
    for position, option in zip(free, shown):
        slots[position] = option
    return slots
