"""Pick -> Spell -> Complete sequencing, driven by queue exhaustion."""

from .models import Phase


class PhaseMachine:

    def __init__(self):
        self.phase = Phase.COMPLETE
        self.index = 0

    @property
    def is_complete(self) -> bool:
        return self.phase == Phase.COMPLETE

    def reset(self, pick_length: int, spell_length: int) -> Phase:
        """Enter the first phase that has rounds."""
        self.index = 0
        if pick_length > 0:
            self.phase = Phase.PICK
        elif spell_length > 0:
            self.phase = Phase.SPELL
        else:
            self.phase = Phase.COMPLETE
        return self.phase

    def advance(self, pick_length: int, spell_length: int) -> Phase:
        """Move to the next round, phase or completion.

        Lengths are read at call time since the pick queue can grow with replays.
        """
        if self.phase == Phase.PICK:
            if self.index + 1 < pick_length:
                self.index += 1
            else:
                self.index = 0
                self.phase = Phase.SPELL if spell_length > 0 else Phase.COMPLETE
        elif self.phase == Phase.SPELL:
            if self.index + 1 < spell_length:
                self.index += 1
            else:
                self.index = 0
                self.phase = Phase.COMPLETE
        return self.phase

    def end(self) -> Phase:
        self.phase = Phase.COMPLETE
        self.index = 0
        return self.phase
