"""Reveal interval handling: show the prompt, then unlock input."""

from typing import Callable

from .interfaces import CancelToken, Scheduler


class RevealController:
    """Keeps input locked while the prompt word is on screen.

    The reveal timer firing is the only thing that unlocks input.
    """

    def __init__(self, scheduler: Scheduler, on_unlock: Callable[[], None] | None = None):
        self.scheduler = scheduler
        self.on_unlock = on_unlock
        self.locked = True
        self.prompt_visible = False
        self._token: CancelToken | None = None

    @property
    def pending(self) -> bool:
        return self._token is not None

    def begin_round(self, seconds_visible: float) -> None:
        if self._token is not None:
            raise RuntimeError("begin_round called while a reveal timer is pending")
        self.locked = True
        self.prompt_visible = True
        self._token = self.scheduler.after(seconds_visible, self._reveal_elapsed)

    def _reveal_elapsed(self) -> None:
        if self._token is None:
            return
        self._token = None
        self.prompt_visible = False
        self.locked = False
        if self.on_unlock:
            self.on_unlock()

    def lock(self) -> None:
        """Lock input after an answer has been submitted."""
        self.locked = True

    def cancel(self) -> None:
        """Drop any pending reveal timer and leave input locked."""
        if self._token is not None:
            self._token.cancel()
            self._token = None
        self.locked = True
        self.prompt_visible = False
