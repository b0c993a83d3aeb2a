"""
Turn timer: how long this turn has taken and how much clock is left.

The search never sleeps or waits; it polls the timer at every node. A Timer
is created when the turn starts, from the milliseconds left on the player's
clock. Remaining time shrinks as the turn goes on, exactly like a game clock.
"""

import time

from chessbot.constants import SAFETY_FACTOR


class Timer:
    """
    Monotonic turn clock.

    Args:
        clock_ms: Milliseconds left on the player's clock when the turn began.
    """

    def __init__(self, clock_ms: float) -> None:
        if clock_ms < 0:
            raise ValueError(f"clock_ms must be non-negative, got {clock_ms}")
        self.clock_ms = clock_ms
        self.start_time = time.monotonic()

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds elapsed since the turn started."""
        return int((time.monotonic() - self.start_time) * 1000)

    @property
    def remaining_ms(self) -> int:
        """Milliseconds left on the clock, never below zero."""
        return max(0, int(self.clock_ms) - self.elapsed_ms)

    def expired(self, factor: int = SAFETY_FACTOR) -> bool:
        """
        True once elapsed * factor exceeds the remaining clock.

        With the default factor this allows roughly 1/300 of the remaining
        clock per move.
        """
        elapsed = self.elapsed_ms
        return elapsed * factor > max(0, int(self.clock_ms) - elapsed)
