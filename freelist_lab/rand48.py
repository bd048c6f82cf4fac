"""The 48-bit linear congruential generator behind ``srand48``/``drand48``."""

from __future__ import annotations

_MULTIPLIER = 0x5DEECE66D
_INCREMENT = 0xB
_MASK = (1 << 48) - 1
_LOW_SEED_BITS = 0x330E


class Rand48:
    """Reproducible uniform numbers in [0, 1), matching ``drand48``."""

    def __init__(self, seed: int = 0) -> None:
        self._state = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the generator the way ``srand48(seed)`` does."""
        self._state = ((seed & 0xFFFFFFFF) << 16) | _LOW_SEED_BITS

    def random(self) -> float:
        """Advance the generator and return the next value in [0, 1)."""
        self._state = (_MULTIPLIER * self._state + _INCREMENT) & _MASK
        return self._state / float(1 << 48)