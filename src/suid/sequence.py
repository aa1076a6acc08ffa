"""
Sequence counter - the 24-bit tail of every identifier

One counter per process, shared by every thread. Each draw hands out the
current value and advances it by one modulo 2^24. The first draw seeds the
counter from the OS entropy source so that processes started in the same
second on the same machine do not march through the same numbers.

Fun fact: 2^24 is 16,777,216 - a process would have to mint more than sixteen
million identifiers inside one second before two of them could collide.
"""

import secrets
import threading

from suid.kernel.errors import EntropyUnavailable
from suid.kernel.logging import get_logger
from suid.kernel.metrics import sequence_seeds_total, sequence_wraparounds_total

logger = get_logger(__name__)

SEQUENCE_BITS = 24
SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1


class SequenceCounter:
    """
    Thread-safe 24-bit monotonic counter with lazy random seeding

    Every draw, reset and the seeding itself happen under one lock, so draws
    are linearizable: no two callers ever receive the same pre-increment
    value and no increment is lost.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: int | None = None
        self._start: int | None = None

    @property
    def seeded(self) -> bool:
        return self._value is not None

    def draw(self) -> int:
        """
        Return the current value and advance the counter

        Seeds the counter first if it has never been seeded (or was cleared
        by ``reset()``).

        Returns:
            Sequence number in ``[0, 2^24)``

        Raises:
            EntropyUnavailable: If seeding is needed and no random source exists
        """
        with self._lock:
            if self._value is None:
                self._seed(_random_seed(), source="random")
            current = self._value
            self._value = (current + 1) & SEQUENCE_MASK
            if self._value == 0:
                sequence_wraparounds_total.inc()
                logger.info("Sequence counter wrapped", start=self._start)
            return current

    def reset(self, seed: int | None = None) -> None:
        """
        Reseed the counter (tests and administration)

        Args:
            seed: New starting value. Taken as ``abs(seed) mod 2^24``; values
                outside the 24-bit range are truncated, not rejected. When
                omitted the counter is cleared and the next draw reseeds
                randomly.

        Raises:
            TypeError: If seed is not an integer
        """
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise TypeError(f"Sequence seed must be an integer, got {type(seed).__name__}")
            seed = abs(seed) & SEQUENCE_MASK

        with self._lock:
            if seed is None:
                self._value = None
                self._start = None
                logger.debug("Sequence counter cleared")
            else:
                self._seed(seed, source="explicit")

    def peek(self) -> int | None:
        """Next value a draw would return, or None when unseeded"""
        with self._lock:
            return self._value

    def _seed(self, value: int, source: str) -> None:
        # Caller holds the lock
        self._value = value
        self._start = value
        sequence_seeds_total.labels(source=source).inc()
        logger.debug("Sequence counter seeded", source=source)


def _random_seed() -> int:
    """Uniform 24-bit value from the OS CSPRNG"""
    try:
        return secrets.randbits(SEQUENCE_BITS)
    except (NotImplementedError, OSError) as exc:
        logger.error("Entropy source unavailable", error=str(exc))
        raise EntropyUnavailable(exc) from exc


# The one counter every factory in this process draws from unless handed another
process_counter = SequenceCounter()
