"""
Identifier factory - composes clock, machine, pid and counter into a SUID

A factory owns one MachineIdentity and draws from the process-wide
SequenceCounter unless given its own. The module keeps a default factory behind
``suid()``; tests and embedders can build their own with injected collaborators.
"""

import os
import threading
from collections.abc import Callable

from suid.identifier import SUID
from suid.kernel.logging import get_logger
from suid.kernel.metrics import identifiers_generated_total
from suid.kernel.settings import SUIDSettings
from suid.kernel.time import Clock, default_clock
from suid.machine import MachineIdentity
from suid.sequence import SequenceCounter, process_counter

logger = get_logger(__name__)


class IdentifierFactory:
    """
    Builds one identifier per ``create()`` call

    The only failures are one-time initialization errors propagated from the
    machine identity or the counter's first seeding.
    """

    def __init__(
        self,
        machine: MachineIdentity | None = None,
        counter: SequenceCounter | None = None,
        clock: Clock | None = None,
        pid_provider: Callable[[], int] = os.getpid,
    ) -> None:
        """
        Args:
            machine: Machine identity (defaults to hardware discovery)
            counter: Sequence counter (defaults to the process-wide counter)
            clock: Epoch-seconds clock (defaults to the system clock)
            pid_provider: Process id source, read on every call
        """
        self.machine = machine or MachineIdentity()
        self.counter = counter or process_counter
        self.clock = clock or default_clock
        self._pid_provider = pid_provider

    @classmethod
    def from_settings(
        cls, settings: SUIDSettings, counter: SequenceCounter | None = None
    ) -> "IdentifierFactory":
        return cls(machine=MachineIdentity(settings), counter=counter)

    def create(self) -> SUID:
        """
        Generate a new identifier

        Raises:
            InitializationFailure: On first use, if the machine identity or the
                random seed cannot be obtained
        """
        timestamp = self.clock.now()
        machine_id = self.machine.resolve()
        pid = self._pid_provider()
        sequence = self.counter.draw()
        identifiers_generated_total.inc()
        return SUID.from_fields(timestamp, machine_id, pid, sequence)

    def reset_sequence_counter(self, seed: int | None = None) -> None:
        """See ``SequenceCounter.reset``"""
        self.counter.reset(seed)
        logger.info("Sequence counter reset", explicit_seed=seed is not None)


_default_lock = threading.Lock()
_default_factory: IdentifierFactory | None = None


def get_default_factory() -> IdentifierFactory:
    """Process-wide factory, built from SUID_* environment settings on first use"""
    global _default_factory
    factory = _default_factory
    if factory is not None:
        return factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = IdentifierFactory.from_settings(SUIDSettings.from_env())
        return _default_factory


def configure(settings: SUIDSettings) -> IdentifierFactory:
    """
    Replace the default factory with one built from ``settings``

    The new factory starts with an unresolved machine id but keeps drawing
    from the previous default factory's counter, so the sequence carries on.
    """
    global _default_factory
    with _default_lock:
        counter = _default_factory.counter if _default_factory is not None else None
        _default_factory = IdentifierFactory.from_settings(settings, counter=counter)
        return _default_factory


def suid() -> SUID:
    """Generate a new identifier from the default factory"""
    return get_default_factory().create()


def reset_sequence_counter(seed: int | None = None) -> None:
    """Reseed the default factory's counter; see ``SequenceCounter.reset``"""
    get_default_factory().reset_sequence_counter(seed)
