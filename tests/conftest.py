"""
Pytest configuration and shared fixtures

Every fixture here pins down one of the outside inputs to an identifier:
the clock, the process id, and the network hardware. With all three fixed an
identifier is fully predictable.
"""

from collections.abc import Callable

import pytest

from suid import factory as factory_module
from suid.factory import IdentifierFactory
from suid.kernel.settings import SUIDSettings
from suid.kernel.time import FrozenClock
from suid.machine import MachineIdentity
from suid.sequence import SequenceCounter, process_counter
from tests.helpers import DOC_TIMESTAMP, FIXED_PID, FakeDiscovery


@pytest.fixture(autouse=True)
def isolated_default_factory(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Give each test a fresh default factory with a configured machine id and an
    unseeded process counter

    Tests never depend on the real host's network interfaces.
    """
    monkeypatch.setenv("SUID_MACHINE_ID", "a1b2c3")
    monkeypatch.delenv("SUID_MACHINE_ID_FALLBACK", raising=False)
    monkeypatch.delenv("SUID_INTERFACE", raising=False)
    monkeypatch.setattr(factory_module, "_default_factory", None)
    process_counter.reset()


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(DOC_TIMESTAMP)


@pytest.fixture
def discovery() -> FakeDiscovery:
    return FakeDiscovery()


@pytest.fixture
def machine(discovery: FakeDiscovery) -> MachineIdentity:
    return MachineIdentity(SUIDSettings(), discover=discovery)


@pytest.fixture
def counter() -> SequenceCounter:
    return SequenceCounter()


@pytest.fixture
def pid_provider() -> Callable[[], int]:
    return lambda: FIXED_PID


@pytest.fixture
def factory(
    machine: MachineIdentity,
    counter: SequenceCounter,
    frozen_clock: FrozenClock,
    pid_provider: Callable[[], int],
) -> IdentifierFactory:
    """Fully deterministic factory once the counter is reset to a known seed"""
    return IdentifierFactory(
        machine=machine,
        counter=counter,
        clock=frozen_clock,
        pid_provider=pid_provider,
    )
