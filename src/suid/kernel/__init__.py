"""
Kernel - ambient infrastructure shared by the identifier engine

Errors, clocks, settings, logging and metrics live here so the engine modules
stay about bytes and counters.
"""

from suid.kernel.errors import (
    EntropyUnavailable,
    InitializationFailure,
    InvalidIdentifier,
    MachineIdentityUnavailable,
    SUIDError,
)
from suid.kernel.settings import SUIDSettings
from suid.kernel.time import Clock, FrozenClock, SystemClock

__all__ = [
    # Time
    "Clock",
    "SystemClock",
    "FrozenClock",
    # Settings
    "SUIDSettings",
    # Errors
    "SUIDError",
    "InitializationFailure",
    "MachineIdentityUnavailable",
    "EntropyUnavailable",
    "InvalidIdentifier",
]
