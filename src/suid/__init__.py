"""
SUID - thread-safe sequential unique identifiers

Twelve-byte, index-friendly identifiers modeled on the MongoDB ObjectId:
a timestamp, a host discriminator, the process id and a per-process counter.

    >>> from suid import suid
    >>> ident = suid()
    >>> str(ident)          # '55de233819d51b1a8a67e0ac'
    >>> ident.dec           # 26574773684474770905501261996
    >>> ident.uuencode      # ',5=XC.!G5&QJ*9^"L\\n'

Fun fact: a process keeps its counter for its whole life, so two identifiers
from one process can only repeat a sequence number after 16,777,216 draws.
"""

from suid.factory import (
    IdentifierFactory,
    configure,
    get_default_factory,
    reset_sequence_counter,
    suid,
)
from suid.identifier import SUID
from suid.kernel.errors import (
    EntropyUnavailable,
    InitializationFailure,
    InvalidIdentifier,
    MachineIdentityUnavailable,
    SUIDError,
)
from suid.kernel.settings import SUIDSettings
from suid.machine import MachineIdentity
from suid.sequence import SequenceCounter

__version__ = "1.0.0"
__all__ = [
    "SUID",
    "suid",
    "reset_sequence_counter",
    "configure",
    "get_default_factory",
    "IdentifierFactory",
    "MachineIdentity",
    "SequenceCounter",
    "SUIDSettings",
    "SUIDError",
    "InitializationFailure",
    "MachineIdentityUnavailable",
    "EntropyUnavailable",
    "InvalidIdentifier",
    "__version__",
]
