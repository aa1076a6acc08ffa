"""
SUID - the 12-byte sequential unique identifier

Layout (big-endian within each field):

    | 4 bytes   | 3 bytes    | 2 bytes | 3 bytes  |
    | timestamp | machine id | pid     | sequence |

Because the timestamp leads and every field is big-endian, comparing the raw
bytes, the hex strings, or the integers all give the same order, which is
creation order at one-second resolution.
"""

import binascii
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from suid.kernel.errors import InvalidIdentifier

SUID_BYTES = 12
SUID_HEX_LENGTH = SUID_BYTES * 2
SUID_MAX = (1 << (SUID_BYTES * 8)) - 1

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


@dataclass(frozen=True, order=True)
class SUID:
    """
    Immutable identifier value

    Equality, hashing and ordering all work on the raw bytes. ``str()`` gives
    the canonical 24-character lowercase hex form.
    """

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise InvalidIdentifier(self.value, "expected bytes")
        if len(self.value) != SUID_BYTES:
            raise InvalidIdentifier(
                self.value, f"expected {SUID_BYTES} bytes, got {len(self.value)}"
            )
        if isinstance(self.value, bytearray):
            object.__setattr__(self, "value", bytes(self.value))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls) -> "SUID":
        """Generate a fresh identifier from the process-wide default factory"""
        from suid.factory import get_default_factory

        return get_default_factory().create()

    @classmethod
    def from_hex(cls, text: str) -> "SUID":
        """
        Parse a 24-character hex string (either case)

        Raises:
            InvalidIdentifier: If the text is not exactly 24 hex digits
        """
        if not isinstance(text, str) or not _HEX_PATTERN.fullmatch(text):
            raise InvalidIdentifier(text, f"expected {SUID_HEX_LENGTH} hexadecimal characters")
        return cls(bytes.fromhex(text))

    @classmethod
    def from_dec(cls, number: int) -> "SUID":
        """
        Build from the unsigned 96-bit integer form

        Raises:
            InvalidIdentifier: If the number is negative or needs more than 96 bits
        """
        if isinstance(number, bool) or not isinstance(number, int):
            raise InvalidIdentifier(number, "expected an integer")
        if not 0 <= number <= SUID_MAX:
            raise InvalidIdentifier(number, "outside the unsigned 96-bit range")
        return cls(number.to_bytes(SUID_BYTES, "big"))

    @classmethod
    def from_fields(
        cls, timestamp: int, machine_id: bytes, pid: int, sequence: int
    ) -> "SUID":
        """
        Assemble an identifier from its four fields

        Timestamp, pid and sequence are masked to their widths (32, 16 and
        24 bits) so that an oversized value can never bleed into a
        neighbouring field.
        """
        if len(machine_id) != 3:
            raise InvalidIdentifier(machine_id, "machine id must be 3 bytes")
        return cls(
            (timestamp & 0xFFFFFFFF).to_bytes(4, "big")
            + bytes(machine_id)
            + (pid & 0xFFFF).to_bytes(2, "big")
            + (sequence & 0xFFFFFF).to_bytes(3, "big")
        )

    # ------------------------------------------------------------------
    # Encodings
    # ------------------------------------------------------------------

    @property
    def hex(self) -> str:
        """Canonical 24-character lowercase hex string"""
        return self.value.hex()

    @property
    def dec(self) -> int:
        """The 96-bit value as an unsigned integer"""
        return int.from_bytes(self.value, "big")

    @property
    def binary(self) -> bytes:
        """The raw 12 bytes"""
        return self.value

    @property
    def uuencode(self) -> str:
        """
        Uuencoded binary form, one line with its trailing newline

        Zero sextets encode as a backtick rather than a space, as classic
        uuencode tools do.
        """
        return binascii.b2a_uu(self.value, backtick=True).decode("ascii")

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.value[0:4], "big")

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def machine_id(self) -> str:
        return self.value[4:7].hex()

    @property
    def pid(self) -> int:
        return int.from_bytes(self.value[7:9], "big")

    @property
    def sequence(self) -> int:
        return int.from_bytes(self.value[9:12], "big")

    def fields(self) -> dict[str, Any]:
        """All decoded fields, for display and logging"""
        return {
            "hex": self.hex,
            "timestamp": self.timestamp,
            "created_at": self.created_at.isoformat(),
            "machine_id": self.machine_id,
            "pid": self.pid,
            "sequence": self.sequence,
        }

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"SUID('{self.hex}')"

    def __int__(self) -> int:
        return self.dec

    def __bytes__(self) -> bytes:
        return self.value
