"""
SUID settings - how a process obtains its machine identity

By default the machine id comes from network hardware and a missing address
is fatal. The alternatives below are opt-in and visible in configuration, never
silently applied.
"""

import os
import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

_MACHINE_ID_PATTERN = re.compile(r"[0-9a-fA-F]{6}")


class SUIDSettings(BaseModel):
    """
    Process-level identifier generation settings

    Loaded once when the default factory is built. Changing settings means
    building a new factory (see ``suid.factory.configure``).
    """

    machine_id: str | None = Field(
        default=None,
        description="Explicit 3-byte machine id as 6 hex digits; skips hardware discovery",
    )

    machine_id_fallback: Literal["error", "random"] = Field(
        default="error",
        description="What to do when no hardware address exists: fail, or use random bytes",
    )

    interface: str | None = Field(
        default=None,
        description="Preferred network interface name for hardware discovery",
    )

    model_config = {"frozen": True}

    @field_validator("machine_id")
    @classmethod
    def validate_machine_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if value.lower().startswith("0x"):
            value = value[2:]
        if not _MACHINE_ID_PATTERN.fullmatch(value):
            raise ValueError("machine_id must be exactly 6 hexadecimal digits")
        return value.lower()

    @property
    def machine_id_bytes(self) -> bytes | None:
        """Configured machine id as 3 raw bytes, if any"""
        if self.machine_id is None:
            return None
        return bytes.fromhex(self.machine_id)

    @classmethod
    def from_env(cls) -> "SUIDSettings":
        """
        Build settings from SUID_* environment variables

        Empty variables count as unset.
        """
        values: dict[str, str] = {}
        for field_name, env_name in (
            ("machine_id", "SUID_MACHINE_ID"),
            ("machine_id_fallback", "SUID_MACHINE_ID_FALLBACK"),
            ("interface", "SUID_INTERFACE"),
        ):
            raw = os.getenv(env_name, "").strip()
            if raw:
                values[field_name] = raw
        if "machine_id_fallback" in values:
            values["machine_id_fallback"] = values["machine_id_fallback"].lower()
        return cls(**values)
