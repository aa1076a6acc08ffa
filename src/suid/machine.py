"""
Machine identity - the 3-byte host discriminator

Resolved once per process from a network interface's link-layer (MAC) address.
Only the low-order three bytes are kept: the high three are the vendor's OUI
prefix, shared by every card that vendor ships, so they say little about which
host minted an identifier.

Without a configured interface, discovery prefers interfaces that are up,
then physical NICs over bridges, tunnels and container veths, then name order.
"""

import re
import secrets
import threading
from collections.abc import Callable

import psutil

from suid.kernel.errors import MachineIdentityUnavailable
from suid.kernel.logging import get_logger
from suid.kernel.metrics import machine_identity_resolutions_total
from suid.kernel.settings import SUIDSettings

logger = get_logger(__name__)

MACHINE_ID_BYTES = 3

_MAC_SEPARATORS = re.compile(r"[:\-.]")

# Name prefixes of bridges, tunnels and container plumbing whose MACs are
# often generated or shared across hosts
VIRTUAL_INTERFACE_PREFIXES = (
    "br-",
    "bridge",
    "cni",
    "docker",
    "flannel",
    "kube",
    "lo",
    "tap",
    "tun",
    "utun",
    "veth",
    "virbr",
    "vboxnet",
    "vmnet",
    "wg",
    "zt",
)

# Returns a 6-byte hardware address, or None when the host has none
AddressDiscovery = Callable[[str | None], bytes | None]


def parse_hardware_address(address: str) -> bytes | None:
    """
    Parse a textual MAC address ("aa:bb:cc:dd:ee:ff", "AA-BB-...", "aabb.ccdd.eeff")

    Returns:
        6 raw bytes, or None when the text is not a usable EUI-48 address
        (wrong length, not hex, or all zeros as on loopback)
    """
    digits = _MAC_SEPARATORS.sub("", address.strip())
    if len(digits) != 12:
        return None
    try:
        raw = bytes.fromhex(digits)
    except ValueError:
        return None
    if not any(raw):
        return None
    return raw


def discover_hardware_address(preferred: str | None = None) -> bytes | None:
    """
    Find a link-layer address among the host's network interfaces

    Args:
        preferred: Interface name to use when it has a usable address

    Returns:
        6 raw bytes, or None when no interface has a usable address
    """
    candidates: dict[str, bytes] = {}
    for name, addresses in psutil.net_if_addrs().items():
        for entry in addresses:
            if entry.family != psutil.AF_LINK or not entry.address:
                continue
            raw = parse_hardware_address(entry.address)
            if raw is not None:
                candidates[name] = raw
                break

    if not candidates:
        return None
    if preferred is not None and preferred in candidates:
        return candidates[preferred]
    if preferred is not None:
        logger.warning(
            "Preferred interface has no hardware address",
            interface=preferred,
            available=sorted(candidates),
        )
    stats = psutil.net_if_stats()

    def rank(name: str) -> tuple[bool, bool, str]:
        entry = stats.get(name)
        is_up = entry is not None and entry.isup
        return (not is_up, is_virtual_interface(name), name)

    # Deterministic so that repeated discoveries on one host agree
    return candidates[min(candidates, key=rank)]


def is_virtual_interface(name: str) -> bool:
    return name.lower().startswith(VIRTUAL_INTERFACE_PREFIXES)


class MachineIdentity:
    """
    Process-wide memoized machine id

    ``resolve()`` is idempotent: the first successful call runs discovery and
    caches the result; every later call returns the cached bytes without side
    effects. A failed discovery is not cached.
    """

    def __init__(
        self,
        settings: SUIDSettings | None = None,
        discover: AddressDiscovery = discover_hardware_address,
    ) -> None:
        """
        Args:
            settings: Override and fallback policy (defaults to hardware-only)
            discover: Hardware address source, injectable for tests
        """
        self.settings = settings or SUIDSettings()
        self._discover = discover
        self._lock = threading.Lock()
        self._value: bytes | None = None
        self._source: str | None = None

    @property
    def source(self) -> str | None:
        """How the id was obtained: "hardware", "configured", "random", or None if unresolved"""
        return self._source

    def resolve(self) -> bytes:
        """
        Return the 3-byte machine id, resolving it on first use

        Raises:
            MachineIdentityUnavailable: If no hardware address exists and the
                settings do not allow the random fallback
        """
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                resolved, source = self._resolve_uncached()
                # Published last; the unlocked fast path reads only _value
                self._source = source
                self._value = resolved
                machine_identity_resolutions_total.labels(source=source).inc()
                logger.info(
                    "Machine identity resolved",
                    machine_id=resolved.hex(),
                    source=source,
                )
            return self._value

    def _resolve_uncached(self) -> tuple[bytes, str]:
        configured = self.settings.machine_id_bytes
        if configured is not None:
            return configured, "configured"

        address = self._discover(self.settings.interface)
        if address is not None:
            if len(address) != 6:
                raise MachineIdentityUnavailable(
                    f"hardware address has {len(address)} bytes, expected 6"
                )
            return address[-MACHINE_ID_BYTES:], "hardware"

        if self.settings.machine_id_fallback == "random":
            logger.warning(
                "No hardware address found - using random machine id",
                fallback=self.settings.machine_id_fallback,
            )
            return secrets.token_bytes(MACHINE_ID_BYTES), "random"

        logger.error("Machine identity discovery failed", interface=self.settings.interface)
        raise MachineIdentityUnavailable(
            "set SUID_MACHINE_ID or SUID_MACHINE_ID_FALLBACK=random to proceed without one"
        )
