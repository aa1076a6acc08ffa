"""
Test helpers - fixed inputs and fakes for deterministic identifiers

With the clock, pid and hardware address pinned, a factory reproduces the
identifier from the package docs byte for byte.
"""

# 2015-08-26T20:36:08Z, the timestamp of the identifier in the package docs
DOC_TIMESTAMP = 1440621368
DOC_HEX = "55de233819d51b1a8a67e0ac"
HARDWARE_ADDRESS = bytes.fromhex("0a1b2c19d51b")
FIXED_PID = 0x1A8A


class FakeDiscovery:
    """Hardware address source that records how often it was asked"""

    def __init__(self, address: bytes | None = HARDWARE_ADDRESS) -> None:
        self.address = address
        self.calls: list[str | None] = []

    def __call__(self, preferred: str | None = None) -> bytes | None:
        self.calls.append(preferred)
        return self.address
