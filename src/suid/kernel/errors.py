"""
Custom exceptions for SUID

A small error hierarchy separates the two things that can go wrong: the
process cannot generate identifiers at all, or a caller handed us something
that is not an identifier.

Fun fact: MongoDB's ObjectId, the layout SUID borrows, was designed in 2009 so
that drivers could mint primary keys client-side without ever asking the server.
"""


class SUIDError(Exception):
    """Base exception for all SUID errors"""

    pass


class InitializationFailure(SUIDError):
    """
    Raised when the process cannot generate identifiers

    Surfaced to the first caller. Nothing substitutes a weaker value behind
    the caller's back.
    """

    pass


class MachineIdentityUnavailable(InitializationFailure):
    """Raised when no link-layer hardware address can be discovered"""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        message = "No network hardware address available for machine identity"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EntropyUnavailable(InitializationFailure):
    """Raised when the cryptographic random source cannot seed the counter"""

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(
            "Cryptographically strong random source unavailable - "
            "cannot seed sequence counter"
        )


class InvalidIdentifier(SUIDError, ValueError):
    """Raised when a value cannot be interpreted as a 12-byte identifier"""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid identifier {value!r}: {reason}")
