"""Error taxonomy for password hash construction, parsing, and storage."""

from __future__ import annotations


class PasswordHashError(ValueError):
    """Base class for every password hash failure."""


class RandomSourceError(PasswordHashError):
    """Raised when the secure random source cannot supply salt bytes."""


class InvalidEncodedHashError(PasswordHashError):
    """Raised when an encoded hash is not in the canonical format."""

    def __init__(self, reason: str = "the encoded hash is not in the correct format") -> None:
        super().__init__(reason)


class IncompatibleVersionError(PasswordHashError):
    """Raised when an encoded hash was produced by another Argon2 version."""

    def __init__(self, *, version: int, supported: int) -> None:
        super().__init__(
            f"incompatible version of argon2: got v={version}, supported v={supported}"
        )
        self.version = version
        self.supported = supported


class HashDecodeError(PasswordHashError):
    """Raised when one sub-field of an encoded hash cannot be decoded."""

    def __init__(self, *, field: str, reason: str) -> None:
        super().__init__(f"failed to decode {field}: {reason}")
        self.field = field


class ScanError(PasswordHashError):
    """Raised when a raw storage value cannot be represented as a password hash."""
