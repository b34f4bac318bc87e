"""Argon2id password hash value with canonical PHC-style encoding."""

from __future__ import annotations

import base64
import hmac
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from argon2.exceptions import HashingError
from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from password_hash.domain.errors import (
    HashDecodeError,
    IncompatibleVersionError,
    InvalidEncodedHashError,
)
from password_hash.domain.hash_parameters import (
    DEFAULT_HASH_PARAMETERS,
    MAX_PARALLELISM,
    HashParameters,
)
from password_hash.infrastructure.security.random_source import secure_random_bytes

ALGORITHM = "argon2id"
SUPPORTED_VERSION = ARGON2_VERSION

_ENCODED_FIELD_COUNT = 6
_MAX_UINT32 = 2**32 - 1
_MAX_DIGITS = 10

_VERSION_PATTERN = re.compile(rf"v=(-?[0-9]{{1,{_MAX_DIGITS}}})")
_PARAMETERS_PATTERN = re.compile(
    rf"m=([0-9]{{1,{_MAX_DIGITS}}}),t=([0-9]{{1,{_MAX_DIGITS}}}),p=([0-9]{{1,{_MAX_DIGITS}}})"
)


@dataclass(frozen=True)
class Argon2Hash:
    """Immutable Argon2id hash of one secret.

    ``Argon2Hash()`` is the zero value: it renders to an empty string, never
    matches a candidate, and is stored as SQL ``NULL``. Populated values come
    from ``create`` (fresh salt, current parameters) or ``from_encoded``
    (parameters taken verbatim from the stored encoding).
    """

    salt: bytes | None = field(default=None, repr=False)
    hashed: bytes | None = field(default=None, repr=False)
    time_cost: int = 0
    memory_cost: int = 0
    parallelism: int = 0

    def __post_init__(self) -> None:
        if (self.salt is None) != (self.hashed is None):
            raise ValueError("salt and hashed must be both set or both unset")
        if self.hashed is not None and not self.hashed:
            raise ValueError("hashed cannot be empty")
        if self.is_valid and min(self.time_cost, self.memory_cost, self.parallelism) <= 0:
            raise ValueError("cost parameters must be positive")

    @property
    def is_valid(self) -> bool:
        return self.hashed is not None

    @property
    def key_length(self) -> int:
        return len(self.hashed) if self.hashed is not None else 0

    @classmethod
    def create(
        cls,
        plaintext: str,
        *,
        parameters: HashParameters | None = None,
        random_source: Callable[[int], bytes] | None = None,
    ) -> Argon2Hash:
        """Hash ``plaintext`` with a fresh random salt.

        Raises RandomSourceError when no salt bytes can be drawn.
        """

        resolved = parameters or DEFAULT_HASH_PARAMETERS
        salt = (random_source or secure_random_bytes)(resolved.salt_length)
        hashed = _derive(
            plaintext,
            salt=salt,
            time_cost=resolved.time_cost,
            memory_cost=resolved.memory_cost,
            parallelism=resolved.parallelism,
            key_length=resolved.key_length,
        )
        return cls(
            salt=salt,
            hashed=hashed,
            time_cost=resolved.time_cost,
            memory_cost=resolved.memory_cost,
            parallelism=resolved.parallelism,
        )

    @classmethod
    def from_encoded(cls, encoded: str) -> Argon2Hash:
        """Parse a previously rendered hash.

        Raises InvalidEncodedHashError, IncompatibleVersionError or
        HashDecodeError depending on which part of the encoding is wrong.
        """

        parts = encoded.split("$")
        if len(parts) != _ENCODED_FIELD_COUNT:
            raise InvalidEncodedHashError()
        if parts[0] or parts[1] != ALGORITHM:
            raise InvalidEncodedHashError(f"expected a ${ALGORITHM}$ prefix, got {encoded[:12]!r}")

        version_match = _VERSION_PATTERN.fullmatch(parts[2])
        if version_match is None:
            raise HashDecodeError(field="version", reason=f"expected v=<int>, got {parts[2]!r}")
        version = int(version_match.group(1))
        if version != SUPPORTED_VERSION:
            raise IncompatibleVersionError(version=version, supported=SUPPORTED_VERSION)

        parameters_match = _PARAMETERS_PATTERN.fullmatch(parts[3])
        if parameters_match is None:
            raise HashDecodeError(
                field="parameters",
                reason=f"expected m=<uint>,t=<uint>,p=<uint>, got {parts[3]!r}",
            )
        memory_cost, time_cost, parallelism = (int(group) for group in parameters_match.groups())
        _check_cost("memory", memory_cost, _MAX_UINT32)
        _check_cost("iterations", time_cost, _MAX_UINT32)
        _check_cost("parallelism", parallelism, MAX_PARALLELISM)

        salt = _decode_base64(parts[4], name="salt")
        hashed = _decode_base64(parts[5], name="hash")
        if not hashed:
            raise HashDecodeError(field="hash", reason="hash value is empty")

        return cls(
            salt=salt,
            hashed=hashed,
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    def render(self) -> str:
        """Return the canonical encoding, or an empty string for the zero value."""

        if self.salt is None or self.hashed is None:
            return ""

        return (
            f"${ALGORITHM}$v={SUPPORTED_VERSION}"
            f"$m={self.memory_cost},t={self.time_cost},p={self.parallelism}"
            f"${_encode_base64(self.salt)}${_encode_base64(self.hashed)}"
        )

    def compare(self, candidate: str) -> bool:
        """Return whether ``candidate`` hashes to the stored key, in constant time."""

        if self.salt is None or self.hashed is None:
            return False

        try:
            derived = _derive(
                candidate,
                salt=self.salt,
                time_cost=self.time_cost,
                memory_cost=self.memory_cost,
                parallelism=self.parallelism,
                key_length=self.key_length,
            )
        except (HashingError, OverflowError):
            return False

        return hmac.compare_digest(self.hashed, derived)

    def __str__(self) -> str:
        return self.render()


def _derive(
    plaintext: str,
    *,
    salt: bytes,
    time_cost: int,
    memory_cost: int,
    parallelism: int,
    key_length: int,
) -> bytes:
    return hash_secret_raw(
        secret=plaintext.encode("utf-8", "surrogatepass"),
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_length,
        type=Type.ID,
        version=SUPPORTED_VERSION,
    )


def _check_cost(name: str, value: int, upper_bound: int) -> None:
    if not 0 < value <= upper_bound:
        raise HashDecodeError(
            field="parameters",
            reason=f"{name} must be between 1 and {upper_bound}, got {value}",
        )


def _encode_base64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _decode_base64(value: str, *, name: str) -> bytes:
    if "=" in value:
        raise HashDecodeError(field=name, reason="padding is not allowed")

    try:
        return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)
    except ValueError as error:
        raise HashDecodeError(field=name, reason=str(error)) from error
