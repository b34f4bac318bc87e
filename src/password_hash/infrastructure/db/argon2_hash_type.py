"""SQLAlchemy column type and scalar adapters for Argon2 password hashes."""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy.engine import Dialect

from password_hash.domain.errors import PasswordHashError, ScanError
from password_hash.infrastructure.security.argon2_hash import Argon2Hash


def scan_hash(raw: object) -> Argon2Hash:
    """Convert one raw column value into a hash; ``None`` yields the zero value."""

    if raw is None:
        return Argon2Hash()
    if not isinstance(raw, str):
        raise ScanError(f"cannot scan the given value: expected a string, got {type(raw).__name__}")

    try:
        return Argon2Hash.from_encoded(raw)
    except PasswordHashError as error:
        raise ScanError(f"cannot scan due to decode error: {error}") from error


def hash_value(password_hash: Argon2Hash) -> str | None:
    """Convert one hash into its raw column value; the zero value yields ``None``."""

    if not password_hash.is_valid:
        return None
    return password_hash.render()


class Argon2HashType(sa.types.TypeDecorator[Argon2Hash]):
    """Text column holding the canonical encoding of an ``Argon2Hash``."""

    impl = sa.Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if not isinstance(value, Argon2Hash):
            raise TypeError(f"expected Argon2Hash, got {type(value).__name__}")
        return hash_value(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Argon2Hash:
        return scan_hash(value)
