"""Secure random byte source backed by the operating system CSPRNG."""

from __future__ import annotations

import secrets

from password_hash.domain.errors import RandomSourceError


def secure_random_bytes(size: int) -> bytes:
    """Return ``size`` cryptographically secure random bytes or raise RandomSourceError."""

    if size <= 0:
        raise ValueError("size must be positive")

    try:
        return secrets.token_bytes(size)
    except (OSError, NotImplementedError) as error:
        raise RandomSourceError("failed to generate random bytes") from error
