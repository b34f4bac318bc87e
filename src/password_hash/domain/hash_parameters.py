"""Argon2id cost parameters with production defaults."""

from __future__ import annotations

from dataclasses import dataclass

# Lower bounds enforced by the Argon2 reference implementation.
MIN_MEMORY_PER_LANE_KIB = 8
MIN_SALT_LENGTH = 8
MIN_KEY_LENGTH = 4

# Encoded hashes carry parallelism as an 8-bit lane count.
MAX_PARALLELISM = 255


@dataclass(frozen=True)
class HashParameters:
    """Cost parameters applied when deriving a fresh hash.

    Production code uses ``DEFAULT_HASH_PARAMETERS``. Tests may inject cheaper
    values to keep key derivation fast; parsed hashes always carry their own
    parameters and never consult this record.
    """

    time_cost: int = 3
    memory_cost: int = 64 * 1024
    parallelism: int = 2
    key_length: int = 32
    salt_length: int = 16

    def __post_init__(self) -> None:
        for name in ("time_cost", "memory_cost", "parallelism", "key_length", "salt_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer")
        if self.memory_cost < MIN_MEMORY_PER_LANE_KIB * self.parallelism:
            raise ValueError(
                f"memory_cost must be at least {MIN_MEMORY_PER_LANE_KIB} KiB per lane"
            )
        if self.parallelism > MAX_PARALLELISM:
            raise ValueError(f"parallelism must be at most {MAX_PARALLELISM}")
        if self.salt_length < MIN_SALT_LENGTH:
            raise ValueError(f"salt_length must be at least {MIN_SALT_LENGTH} bytes")
        if self.key_length < MIN_KEY_LENGTH:
            raise ValueError(f"key_length must be at least {MIN_KEY_LENGTH} bytes")


DEFAULT_HASH_PARAMETERS = HashParameters()
