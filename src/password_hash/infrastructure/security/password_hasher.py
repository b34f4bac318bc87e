"""Argon2id password hasher adapter."""

from __future__ import annotations

import logging

from password_hash.application.ports.password_hasher_port import PasswordHasherPort
from password_hash.config.settings import Settings
from password_hash.domain.errors import PasswordHashError
from password_hash.domain.hash_parameters import DEFAULT_HASH_PARAMETERS, HashParameters
from password_hash.infrastructure.security.argon2_hash import Argon2Hash

logger = logging.getLogger(__name__)


class Argon2PasswordHasher(PasswordHasherPort):
    """Password hashing adapter storing Argon2id hashes as encoded strings."""

    def __init__(self, parameters: HashParameters | None = None) -> None:
        self._parameters = parameters or DEFAULT_HASH_PARAMETERS

    @classmethod
    def from_settings(cls, settings: Settings) -> Argon2PasswordHasher:
        return cls(settings.hash_parameters())

    def hash_password(self, password: str) -> str:
        return Argon2Hash.create(password, parameters=self._parameters).render()

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            stored = Argon2Hash.from_encoded(password_hash)
        except PasswordHashError as error:
            logger.warning("stored password hash could not be parsed: %s", error)
            return False
        return stored.compare(password)

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            stored = Argon2Hash.from_encoded(password_hash)
        except PasswordHashError:
            return True
        return (
            stored.time_cost != self._parameters.time_cost
            or stored.memory_cost != self._parameters.memory_cost
            or stored.parallelism != self._parameters.parallelism
            or stored.key_length != self._parameters.key_length
        )
