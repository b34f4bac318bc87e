"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from password_hash.domain.hash_parameters import (
    MAX_PARALLELISM,
    MIN_KEY_LENGTH,
    MIN_MEMORY_PER_LANE_KIB,
    MIN_SALT_LENGTH,
    HashParameters,
)

PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven Argon2id cost settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    argon2_time_cost: PositiveInt = Field(default=3, validation_alias="ARGON2_TIME_COST")
    argon2_memory_cost: PositiveInt = Field(
        default=64 * 1024,
        validation_alias="ARGON2_MEMORY_COST",
    )
    argon2_parallelism: Annotated[int, Field(gt=0, le=MAX_PARALLELISM)] = Field(
        default=2,
        validation_alias="ARGON2_PARALLELISM",
    )
    argon2_key_length: Annotated[int, Field(ge=MIN_KEY_LENGTH)] = Field(
        default=32,
        validation_alias="ARGON2_KEY_LENGTH",
    )
    argon2_salt_length: Annotated[int, Field(ge=MIN_SALT_LENGTH)] = Field(
        default=16,
        validation_alias="ARGON2_SALT_LENGTH",
    )

    @model_validator(mode="after")
    def _check_memory_per_lane(self) -> "Settings":
        if self.argon2_memory_cost < MIN_MEMORY_PER_LANE_KIB * self.argon2_parallelism:
            raise ValueError(
                f"ARGON2_MEMORY_COST must be at least {MIN_MEMORY_PER_LANE_KIB} KiB per lane"
            )
        return self

    def hash_parameters(self) -> HashParameters:
        """Return cost parameters for freshly created hashes."""

        return HashParameters(
            time_cost=self.argon2_time_cost,
            memory_cost=self.argon2_memory_cost,
            parallelism=self.argon2_parallelism,
            key_length=self.argon2_key_length,
            salt_length=self.argon2_salt_length,
        )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
