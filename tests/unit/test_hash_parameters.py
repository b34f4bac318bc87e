from __future__ import annotations

import pytest

from password_hash.domain.hash_parameters import DEFAULT_HASH_PARAMETERS, HashParameters


def test_defaults_match_production_costs() -> None:
    assert DEFAULT_HASH_PARAMETERS == HashParameters(
        time_cost=3,
        memory_cost=65536,
        parallelism=2,
        key_length=32,
        salt_length=16,
    )


@pytest.mark.parametrize(
    "overrides",
    [
        {"time_cost": 0},
        {"memory_cost": -1},
        {"parallelism": 0},
        {"key_length": 0},
        {"salt_length": 0},
        {"time_cost": True},
        {"memory_cost": 15, "parallelism": 2},
        {"salt_length": 4},
        {"key_length": 2},
        {"parallelism": 256},
    ],
)
def test_invalid_parameters_raise_value_error(overrides: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        HashParameters(**overrides)
