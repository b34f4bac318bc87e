from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa

from password_hash.domain.errors import ScanError
from password_hash.domain.hash_parameters import HashParameters
from password_hash.infrastructure.db.argon2_hash_type import Argon2HashType
from password_hash.infrastructure.security.argon2_hash import Argon2Hash

FAST_PARAMETERS = HashParameters(time_cost=1, memory_cost=8, parallelism=1)

metadata = sa.MetaData()
credentials = sa.Table(
    "credentials",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True),
    sa.Column("email", sa.Text(), nullable=False),
    sa.Column("password_hash", Argon2HashType(), nullable=True),
)


def _create_engine(tmp_path: Path, filename: str) -> sa.Engine:
    engine = sa.create_engine(f"sqlite+pysqlite:///{tmp_path / filename}")
    metadata.create_all(engine)
    return engine


def test_hash_column_round_trips_and_verifies(tmp_path: Path) -> None:
    engine = _create_engine(tmp_path, "round_trip.db")
    password_hash = Argon2Hash.create("correct horse", parameters=FAST_PARAMETERS)

    with engine.begin() as connection:
        connection.execute(
            sa.insert(credentials).values(id=1, email="a@example.org", password_hash=password_hash)
        )

    with engine.connect() as connection:
        stored = connection.execute(
            sa.select(credentials.c.password_hash).where(credentials.c.id == 1)
        ).scalar_one()
        raw = connection.execute(
            sa.text("SELECT password_hash FROM credentials WHERE id = 1")
        ).scalar_one()

    assert isinstance(stored, Argon2Hash)
    assert stored.render() == password_hash.render()
    assert raw == password_hash.render()
    assert stored.compare("correct horse") is True
    assert stored.compare("wrong") is False


def test_zero_value_is_stored_as_null_and_read_back_as_zero_value(tmp_path: Path) -> None:
    engine = _create_engine(tmp_path, "zero_value.db")

    with engine.begin() as connection:
        connection.execute(
            sa.insert(credentials).values(id=1, email="b@example.org", password_hash=Argon2Hash())
        )

    with engine.connect() as connection:
        raw = connection.execute(
            sa.text("SELECT password_hash FROM credentials WHERE id = 1")
        ).scalar_one()
        stored = connection.execute(
            sa.select(credentials.c.password_hash).where(credentials.c.id == 1)
        ).scalar_one()

    assert raw is None
    assert stored.is_valid is False
    assert stored.render() == ""


def test_malformed_stored_text_raises_scan_error(tmp_path: Path) -> None:
    engine = _create_engine(tmp_path, "malformed.db")

    with engine.begin() as connection:
        connection.execute(
            sa.text(
                "INSERT INTO credentials (id, email, password_hash) "
                "VALUES (:id, :email, :password_hash)"
            ),
            {"id": 1, "email": "c@example.org", "password_hash": "$2b$12$not-argon2"},
        )

    with engine.connect() as connection:
        with pytest.raises(ScanError):
            connection.execute(
                sa.select(credentials.c.password_hash).where(credentials.c.id == 1)
            ).scalar_one()
