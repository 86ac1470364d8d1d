import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from permit_intake.config.settings import Settings
from permit_intake.database.connection import close_pool, get_connection, init_pool
from permit_intake.database.models import BusinessRecord, PermitCatalogEntry


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "permit_intake_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    """A pooled connection whose writes are rolled back after the test."""
    with get_connection() as conn:
        try:
            yield conn
        finally:
            conn.rollback()


@pytest.fixture
def existing_business(db_conn: psycopg.Connection[Any]) -> BusinessRecord:
    row = db_conn.execute(
        "SELECT id, user_id, nombre, rubro_id FROM negocios ORDER BY created_at LIMIT 1"
    ).fetchone()
    if row is None:
        pytest.skip("No negocios rows in DB for integration test setup")
    return BusinessRecord(
        id=str(row[0]),
        user_id=str(row[1]),
        name=row[2],
        category_id=str(row[3]) if row[3] is not None else None,
    )


@pytest.fixture
def catalog_entry(db_conn: psycopg.Connection[Any]) -> PermitCatalogEntry:
    row = db_conn.execute(
        "SELECT id, nombre FROM permisos WHERE nombre = %s LIMIT 1", ("PAT_MUN",)
    ).fetchone()
    if row is None:
        pytest.skip("Permit catalog has no PAT_MUN row")
    return PermitCatalogEntry(id=str(row[0]), code=row[1])
