import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from docanalyzer.config.settings import Settings
from docanalyzer.database.connection import close_pool, get_connection, init_pool, init_schema


def _db_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docanalyzer_test")
    return Settings(document_store="postgres")


@pytest.fixture(scope="session")
def db_settings() -> Settings:
    return _db_settings()


@pytest.fixture(scope="session")
def integration_pool(db_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(db_settings)
        init_schema()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collect ids of documents created by a test and delete them afterwards."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM documents WHERE id = ANY(%s)", (cleanup,))
        conn.commit()
