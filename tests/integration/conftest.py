import os
from collections.abc import Generator

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import Database
from app.database.repositories.job_repository import JobRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "jd_analysis_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_database(test_settings: Settings) -> Generator[Database, None, None]:
    database = Database.from_settings(test_settings)
    try:
        database.open()
        JobRepository(database).ensure_schema()
    except (psycopg.Error, OSError) as e:
        database.close()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars.")
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def job_repo(integration_database: Database) -> JobRepository:
    return JobRepository(integration_database)


@pytest.fixture
def integration_cleanup(
    integration_database: Database,
) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with integration_database.connection() as conn:
        with conn.cursor() as cur:
            for job_id in cleanup:
                cur.execute("DELETE FROM job_descriptions WHERE id = %s", (job_id,))
        conn.commit()
