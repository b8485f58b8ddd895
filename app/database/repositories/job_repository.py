import uuid
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import Database
from app.database.models import JobDraft, JobRecord
from app.orchestrator.exceptions import StorageError

_COLUMNS = """
    id, submitter_identity, original_text, improved_text, source_label,
    created_at, analysis, original_file_name, stored_file_name,
    content_type, file_size
"""

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS job_descriptions (
        id UUID PRIMARY KEY,
        submitter_identity TEXT NOT NULL,
        original_text TEXT NOT NULL,
        improved_text TEXT NOT NULL DEFAULT '',
        source_label TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL,
        analysis JSONB,
        original_file_name TEXT,
        stored_file_name TEXT,
        content_type TEXT,
        file_size BIGINT
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS job_descriptions_created_at_idx
    ON job_descriptions (created_at DESC)
    """,
    """
    CREATE INDEX IF NOT EXISTS job_descriptions_submitter_idx
    ON job_descriptions (submitter_identity, created_at DESC)
    """,
)


@contextmanager
def _storage_errors(operation: str) -> Generator[None, None, None]:
    try:
        yield
    except psycopg.Error as exc:
        raise StorageError(f"Database error during {operation}: {exc}") from exc


def _parse_id(job_id: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(job_id))
    except ValueError:
        return None


def _row_to_record(row: dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=str(row["id"]),
        submitter_identity=row["submitter_identity"],
        original_text=row["original_text"],
        improved_text=row["improved_text"],
        source_label=row["source_label"],
        created_at=row["created_at"],
        analysis=row["analysis"],
        original_file_name=row["original_file_name"],
        stored_file_name=row["stored_file_name"],
        content_type=row["content_type"],
        file_size=row["file_size"],
    )


class JobRepository:
    """Database operations for the job_descriptions table.

    Every method may raise StorageError. No input validation happens here.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def ensure_schema(self) -> None:
        """Create the job_descriptions table and indexes if they are missing."""
        with _storage_errors("ensure_schema"):
            with self._database.connection() as conn:
                for statement in _SCHEMA:
                    conn.execute(statement)
                conn.commit()

    def create(self, draft: JobDraft) -> JobRecord:
        """Insert a new job and return it with its assigned id."""
        record = JobRecord(id=str(uuid.uuid4()), **asdict(draft))
        with _storage_errors("create"):
            with self._database.connection() as conn:
                conn.execute(
                    f"""
                    INSERT INTO job_descriptions ({_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        record.id,
                        record.submitter_identity,
                        record.original_text,
                        record.improved_text,
                        record.source_label,
                        record.created_at,
                        Jsonb(record.analysis) if record.analysis is not None else None,
                        record.original_file_name,
                        record.stored_file_name,
                        record.content_type,
                        record.file_size,
                    ),
                )
                conn.commit()
        return record

    def get_by_id(self, job_id: str) -> JobRecord | None:
        parsed = _parse_id(job_id)
        if parsed is None:
            return None
        with _storage_errors("get_by_id"):
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM job_descriptions WHERE id = %s",
                        (parsed,),
                    )
                    row = cur.fetchone()
        if row is None:
            return None
        return _row_to_record(row)

    def list_page(self, skip: int, limit: int) -> list[JobRecord]:
        """Return one page of jobs, newest first."""
        with _storage_errors("list_page"):
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM job_descriptions
                        ORDER BY created_at DESC
                        OFFSET %s LIMIT %s
                        """,
                        (skip, limit),
                    )
                    rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def list_by_submitter(self, submitter_identity: str) -> list[JobRecord]:
        """Return every job of one submitter, newest first."""
        with _storage_errors("list_by_submitter"):
            with self._database.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM job_descriptions
                        WHERE submitter_identity = %s
                        ORDER BY created_at DESC
                        """,
                        (submitter_identity,),
                    )
                    rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def update(self, record: JobRecord) -> bool:
        """Replace the stored content of an existing job. Returns False if absent."""
        parsed = _parse_id(record.id)
        if parsed is None:
            return False
        with _storage_errors("update"):
            with self._database.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE job_descriptions
                        SET original_text = %s,
                            improved_text = %s,
                            source_label = %s,
                            analysis = %s
                        WHERE id = %s
                        """,
                        (
                            record.original_text,
                            record.improved_text,
                            record.source_label,
                            Jsonb(record.analysis) if record.analysis is not None else None,
                            parsed,
                        ),
                    )
                    updated = cur.rowcount > 0
                conn.commit()
        return updated

    def delete_by_id(self, job_id: str) -> bool:
        parsed = _parse_id(job_id)
        if parsed is None:
            return False
        with _storage_errors("delete_by_id"):
            with self._database.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM job_descriptions WHERE id = %s", (parsed,))
                    deleted = cur.rowcount > 0
                conn.commit()
        return deleted
