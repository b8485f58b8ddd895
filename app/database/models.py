from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class JobDraft:
    """A job ready to be inserted; the repository assigns its id."""

    submitter_identity: str
    original_text: str
    improved_text: str
    source_label: str
    created_at: datetime
    analysis: dict[str, Any] | None = None
    original_file_name: str | None = None
    stored_file_name: str | None = None
    content_type: str | None = None
    file_size: int | None = None


@dataclass(frozen=True)
class JobRecord:
    """Represents a row from the job_descriptions table.

    Rows are written once and never updated by the analysis workflows.
    File metadata is only present for jobs that originated from an upload.
    """

    id: str
    submitter_identity: str
    original_text: str
    improved_text: str
    source_label: str
    created_at: datetime
    analysis: dict[str, Any] | None = None
    original_file_name: str | None = None
    stored_file_name: str | None = None
    content_type: str | None = None
    file_size: int | None = None
