from dataclasses import dataclass
from datetime import datetime
from typing import Any, BinaryIO


@dataclass(frozen=True)
class UploadedFile:
    """An incoming upload as handed over by the HTTP boundary."""

    file_name: str
    stream: BinaryIO
    content_type: str | None = None


@dataclass(frozen=True)
class JobResponse:
    """Caller-facing view of a persisted job."""

    id: str
    original_text: str
    improved_text: str
    submitter_identity: str
    analysis: dict[str, Any] | None
    created_at: datetime
    source_label: str
    original_file_name: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    file_url: str | None = None
