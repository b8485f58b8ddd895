from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.orchestrator.models import JobResponse


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(CamelModel):
    """Body of a direct text submission. Presence checks happen in the route."""

    text: str | None = None
    user_email: str | None = None
    job_title: str | None = None


class JobResponseModel(CamelModel):
    id: str
    original_text: str
    improved_text: str
    user_email: str
    analysis: dict[str, Any] | None = None
    created_at: datetime
    file_name: str
    original_file_name: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    file_url: str | None = None

    @classmethod
    def from_job(cls, job: JobResponse) -> "JobResponseModel":
        return cls(
            id=job.id,
            original_text=job.original_text,
            improved_text=job.improved_text,
            user_email=job.submitter_identity,
            analysis=job.analysis,
            created_at=job.created_at,
            file_name=job.source_label,
            original_file_name=job.original_file_name,
            content_type=job.content_type,
            file_size=job.file_size,
            file_url=job.file_url,
        )


class DeleteJobResponse(BaseModel):
    message: str
    id: str


class ErrorResponse(BaseModel):
    error: bool = True
    message: str
    type: str
    status_code: int
    timestamp: datetime
