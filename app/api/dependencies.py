from fastapi import Request

from app.config.settings import Settings
from app.orchestrator.service import JobAnalysisService
from app.storage.file_store import FileStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_job_service(request: Request) -> JobAnalysisService:
    return request.app.state.job_service


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


def is_email_shaped(value: str | None) -> bool:
    """Loose shape check: an '@' and a '.' somewhere in the value."""
    return bool(value) and "@" in value and "." in value
