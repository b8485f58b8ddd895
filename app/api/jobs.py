from pathlib import Path, PurePath

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.api.dependencies import get_job_service, get_settings, is_email_shaped
from app.api.schemas import AnalyzeRequest, DeleteJobResponse, JobResponseModel
from app.config.settings import Settings
from app.logging.logger import Log
from app.orchestrator.exceptions import NotFoundError, ValidationError
from app.orchestrator.models import UploadedFile
from app.orchestrator.service import JobAnalysisService
from app.validation import text_quality

router = APIRouter(prefix="/jobs", tags=["jobs"])

MAX_PAGE_SIZE = 100


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    stream = upload.file
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    return size


@router.post("/upload", response_model=JobResponseModel)
def upload_file(
    file: UploadFile | None = File(default=None),
    user_email: str | None = Form(default=None, alias="userEmail"),
    settings: Settings = Depends(get_settings),
    service: JobAnalysisService = Depends(get_job_service),
) -> JobResponseModel:
    """Accept a job description document and run it through analysis."""
    if file is None or not file.filename or _upload_size(file) == 0:
        raise ValidationError("No file uploaded")
    if not user_email or not user_email.strip():
        raise ValidationError("User email is required")
    if not is_email_shaped(user_email):
        raise ValidationError("Invalid email format")

    file_name = Path(file.filename).name
    extension = PurePath(file_name).suffix.lower()
    if extension not in settings.allowed_extensions:
        raise ValidationError(
            f"Invalid file type. Allowed types are: {', '.join(settings.allowed_extensions)}"
        )
    if _upload_size(file) > settings.max_upload_size_bytes:
        raise ValidationError(
            f"File size too large. Maximum allowed size is {settings.max_upload_size_mb}MB."
        )

    Log.info(f"Upload received: {file_name} from {user_email}")
    try:
        job = service.analyze_from_file(
            UploadedFile(file_name=file_name, stream=file.file, content_type=file.content_type),
            user_email,
        )
    finally:
        file.file.close()
    return JobResponseModel.from_job(job)


@router.post("/analyze", response_model=JobResponseModel)
def analyze_text(
    request: AnalyzeRequest,
    service: JobAnalysisService = Depends(get_job_service),
) -> JobResponseModel:
    """Analyze a pasted job description after the text quality checks pass."""
    if not request.text or not request.text.strip():
        raise ValidationError("Text is required")
    if not request.user_email or not request.user_email.strip():
        raise ValidationError("User email is required")
    if not is_email_shaped(request.user_email):
        raise ValidationError("Invalid email format")

    verdict = text_quality.validate(request.text)
    if not verdict.accepted:
        Log.warning(f"Text rejected for {request.user_email}: {verdict.reason}")
        raise ValidationError(verdict.reason)

    job = service.analyze_from_text(request.text, request.user_email, request.job_title)
    return JobResponseModel.from_job(job)


@router.get("", response_model=list[JobResponseModel])
def list_jobs(
    skip: int = Query(default=0),
    limit: int = Query(default=20),
    service: JobAnalysisService = Depends(get_job_service),
) -> list[JobResponseModel]:
    if skip < 0:
        raise ValidationError("Skip parameter cannot be negative")
    if limit <= 0 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    return [JobResponseModel.from_job(job) for job in service.list_jobs(skip, limit)]


@router.get("/user/{email}", response_model=list[JobResponseModel])
def list_user_jobs(
    email: str,
    service: JobAnalysisService = Depends(get_job_service),
) -> list[JobResponseModel]:
    if not email.strip():
        raise ValidationError("Email is required")
    if not is_email_shaped(email):
        raise ValidationError("Invalid email format")
    return [JobResponseModel.from_job(job) for job in service.list_jobs_by_submitter(email)]


@router.get("/{job_id}", response_model=JobResponseModel)
def get_job(
    job_id: str,
    service: JobAnalysisService = Depends(get_job_service),
) -> JobResponseModel:
    if not job_id.strip():
        raise ValidationError("Job ID is required")
    job = service.get_job(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return JobResponseModel.from_job(job)


@router.delete("/{job_id}", response_model=DeleteJobResponse)
def delete_job(
    job_id: str,
    service: JobAnalysisService = Depends(get_job_service),
) -> DeleteJobResponse:
    if not job_id.strip():
        raise ValidationError("Job ID is required")
    if not service.delete_job(job_id):
        raise NotFoundError(f"Job with ID {job_id} not found")
    return DeleteJobResponse(message="Job deleted successfully", id=job_id)
