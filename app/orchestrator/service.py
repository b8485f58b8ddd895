from app.analysis.base import BaseAnalysisClient
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.orchestrator.exceptions import StorageError
from app.orchestrator.models import JobResponse, UploadedFile
from app.orchestrator.pipeline import Pipeline, PipelineContext
from app.orchestrator.steps import (
    AnalyzeStep,
    DiscardStoredFileStep,
    ExtractTextStep,
    PersistJobStep,
    ReadUploadStep,
    RequireExtractedTextStep,
    RequireInputTextStep,
    StoreUploadStep,
)
from app.storage.file_store import FileStore

DIRECT_INPUT_LABEL = "Direct Input"


class JobAnalysisService:
    """Orchestrates job description analysis and access to stored results.

    File pipeline: read -> store -> extract -> length gate -> analyze -> persist.
    Text pipeline: length gate -> analyze -> persist.
    Nothing is retried; every failure is logged and re-raised unchanged.
    """

    def __init__(
        self,
        *,
        job_repo: JobRepository,
        file_store: FileStore,
        file_pipeline: Pipeline,
        text_pipeline: Pipeline,
    ) -> None:
        self._job_repo = job_repo
        self._file_store = file_store
        self._file_pipeline = file_pipeline
        self._text_pipeline = text_pipeline

    def analyze_from_file(self, upload: UploadedFile, submitter_identity: str) -> JobResponse:
        Log.info(f"Analyzing uploaded file {upload.file_name} for {submitter_identity}")
        context = PipelineContext(
            operation="analyze_from_file",
            submitter_identity=submitter_identity,
            source_label=upload.file_name,
            upload=upload,
        )
        context = self._file_pipeline.run(context)
        return self._finish(context)

    def analyze_from_text(
        self,
        text: str,
        submitter_identity: str,
        title: str | None = None,
    ) -> JobResponse:
        Log.info(f"Analyzing text with length {len(text)} for {submitter_identity}")
        context = PipelineContext(
            operation="analyze_from_text",
            submitter_identity=submitter_identity,
            source_label=title if title and title.strip() else DIRECT_INPUT_LABEL,
            text=text,
        )
        context = self._text_pipeline.run(context)
        return self._finish(context)

    def get_job(self, job_id: str) -> JobResponse | None:
        try:
            record = self._job_repo.get_by_id(job_id)
        except StorageError as exc:
            Log.error(f"get_job failed for {job_id}: {exc}")
            raise
        if record is None:
            Log.warning(f"Job not found: {job_id}")
            return None
        return self.to_response(record)

    def list_jobs(self, skip: int = 0, limit: int = 20) -> list[JobResponse]:
        try:
            records = self._job_repo.list_page(skip, limit)
        except StorageError as exc:
            Log.error(f"list_jobs failed (skip={skip}, limit={limit}): {exc}")
            raise
        return [self.to_response(record) for record in records]

    def list_jobs_by_submitter(self, submitter_identity: str) -> list[JobResponse]:
        try:
            records = self._job_repo.list_by_submitter(submitter_identity)
        except StorageError as exc:
            Log.error(f"list_jobs_by_submitter failed for {submitter_identity}: {exc}")
            raise
        Log.info(f"Retrieved {len(records)} jobs for {submitter_identity}")
        return [self.to_response(record) for record in records]

    def delete_job(self, job_id: str) -> bool:
        try:
            deleted = self._job_repo.delete_by_id(job_id)
        except StorageError as exc:
            Log.error(f"delete_job failed for {job_id}: {exc}")
            raise
        if deleted:
            Log.info(f"Job deleted: {job_id}")
        else:
            Log.warning(f"Job not found for deletion: {job_id}")
        return deleted

    def to_response(self, record: JobRecord) -> JobResponse:
        return JobResponse(
            id=record.id,
            original_text=record.original_text,
            improved_text=record.improved_text,
            submitter_identity=record.submitter_identity,
            analysis=record.analysis,
            created_at=record.created_at,
            source_label=record.source_label,
            original_file_name=record.original_file_name,
            content_type=record.content_type,
            file_size=record.file_size,
            file_url=(
                self._file_store.url_for(record.stored_file_name)
                if record.stored_file_name
                else None
            ),
        )

    def _finish(self, context: PipelineContext) -> JobResponse:
        if context.record is None:
            raise RuntimeError(f"{context.operation} finished without a persisted job")
        return self.to_response(context.record)


def build_job_service(
    *,
    job_repo: JobRepository,
    file_store: FileStore,
    analysis_client: BaseAnalysisClient,
) -> JobAnalysisService:
    """Wire both analysis pipelines around the given collaborators."""
    file_pipeline = Pipeline(
        steps=[
            ReadUploadStep(),
            StoreUploadStep(file_store),
            ExtractTextStep(analysis_client),
            RequireExtractedTextStep(),
            AnalyzeStep(analysis_client),
            PersistJobStep(job_repo),
        ],
        failed_step=DiscardStoredFileStep(file_store),
    )
    text_pipeline = Pipeline(
        steps=[
            RequireInputTextStep(),
            AnalyzeStep(analysis_client),
            PersistJobStep(job_repo),
        ],
    )
    return JobAnalysisService(
        job_repo=job_repo,
        file_store=file_store,
        file_pipeline=file_pipeline,
        text_pipeline=text_pipeline,
    )
