from datetime import datetime, timezone

from app.analysis.base import BaseAnalysisClient
from app.database.models import JobDraft
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.orchestrator.exceptions import (
    EmptyExtractionError,
    EmptyInputError,
    StorageError,
    TooShortError,
)
from app.orchestrator.pipeline import PipelineContext, PipelineStep
from app.storage.file_store import FileStore
from app.validation.text_quality import MIN_LENGTH


class ReadUploadStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before reading")
        try:
            context.raw_bytes = context.upload.stream.read()
        except (OSError, ValueError) as exc:
            raise StorageError(
                f"Unable to read uploaded file {context.upload.file_name}: {exc}"
            ) from exc
        Log.info(f"Read {len(context.raw_bytes)} bytes from {context.upload.file_name}")
        return context


class StoreUploadStep(PipelineStep):
    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before storing")
        context.stored_file = self._file_store.save(
            context.raw_bytes,
            context.submitter_identity,
            context.upload.file_name,
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, analysis_client: BaseAnalysisClient) -> None:
        self._analysis_client = analysis_client

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before extraction")
        context.text = self._analysis_client.extract_text(
            context.raw_bytes,
            context.upload.file_name,
        )
        Log.info(f"Extracted {len(context.text)} chars from {context.upload.file_name}")
        return context


class RequireExtractedTextStep(PipelineStep):
    """Length gate for the upload path. The full text validator is not applied here."""

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.text or not context.text.strip():
            raise EmptyExtractionError(context.source_label)
        length = len(context.text.strip())
        if length < MIN_LENGTH:
            raise TooShortError(
                f"The extracted text is too short ({length} characters). "
                f"Job descriptions must be at least {MIN_LENGTH} characters long.",
                length,
            )
        preview = context.text if len(context.text) <= 200 else context.text[:200] + "..."
        Log.debug(f"Extracted text preview: {preview}")
        return context


class RequireInputTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.text or not context.text.strip():
            raise EmptyInputError("Text cannot be empty or whitespace")
        length = len(context.text.strip())
        if length < MIN_LENGTH:
            raise TooShortError(
                f"Job description text must be at least {MIN_LENGTH} characters long. "
                f"Current length: {length} characters",
                length,
            )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analysis_client: BaseAnalysisClient) -> None:
        self._analysis_client = analysis_client

    def run(self, context: PipelineContext) -> PipelineContext:
        context.analysis = self._analysis_client.analyze(context.text)
        Log.info(
            f"Analysis completed for '{context.source_label}': "
            f"improved text {len(context.analysis.improved_text)} chars, "
            f"{len(context.analysis.suggestions)} suggestions"
        )
        return context


class PersistJobStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before persist")
        stored = context.stored_file
        draft = JobDraft(
            submitter_identity=context.submitter_identity,
            original_text=context.text,
            improved_text=context.analysis.improved_text or "",
            source_label=context.source_label,
            created_at=datetime.now(timezone.utc),
            analysis=context.analysis.payload,
            original_file_name=context.upload.file_name if stored and context.upload else None,
            stored_file_name=stored.stored_name if stored else None,
            content_type=stored.content_type if stored else None,
            file_size=stored.size if stored else None,
        )
        context.record = self._job_repo.create(draft)
        Log.info(f"Job {context.record.id} saved for {context.submitter_identity}")
        return context


class DiscardStoredFileStep(PipelineStep):
    """Removes the upload of a failed run. Never masks the original failure."""

    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.stored_file is None:
            return context
        stored_name = context.stored_file.stored_name
        try:
            self._file_store.delete(stored_name)
        except StorageError as exc:
            Log.warning(
                f"Could not discard stored file {stored_name} "
                f"(run failed: {context.error_message}): {exc}"
            )
        else:
            Log.info(f"Discarded stored file {stored_name}: {context.error_message}")
            context.stored_file = None
        return context
