from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.analysis.models import AnalysisResult
from app.database.models import JobRecord
from app.logging.logger import Log
from app.orchestrator.models import UploadedFile
from app.storage.models import StoredFile


@dataclass(slots=True)
class PipelineContext:
    operation: str
    submitter_identity: str
    source_label: str
    upload: UploadedFile | None = None
    raw_bytes: bytes = b""
    stored_file: StoredFile | None = None
    text: str = ""
    analysis: AnalysisResult | None = None
    record: JobRecord | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class Pipeline:
    """Runs steps in order; on failure runs the failure step and re-raises."""

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            Log.error(
                f"{context.operation} failed for '{context.source_label}' "
                f"({context.submitter_identity}): {type(exc).__name__}: {exc}"
            )
            if self._failed_step is not None:
                try:
                    self._failed_step.run(context)
                except Exception as cleanup_exc:
                    Log.warning(
                        f"Cleanup after failed {context.operation} did not complete: "
                        f"{type(cleanup_exc).__name__}: {cleanup_exc}"
                    )
            raise
        return context
