from abc import ABC, abstractmethod

from app.analysis.models import AnalysisResult


class BaseAnalysisClient(ABC):
    """Contract for all analysis engine adapters."""

    @abstractmethod
    def extract_text(self, file_bytes: bytes, file_name: str) -> str:
        """Extract plain text from an uploaded document.

        Args:
            file_bytes: Raw file content.
            file_name: Original file name, used by the engine to detect the format.

        Returns:
            The extracted text, possibly empty.

        Raises:
            RemoteAnalysisError: on non-success response or transport failure.
            MalformedResponseError: if a success response cannot be decoded.
        """

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        """Score a job posting for bias and clarity and propose a rewrite.

        Raises:
            RemoteAnalysisError: on non-success response or transport failure.
            MalformedResponseError: if a success response cannot be decoded.
        """

    def close(self) -> None:
        """Release resources held by the adapter. No-op by default."""
