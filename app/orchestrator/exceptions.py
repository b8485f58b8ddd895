class JobAnalysisError(Exception):
    """Base exception for all job analysis pipeline errors."""


class ValidationError(JobAnalysisError):
    """Raised when caller input fails a rule before any remote or storage call."""


class EmptyInputError(ValidationError):
    """Raised when submitted text is empty or whitespace only."""


class EmptyExtractionError(JobAnalysisError):
    """Raised when no text could be extracted from an uploaded file."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"No text could be extracted from the file {file_name}")
        self.file_name = file_name


class TooShortError(JobAnalysisError):
    """Raised when the text to analyze is below the minimum length."""

    def __init__(self, message: str, length: int) -> None:
        super().__init__(message)
        self.length = length


class StorageError(JobAnalysisError):
    """Raised when persistence or a file-system operation fails."""


class NotFoundError(JobAnalysisError):
    """Raised when a requested job or stored file does not exist."""
