class AnalysisClientError(Exception):
    """Base exception for analysis engine client errors."""


class RemoteAnalysisError(AnalysisClientError):
    """Raised when the analysis engine returns a non-success response or is unreachable.

    Carries the upstream status (None for transport failures) and body verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AnalysisTimeoutError(RemoteAnalysisError):
    """Raised when the analysis engine does not answer within the configured timeout."""


class MalformedResponseError(AnalysisClientError):
    """Raised when the analysis engine reports success with an unusable payload."""
