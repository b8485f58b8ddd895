import json
from typing import Any

import httpx

from app.analysis.base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisTimeoutError,
    MalformedResponseError,
    RemoteAnalysisError,
)
from app.analysis.models import AnalysisResult
from app.analysis.validator import validate_and_build
from app.logging.logger import Log


class HttpAnalysisClient(BaseAnalysisClient):
    """Analysis engine adapter speaking the engine's HTTP API.

    Endpoints: ``POST /extract`` (multipart ``file``) and ``POST /analyze``
    (JSON ``{"text": ...}``). Every call is made exactly once.
    """

    EXTRACT_PATH = "/extract"
    ANALYZE_PATH = "/analyze"

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def extract_text(self, file_bytes: bytes, file_name: str) -> str:
        response = self._post(
            self.EXTRACT_PATH,
            f"text extraction for {file_name}",
            files={"file": (file_name, file_bytes)},
        )
        parsed = self._parse_json(response)
        if isinstance(parsed, str):
            return parsed
        if isinstance(parsed, dict) and isinstance(parsed.get("text"), str):
            return parsed["text"]
        raise MalformedResponseError(
            "Extraction response must be a JSON string or an object with a 'text' string"
        )

    def analyze(self, text: str) -> AnalysisResult:
        Log.info(f"Requesting analysis for {len(text)} chars")
        response = self._post(self.ANALYZE_PATH, "text analysis", json={"text": text})
        result = validate_and_build(self._parse_json(response))
        Log.info(
            f"Analysis received: {len(result.issues)} issues, "
            f"{len(result.suggestions)} suggestions"
        )
        return result

    def _post(self, path: str, operation: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.post(path, **kwargs)
        except httpx.TimeoutException as exc:
            raise AnalysisTimeoutError(
                f"Analysis engine timed out during {operation}: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteAnalysisError(
                f"Analysis engine unreachable during {operation}: {exc}",
                body=str(exc),
            ) from exc

        if not response.is_success:
            Log.error(
                f"Analysis engine returned {response.status_code} during {operation}: "
                f"{response.text}"
            )
            raise RemoteAnalysisError(
                f"Analysis engine error {response.status_code} during {operation}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"Invalid JSON response: {exc}") from exc
