import json
from collections.abc import Callable

import httpx
import pytest

from app.analysis.exceptions import (
    AnalysisTimeoutError,
    MalformedResponseError,
    RemoteAnalysisError,
)
from app.analysis.http_client_adapter import HttpAnalysisClient


def _make_client(handler: Callable[[httpx.Request], httpx.Response]) -> HttpAnalysisClient:
    http_client = httpx.Client(
        transport=httpx.MockTransport(handler),
        base_url="http://engine.test",
    )
    return HttpAnalysisClient(
        base_url="http://engine.test",
        timeout_seconds=5,
        http_client=http_client,
    )


class TestExtractText:
    def test_posts_file_as_multipart(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json="Extracted posting text")

        client = _make_client(handler)
        result = client.extract_text(b"%PDF-fake", "posting.pdf")

        assert result == "Extracted posting text"
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/extract"
        assert b'name="file"; filename="posting.pdf"' in seen[0].content
        assert b"%PDF-fake" in seen[0].content

    def test_accepts_object_with_text_field(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, json={"text": "From object"}))

        assert client.extract_text(b"data", "posting.txt") == "From object"

    def test_empty_string_is_returned_as_is(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, json=""))

        assert client.extract_text(b"data", "posting.txt") == ""

    def test_object_without_text_is_malformed(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, json={"content": "x"}))

        with pytest.raises(MalformedResponseError):
            client.extract_text(b"data", "posting.txt")

    def test_non_success_raises_remote_error_with_status_and_body(self) -> None:
        client = _make_client(lambda request: httpx.Response(415, text="Unsupported file"))

        with pytest.raises(RemoteAnalysisError) as exc_info:
            client.extract_text(b"data", "posting.doc")

        assert exc_info.value.status_code == 415
        assert exc_info.value.body == "Unsupported file"


class TestAnalyze:
    def test_posts_text_as_json_and_builds_result(self) -> None:
        seen: list[httpx.Request] = []
        body = {
            "bias_score": 0.1,
            "inclusivity_score": 0.9,
            "clarity_score": 0.7,
            "improved_text": "Improved posting",
            "issues": [],
            "suggestions": [],
            "seo_keywords": ["python"],
        }

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=body)

        client = _make_client(handler)
        result = client.analyze("Original posting")

        assert seen[0].url.path == "/analyze"
        assert json.loads(seen[0].content) == {"text": "Original posting"}
        assert result.improved_text == "Improved posting"
        assert result.seo_keywords == ["python"]
        assert result.payload == body

    def test_server_error_raises_remote_error(self) -> None:
        client = _make_client(lambda request: httpx.Response(500, text="engine exploded"))

        with pytest.raises(RemoteAnalysisError) as exc_info:
            client.analyze("text")

        assert not isinstance(exc_info.value, AnalysisTimeoutError)
        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "engine exploded"

    def test_timeout_raises_timeout_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = _make_client(handler)

        with pytest.raises(AnalysisTimeoutError):
            client.analyze("text")

    def test_connection_failure_raises_remote_error_without_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _make_client(handler)

        with pytest.raises(RemoteAnalysisError) as exc_info:
            client.analyze("text")

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.body

    def test_invalid_json_is_malformed(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(MalformedResponseError, match="Invalid JSON response"):
            client.analyze("text")

    def test_wrong_field_type_is_malformed(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, json={"bias_score": "high"}))

        with pytest.raises(MalformedResponseError):
            client.analyze("text")

    def test_calls_engine_exactly_once_on_failure(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="busy")

        client = _make_client(handler)

        with pytest.raises(RemoteAnalysisError):
            client.analyze("text")

        assert len(calls) == 1


class TestClose:
    def test_closes_underlying_client(self) -> None:
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        client = HttpAnalysisClient(
            base_url="http://engine.test",
            timeout_seconds=5,
            http_client=http_client,
        )

        client.close()

        assert http_client.is_closed
