"""Example analysis client adapter.

Use this module as a reference when implementing new engine adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import copy
import io
from pathlib import PurePath
from typing import Any, ClassVar

import pdfplumber

from app.analysis.base import BaseAnalysisClient
from app.analysis.exceptions import RemoteAnalysisError
from app.analysis.models import AnalysisResult
from app.analysis.validator import validate_and_build


class ExampleAnalysisClient(BaseAnalysisClient):
    """Example adapter that works entirely in-process.

    No network calls. Plain text and PDF files are extracted locally, and
    analysis returns a fixed valid result whose improved text is the input.
    Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, Any]] = {
        "bias_score": 0.0,
        "inclusivity_score": 1.0,
        "clarity_score": 1.0,
        "improved_text": "",
        "issues": [],
        "suggestions": [],
        "seo_keywords": [],
    }

    def extract_text(self, file_bytes: bytes, file_name: str) -> str:
        extension = PurePath(file_name).suffix.lower()
        if extension == ".txt":
            return file_bytes.decode("utf-8", errors="ignore")
        if extension == ".pdf":
            return self._extract_pdf(file_bytes)
        raise RemoteAnalysisError(
            f"Unsupported file type for local extraction: {extension or file_name}",
            status_code=415,
            body="Unsupported file type",
        )

    def analyze(self, text: str) -> AnalysisResult:
        payload = copy.deepcopy(self.DEFAULT_RESPONSE)
        payload["improved_text"] = text
        return validate_and_build(payload)

    @staticmethod
    def _extract_pdf(file_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise RemoteAnalysisError(
                f"pdfplumber extraction failed: {exc}",
                status_code=400,
                body="Invalid file format or corrupted file",
            ) from exc
        return "\n".join(pages).strip()
