"""Validates a decoded analysis engine response and builds an AnalysisResult."""

from typing import Any

from app.analysis.exceptions import MalformedResponseError
from app.analysis.models import AnalysisResult, Issue, Suggestion

_SCORE_FIELDS = ("bias_score", "inclusivity_score", "clarity_score")
_ISSUE_FIELDS = ("type", "text", "severity", "explanation")
_SUGGESTION_FIELDS = ("original", "improved", "rationale", "category")


def validate_and_build(data: Any) -> AnalysisResult:
    """Build an AnalysisResult from the engine's decoded JSON.

    Keys match case-insensitively. Missing fields fall back to empty defaults;
    present fields of the wrong type are rejected.

    Raises:
        MalformedResponseError: if the payload does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Analysis response must be a JSON object")
    fields = _fold_keys(data)
    scores = {name: _build_score(fields.get(name), name) for name in _SCORE_FIELDS}
    return AnalysisResult(
        **scores,
        improved_text=_build_string(fields.get("improved_text"), "improved_text"),
        issues=[_build_issue(item, i) for i, item in enumerate(_build_list(fields, "issues"))],
        suggestions=[
            _build_suggestion(item, i)
            for i, item in enumerate(_build_list(fields, "suggestions"))
        ],
        seo_keywords=_build_keywords(_build_list(fields, "seo_keywords")),
        payload=data,
    )


def _fold_keys(raw: dict[str, Any]) -> dict[str, Any]:
    return {key.lower(): value for key, value in raw.items()}


def _build_score(raw: Any, name: str) -> float:
    if raw is None:
        return 0.0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedResponseError(f"'{name}' must be a number, got {raw!r}")
    return float(raw)


def _build_string(raw: Any, name: str) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise MalformedResponseError(f"'{name}' must be a string")
    return raw


def _build_list(data: dict[str, Any], name: str) -> list[Any]:
    raw = data.get(name)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedResponseError(f"'{name}' must be a list")
    return raw


def _build_fields(raw: Any, kind: str, index: int, fields: tuple[str, ...]) -> dict[str, str]:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"{kind} at index {index} must be an object")
    item = _fold_keys(raw)
    return {
        name: _build_string(item.get(name), f"{kind.lower()}s[{index}].{name}")
        for name in fields
    }


def _build_issue(raw: Any, index: int) -> Issue:
    return Issue(**_build_fields(raw, "Issue", index, _ISSUE_FIELDS))


def _build_suggestion(raw: Any, index: int) -> Suggestion:
    return Suggestion(**_build_fields(raw, "Suggestion", index, _SUGGESTION_FIELDS))


def _build_keywords(raw: list[Any]) -> list[str]:
    for i, keyword in enumerate(raw):
        if not isinstance(keyword, str):
            raise MalformedResponseError(f"'seo_keywords[{i}]' must be a string")
    return list(raw)
