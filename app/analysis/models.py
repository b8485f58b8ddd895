from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Issue:
    """A flagged problem in the job posting."""

    type: str = ""  # e.g. "Gender", "Age"
    text: str = ""
    severity: str = ""  # "Low", "Medium", "High"
    explanation: str = ""


@dataclass(frozen=True)
class Suggestion:
    """A proposed rewrite of a fragment of the posting."""

    original: str = ""
    improved: str = ""
    rationale: str = ""
    category: str = ""  # "Bias", "Clarity", "SEO"


@dataclass(frozen=True)
class AnalysisResult:
    """Output of the analysis engine.

    ``payload`` is the response body exactly as received; it is what gets
    persisted and returned to callers.
    """

    bias_score: float = 0.0
    inclusivity_score: float = 0.0
    clarity_score: float = 0.0
    improved_text: str = ""
    issues: list[Issue] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    seo_keywords: list[str] = field(default_factory=list)
    payload: dict[str, Any] = field(default_factory=dict, compare=False)
