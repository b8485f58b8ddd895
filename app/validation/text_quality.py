"""Heuristic gate deciding whether a text blob plausibly is a job description.

Rules run in a fixed order on the trimmed text and the first failing rule
decides the verdict. The order is observable: a borderline input always
receives the message of the earliest rule it breaks.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

MIN_LENGTH = 50

_REPETITION_RE = re.compile(r"(.)\1{5,}")
_NOISE_RE = re.compile(r"[^\w\s.,!?;:()\-'\"/]")
_NON_WORD_RE = re.compile(r"[^\w]")

_MAX_NOISE_RATIO = 0.3
_MIN_MEANINGFUL_WORDS = 10
_MIN_MEANINGFUL_WORD_LENGTH = 3
_MIN_VOWEL_RATIO = 0.2
_VOWELS = frozenset("aeiouAEIOU")

JOB_KEYWORDS: tuple[str, ...] = (
    "job", "position", "role", "responsibilities", "requirements", "experience",
    "skills", "qualifications", "candidate", "work", "team", "company",
    "duties", "tasks", "developer", "manager", "analyst", "engineer", "coordinator",
    "employment", "hiring", "recruit", "apply", "application", "resume", "cv",
    "salary", "benefits", "location", "remote", "office", "department",
)


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of text quality validation. Never persisted."""

    accepted: bool
    reason: str = ""


def _has_min_length(text: str) -> bool:
    return len(text) >= MIN_LENGTH


def _has_no_repetition(text: str) -> bool:
    return _REPETITION_RE.search(text) is None


def _has_low_noise(text: str) -> bool:
    noise = len(_NOISE_RE.findall(text))
    return noise / len(text) <= _MAX_NOISE_RATIO


def _has_substance(text: str) -> bool:
    meaningful = [
        word
        for word in text.split()
        if len(_NON_WORD_RE.sub("", word)) >= _MIN_MEANINGFUL_WORD_LENGTH
    ]
    return len(meaningful) >= _MIN_MEANINGFUL_WORDS


def _is_job_related(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in JOB_KEYWORDS)


def _is_pronounceable(text: str) -> bool:
    vowels = sum(1 for ch in text if ch in _VOWELS)
    consonants = sum(1 for ch in text if ch.isalpha() and ch not in _VOWELS)
    if consonants == 0:
        return True
    return vowels / consonants >= _MIN_VOWEL_RATIO


_Rule = tuple[Callable[[str], bool], Callable[[str], str]]

_RULES: list[_Rule] = [
    (
        _has_min_length,
        lambda text: (
            f"Job description text must be at least {MIN_LENGTH} characters long. "
            f"Current length: {len(text)} characters"
        ),
    ),
    (
        _has_no_repetition,
        lambda _text: (
            "Text contains too many repetitive characters. "
            "Please provide a proper job description."
        ),
    ),
    (
        _has_low_noise,
        lambda _text: (
            "Text contains too many special characters. "
            "Please provide a valid job description."
        ),
    ),
    (
        _has_substance,
        lambda _text: "Please provide a more detailed job description with proper words.",
    ),
    (
        _is_job_related,
        lambda _text: (
            "Text doesn't appear to be a job description. "
            "Please provide a valid job posting."
        ),
    ),
    (
        _is_pronounceable,
        lambda _text: "Text appears to be invalid. Please provide a proper job description.",
    ),
]


def validate(text: str) -> ValidationVerdict:
    """Check *text* against the job-description heuristics.

    Returns:
        An accepted verdict, or a rejected one carrying the message of the
        first rule that failed.
    """
    trimmed = text.strip()
    for check, message in _RULES:
        if not check(trimmed):
            return ValidationVerdict(accepted=False, reason=message(trimmed))
    return ValidationVerdict(accepted=True)
