from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoredFile:
    """An uploaded file persisted under its owner's namespace."""

    stored_name: str
    owner_namespace: str
    path: Path
    size: int
    content_type: str


@dataclass(frozen=True)
class RetrievedFile:
    """File contents resolved from a stored name."""

    data: bytes
    content_type: str
    display_name: str
