import uuid
from pathlib import Path, PurePath

from app.logging.logger import Log
from app.orchestrator.exceptions import NotFoundError, StorageError
from app.storage.models import RetrievedFile, StoredFile

CONTENT_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_UNSAFE_NAMESPACE_CHARS = ("@", ".", "/", "\\")


def owner_namespace(identity: str) -> str:
    """Derive a path-safe directory name from a submitter identity."""
    if not identity or not identity.strip():
        return "unknown"
    namespace = identity
    for ch in _UNSAFE_NAMESPACE_CHARS:
        namespace = namespace.replace(ch, "_")
    return namespace


def content_type_for(file_name: str) -> str:
    """Infer a MIME type purely from the file extension."""
    return CONTENT_TYPES.get(PurePath(file_name).suffix.lower(), DEFAULT_CONTENT_TYPE)


def stored_file_path(files_root: Path, namespace: str, stored_name: str) -> Path:
    """Build path to a stored file: {files_root}/{namespace}/{stored_name}"""
    return files_root / namespace / stored_name


class FileStore:
    """Persists uploaded bytes per submitter and resolves them back by stored name.

    Stored names are unique across namespaces, so retrieval needs only the
    name: every namespace directory is scanned until one holds it.
    """

    URL_PREFIX = "/api/files"

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    @property
    def files_root(self) -> Path:
        return self._files_root

    def save(self, file_bytes: bytes, owner_identity: str, original_name: str) -> StoredFile:
        """Write *file_bytes* under the owner's namespace with a generated name.

        Raises:
            StorageError: if the name has no extension or the write fails.
        """
        extension = PurePath(original_name).suffix
        if not extension:
            raise StorageError(f"File {original_name!r} must have a valid extension")

        stored_name = f"{uuid.uuid4().hex}{extension}"
        namespace = owner_namespace(owner_identity)
        path = stored_file_path(self._files_root, namespace, stored_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(file_bytes)
        except OSError as exc:
            Log.error(f"Failed to save file {original_name} to {path}: {exc}")
            raise StorageError(f"Unable to save file {original_name}: {exc}") from exc

        Log.info(f"File saved: {original_name} -> {namespace}/{stored_name}")
        return StoredFile(
            stored_name=stored_name,
            owner_namespace=namespace,
            path=path,
            size=len(file_bytes),
            content_type=content_type_for(stored_name),
        )

    def retrieve(self, stored_name: str) -> RetrievedFile:
        """Read a stored file by name.

        Raises:
            NotFoundError: if no namespace contains *stored_name*.
            StorageError: if the file exists but cannot be read.
        """
        path = self._locate(stored_name)
        if path is None:
            Log.warning(f"File not found: {stored_name}")
            raise NotFoundError(f"File {stored_name} not found")
        try:
            data = path.read_bytes()
        except OSError as exc:
            Log.error(f"Failed to read file {path}: {exc}")
            raise StorageError(f"Unable to read file {stored_name}: {exc}") from exc
        return RetrievedFile(
            data=data,
            content_type=content_type_for(stored_name),
            display_name=path.name,
        )

    def delete(self, stored_name: str) -> bool:
        """Remove a stored file. Returns False when it does not exist.

        Raises:
            StorageError: if the file exists but cannot be removed.
        """
        path = self._locate(stored_name)
        if path is None:
            Log.warning(f"File not found for deletion: {stored_name}")
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            Log.error(f"Failed to delete file {path}: {exc}")
            raise StorageError(f"Unable to delete file {stored_name}: {exc}") from exc
        Log.info(f"File deleted: {stored_name}")
        return True

    def url_for(self, stored_name: str) -> str:
        return f"{self.URL_PREFIX}/{stored_name}"

    def _locate(self, stored_name: str) -> Path | None:
        if not self._is_plain_name(stored_name) or not self._files_root.is_dir():
            return None
        try:
            namespaces = [p for p in self._files_root.iterdir() if p.is_dir()]
        except OSError as exc:
            raise StorageError(f"Unable to access file storage directories: {exc}") from exc
        for namespace_dir in namespaces:
            candidate = namespace_dir / stored_name
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def _is_plain_name(stored_name: str) -> bool:
        if not stored_name or not stored_name.strip():
            return False
        if stored_name in (".", ".."):
            return False
        return "/" not in stored_name and "\\" not in stored_name
