from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_file_store
from app.api.errors import error_response
from app.logging.logger import Log
from app.orchestrator.exceptions import NotFoundError, StorageError
from app.storage.file_store import FileStore
from app.storage.models import RetrievedFile

router = APIRouter(prefix="/files", tags=["files"])

VIEWABLE_CONTENT_TYPES = ("image/jpeg", "image/png", "application/pdf", "text/plain")


def _retrieve(file_store: FileStore, stored_name: str, action: str) -> RetrievedFile | Response:
    if not stored_name.strip():
        return error_response("Stored filename is required", "validation_error", 400)
    try:
        return file_store.retrieve(stored_name)
    except NotFoundError as exc:
        return error_response(str(exc), "file_not_found", 404)
    except StorageError as exc:
        Log.warning(f"File service error for {action} {stored_name}: {exc}")
        return error_response(f"Unable to {action} file at this time", "service_error", 422)


@router.get("/{stored_name}")
def download_file(stored_name: str, file_store: FileStore = Depends(get_file_store)) -> Response:
    """Return a stored upload as an attachment."""
    result = _retrieve(file_store, stored_name, "retrieve")
    if isinstance(result, Response):
        return result
    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{result.display_name}"'},
    )


@router.get("/{stored_name}/view")
def view_file(stored_name: str, file_store: FileStore = Depends(get_file_store)) -> Response:
    """Return a stored upload for inline display. Only browser-renderable types qualify."""
    result = _retrieve(file_store, stored_name, "view")
    if isinstance(result, Response):
        return result
    if result.content_type not in VIEWABLE_CONTENT_TYPES:
        return error_response(
            f"File type {result.content_type} is not supported for inline viewing. "
            "Please download the file instead.",
            "unsupported_type",
            400,
        )
    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={
            "Content-Disposition": "inline",
            "X-Frame-Options": "SAMEORIGIN",
            "Cache-Control": "public, max-age=3600",
        },
    )
