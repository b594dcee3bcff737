"""Typed errors raised by the storage layer.

Not-found errors also subclass ``LookupError`` and input errors subclass
``ValueError``, following the manager convention: managers raise domain
exceptions, never HTTP exceptions -- that translation is the router's
responsibility.
"""

from __future__ import annotations

from typing import Any


class StoreError(Exception):
    """Base class for every storage-layer error.

    ``code`` is a stable machine-readable identifier; ``details`` carries the
    ids or paths involved.
    """

    code = "STORE_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


# -- Not found ---------------------------------------------------------------


class NotFoundError(StoreError, LookupError):
    """Requested entity does not exist or belongs to another collection."""

    code = "NOT_FOUND"


class CollectionNotFoundError(NotFoundError):
    code = "COLLECTION_NOT_FOUND"

    def __init__(self, collection_id: str) -> None:
        super().__init__(f"Collection '{collection_id}' not found", collection_id=collection_id)


class FolderNotFoundError(NotFoundError):
    code = "FOLDER_NOT_FOUND"

    def __init__(self, folder_id: str, collection_id: str | None = None) -> None:
        suffix = f" in collection '{collection_id}'" if collection_id else ""
        super().__init__(f"Folder '{folder_id}' not found{suffix}", folder_id=folder_id, collection_id=collection_id)


class RequestNotFoundError(NotFoundError):
    code = "REQUEST_NOT_FOUND"

    def __init__(self, request_id: str, collection_id: str | None = None) -> None:
        suffix = f" in collection '{collection_id}'" if collection_id else ""
        super().__init__(
            f"Request '{request_id}' not found{suffix}", request_id=request_id, collection_id=collection_id
        )


# -- Input -------------------------------------------------------------------


class CycleError(StoreError, ValueError):
    """A folder move would make the folder its own ancestor."""

    code = "FOLDER_CYCLE"

    def __init__(self, folder_id: str, parent_id: str) -> None:
        super().__init__(
            f"Cannot move folder '{folder_id}' into itself or its descendants (target '{parent_id}')",
            folder_id=folder_id,
            parent_id=parent_id,
        )


class ValidationError(StoreError, ValueError):
    """Malformed input caught before touching storage."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message, field_errors=field_errors)


# -- System ------------------------------------------------------------------


class FileSystemError(StoreError):
    """Underlying I/O failure other than a missing file."""

    code = "FILE_SYSTEM_ERROR"

    def __init__(self, message: str, path: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message, path=path, cause=str(cause) if cause is not None else None)


class CorruptStoreError(StoreError):
    """A data file line is not a JSON object.

    Never skipped silently: dropping the record would destroy it on the next
    whole-file rewrite.
    """

    code = "CORRUPT_STORE"

    def __init__(self, path: str, line_number: int, reason: str) -> None:
        super().__init__(
            f"Corrupt record in {path} at line {line_number}: {reason}",
            path=path,
            line_number=line_number,
        )


def format_error(error: BaseException) -> str:
    """Render an error for display, prefixing the code for store errors."""
    if isinstance(error, StoreError):
        return f"[{error.code}] {error.message}"
    return str(error)
