"""Data models for the store."""

from insomnia_store.models.api import (
    CollectionCreate,
    DigestResponse,
    FolderCreate,
    FolderUpdate,
    RequestCreate,
    RequestUpdate,
    VariableResponse,
    VariableSet,
)
from insomnia_store.models.entities import (
    Collection,
    Environment,
    Folder,
    Request,
    RequestBody,
    RequestHeader,
)
from insomnia_store.models.enums import ExportResourceType, IdPrefix, RecordType, WorkspaceScope

__all__ = [
    "Collection",
    "CollectionCreate",
    "DigestResponse",
    "Environment",
    "ExportResourceType",
    "Folder",
    "FolderCreate",
    "FolderUpdate",
    "IdPrefix",
    "RecordType",
    "Request",
    "RequestBody",
    "RequestCreate",
    "RequestHeader",
    "RequestUpdate",
    "VariableResponse",
    "VariableSet",
    "WorkspaceScope",
]
