"""Workspace record helpers shared by every manager.

A collection is a Workspace record with ``scope == "collection"``.  Every
folder, request, and environment mutation bumps the owning workspace's
``modified`` stamp, even though the workspace record is otherwise untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from insomnia_store.errors import CollectionNotFoundError, ValidationError
from insomnia_store.models.enums import IdPrefix, RecordType, WorkspaceScope
from insomnia_store.store.ids import create_id

if TYPE_CHECKING:
    from insomnia_store.store.base import RecordStore
    from insomnia_store.store.codec import Record


def is_collection(workspace: Record) -> bool:
    return workspace.get("scope") == WorkspaceScope.COLLECTION


def build_workspace_record(
    project_id: str,
    name: str,
    description: str | None,
    timestamp: int,
) -> Record:
    record: Record = {
        "_id": create_id(IdPrefix.WORKSPACE),
        "type": RecordType.WORKSPACE.value,
        "parentId": project_id,
        "modified": timestamp,
        "created": timestamp,
        "name": name,
        "scope": WorkspaceScope.COLLECTION.value,
    }
    if description is not None:
        record["description"] = description
    return record


async def load_workspace(store: RecordStore, collection_id: str) -> tuple[Record, list[Record]]:
    """Return the collection's workspace record and the full workspace list.

    Raises ``CollectionNotFoundError`` if no collection-scoped workspace has
    that id.  The full list is returned so the caller can rewrite it after
    bumping ``modified``.
    """
    workspaces = await store.read(RecordType.WORKSPACE)
    for workspace in workspaces:
        if workspace.get("_id") == collection_id and is_collection(workspace):
            return workspace, workspaces
    raise CollectionNotFoundError(collection_id)


async def touch_workspace(store: RecordStore, workspace: Record, workspaces: list[Record], timestamp: int) -> None:
    """Bump ``modified`` on ``workspace`` and persist the workspace file."""
    workspace["modified"] = timestamp
    await store.write(RecordType.WORKSPACE, workspaces)


def require_text(field: str, value: str | None) -> str:
    """Reject a missing or blank required string.  Raises ``ValidationError``."""
    if value is None or not value.strip():
        msg = f"{field} is required"
        raise ValidationError(msg, {field: "must be a non-empty string"})
    return value
