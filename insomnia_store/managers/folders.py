"""Folder (RequestGroup) operations: create, get, update, delete.

Every operation is scoped to a collection: a folder that exists but belongs
to another collection is reported as not found.  Moves run the cycle guard
before anything is written; deletes cascade to every nested folder and
request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from insomnia_store.converters import to_folder
from insomnia_store.managers.workspaces import load_workspace, require_text, touch_workspace
from insomnia_store.models.enums import IdPrefix, RecordType
from insomnia_store.store.ids import create_id, now_millis
from insomnia_store.tree import FolderTree

if TYPE_CHECKING:
    from insomnia_store.models.api import FolderCreate, FolderUpdate
    from insomnia_store.models.entities import Folder
    from insomnia_store.store.base import RecordStore
    from insomnia_store.store.codec import Record


def build_folder_record(parent_id: str, body: FolderCreate, timestamp: int) -> Record:
    record: Record = {
        "_id": create_id(IdPrefix.REQUEST_GROUP),
        "type": RecordType.REQUEST_GROUP.value,
        "parentId": parent_id,
        "modified": timestamp,
        "created": timestamp,
        "name": body.name,
        "environment": {},
        "environmentPropertyOrder": None,
        # Most recently touched sorts first.
        "metaSortKey": -timestamp,
        "environmentType": "kv",
    }
    if body.description is not None:
        record["description"] = body.description
    return record


async def create_folder(store: RecordStore, collection_id: str, body: FolderCreate) -> Folder:
    """Create a folder at the top level or under ``body.parent_id``.

    Raises ``CollectionNotFoundError`` / ``FolderNotFoundError`` if the
    collection or the requested parent does not exist.
    """
    require_text("name", body.name)
    workspace, workspaces = await load_workspace(store, collection_id)
    folders = await store.read(RecordType.REQUEST_GROUP)
    parent_id = FolderTree(folders).resolve_parent(workspace["_id"], body.parent_id)

    timestamp = now_millis()
    folder = build_folder_record(parent_id, body, timestamp)
    folders.append(folder)
    await store.write(RecordType.REQUEST_GROUP, folders)
    await touch_workspace(store, workspace, workspaces, timestamp)

    logger.info("Created folder {} ({!r}) under {}", folder["_id"], body.name, parent_id)
    return to_folder(folder)


async def get_folder(store: RecordStore, collection_id: str, folder_id: str) -> Folder:
    """Get a folder of the collection.  Raises ``FolderNotFoundError`` if absent or foreign."""
    workspace, _ = await load_workspace(store, collection_id)
    folders = await store.read(RecordType.REQUEST_GROUP)
    return to_folder(FolderTree(folders).ensure_in_workspace(folder_id, workspace["_id"]))


async def update_folder(store: RecordStore, collection_id: str, folder_id: str, body: FolderUpdate) -> Folder:
    """Partially update a folder.  Only fields explicitly set on ``body`` change.

    ``parent_id`` set to ``None`` (or the collection id) moves the folder to
    the top level; any other parent must be a folder of the same collection
    that is not the folder itself or one of its descendants (``CycleError``).
    """
    fields = body.model_fields_set
    if "name" in fields:
        require_text("name", body.name)

    workspace, workspaces = await load_workspace(store, collection_id)
    folders = await store.read(RecordType.REQUEST_GROUP)
    tree = FolderTree(folders)
    folder = tree.ensure_in_workspace(folder_id, workspace["_id"])

    new_parent_id: str | None = None
    if "parent_id" in fields:
        new_parent_id = tree.resolve_parent(workspace["_id"], body.parent_id)
        if new_parent_id != workspace["_id"]:
            tree.ensure_no_cycle(folder["_id"], new_parent_id)

    # -- All checks passed: mutate --------------------------------------------
    if new_parent_id is not None:
        folder["parentId"] = new_parent_id
    if "name" in fields:
        folder["name"] = body.name
    if "description" in fields:
        if body.description is None:
            folder.pop("description", None)
        else:
            folder["description"] = body.description

    timestamp = now_millis()
    folder["modified"] = timestamp
    folder["metaSortKey"] = -timestamp

    await store.write(RecordType.REQUEST_GROUP, folders)
    await touch_workspace(store, workspace, workspaces, timestamp)

    logger.info("Updated folder {} in collection {} (fields={})", folder_id, collection_id, sorted(fields))
    return to_folder(folder)


async def delete_folder(store: RecordStore, collection_id: str, folder_id: str) -> None:
    """Delete a folder with every folder and request nested under it.

    Folder and request files are written as one staged unit: both new files
    are fully written before either replaces its original.  The two renames
    are still separate steps; if the second one fails, requests may remain
    parented under deleted folder ids until the delete is retried.
    """
    workspace, workspaces = await load_workspace(store, collection_id)
    folders = await store.read(RecordType.REQUEST_GROUP)
    tree = FolderTree(folders)
    folder = tree.ensure_in_workspace(folder_id, workspace["_id"])

    requests = await store.read(RecordType.REQUEST)
    doomed = tree.descendant_ids(folder["_id"])
    remaining_folders = [record for record in folders if record["_id"] not in doomed]
    remaining_requests = [record for record in requests if record.get("parentId") not in doomed]

    await store.write_many(
        {
            RecordType.REQUEST_GROUP: remaining_folders,
            RecordType.REQUEST: remaining_requests,
        }
    )
    await touch_workspace(store, workspace, workspaces, now_millis())

    logger.info(
        "Deleted folder {} from collection {} ({} folder(s), {} request(s) removed)",
        folder_id,
        collection_id,
        len(folders) - len(remaining_folders),
        len(requests) - len(remaining_requests),
    )
