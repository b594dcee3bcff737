"""Collection operations: list, get, create, and the startup bootstrap.

A collection is assembled from all four record files: the workspace, its
environment, and the folders and requests whose parent chains end at it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from insomnia_store.converters import to_collection
from insomnia_store.managers.environments import build_environment_record, ensure_environment
from insomnia_store.managers.workspaces import build_workspace_record, is_collection, require_text
from insomnia_store.models.enums import RecordType
from insomnia_store.store.ids import now_millis
from insomnia_store.tree import FolderTree

if TYPE_CHECKING:
    from insomnia_store.models.api import CollectionCreate
    from insomnia_store.models.entities import Collection
    from insomnia_store.store.base import RecordStore
    from insomnia_store.store.codec import Record


def _assemble(
    workspace: Record,
    environment: Record,
    folders: list[Record],
    requests: list[Record],
    tree: FolderTree,
) -> Collection:
    workspace_id = workspace["_id"]
    return to_collection(
        workspace,
        environment,
        tree.requests_for_workspace(workspace_id, requests),
        tree.folders_for_workspace(workspace_id, folders),
    )


async def list_collections(store: RecordStore) -> list[Collection]:
    """List every collection in on-disk workspace order.

    Missing environments are created for all collections and written back
    with a single rewrite of the environment file.
    """
    workspaces = await store.read(RecordType.WORKSPACE)
    if not workspaces:
        return []
    folders = await store.read(RecordType.REQUEST_GROUP)
    requests = await store.read(RecordType.REQUEST)
    environments = await store.read(RecordType.ENVIRONMENT)
    tree = FolderTree(folders)

    environments_updated = False
    collections: list[Collection] = []
    for workspace in workspaces:
        if not is_collection(workspace):
            continue
        environment, created = ensure_environment(workspace["_id"], environments)
        environments_updated = environments_updated or created
        collections.append(_assemble(workspace, environment, folders, requests, tree))

    if environments_updated:
        await store.write(RecordType.ENVIRONMENT, environments)
    return collections


async def get_collection(store: RecordStore, collection_id: str) -> Collection | None:
    """Get a single collection, or ``None`` if no collection has that id."""
    workspaces = await store.read(RecordType.WORKSPACE)
    workspace = next(
        (record for record in workspaces if record.get("_id") == collection_id and is_collection(record)),
        None,
    )
    if workspace is None:
        return None

    folders = await store.read(RecordType.REQUEST_GROUP)
    requests = await store.read(RecordType.REQUEST)
    environments = await store.read(RecordType.ENVIRONMENT)
    environment, created = ensure_environment(workspace["_id"], environments)
    if created:
        await store.write(RecordType.ENVIRONMENT, environments)
    return _assemble(workspace, environment, folders, requests, FolderTree(folders))


async def create_collection(store: RecordStore, body: CollectionCreate) -> Collection:
    """Create a collection together with its empty base environment."""
    require_text("name", body.name)
    timestamp = now_millis()
    workspace = build_workspace_record(await store.resolve_project_id(), body.name, body.description, timestamp)

    workspaces = await store.read(RecordType.WORKSPACE)
    workspaces.append(workspace)
    await store.write(RecordType.WORKSPACE, workspaces)

    environments = await store.read(RecordType.ENVIRONMENT)
    environment = build_environment_record(workspace["_id"], timestamp)
    environments.append(environment)
    await store.write(RecordType.ENVIRONMENT, environments)

    logger.info("Created collection {} ({!r}) in project {}", workspace["_id"], body.name, workspace["parentId"])
    return to_collection(workspace, environment, [], [])


async def ensure_base_environments(store: RecordStore) -> int:
    """Give every collection lacking one a base environment.

    Returns the number of environments created.  Writes nothing when every
    collection already has one, so repeated runs are no-ops.
    """
    workspaces = await store.read(RecordType.WORKSPACE)
    if not workspaces:
        return 0
    environments = await store.read(RecordType.ENVIRONMENT)
    created = 0
    for workspace in workspaces:
        if not is_collection(workspace):
            continue
        _, was_created = ensure_environment(workspace["_id"], environments)
        created += was_created
    if created:
        await store.write(RecordType.ENVIRONMENT, environments)
        logger.info("Bootstrap: created {} base environment(s)", created)
    return created
