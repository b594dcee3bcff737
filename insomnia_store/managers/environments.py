"""Environment operations.

Each collection owns exactly one environment, the "Base Environment".  It is
never created or deleted explicitly: every read path creates it lazily when
it is missing and persists it straight away.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from insomnia_store.converters import to_environment
from insomnia_store.managers.workspaces import load_workspace, require_text, touch_workspace
from insomnia_store.models.enums import IdPrefix, RecordType
from insomnia_store.store.ids import create_id, now_millis

if TYPE_CHECKING:
    from insomnia_store.models.entities import Environment
    from insomnia_store.store.base import RecordStore
    from insomnia_store.store.codec import Record

DEFAULT_ENVIRONMENT_NAME = "Base Environment"


def build_environment_record(workspace_id: str, timestamp: int) -> Record:
    return {
        "_id": create_id(IdPrefix.ENVIRONMENT),
        "type": RecordType.ENVIRONMENT.value,
        "parentId": workspace_id,
        "modified": timestamp,
        "created": timestamp,
        "name": DEFAULT_ENVIRONMENT_NAME,
        "data": {},
        "dataPropertyOrder": None,
        "color": None,
        "isPrivate": False,
        "metaSortKey": timestamp,
        "environmentType": "kv",
    }


def ensure_environment(workspace_id: str, environments: list[Record]) -> tuple[Record, bool]:
    """Find the workspace's environment, appending a new one if absent.

    Returns ``(environment, created)``.  The caller persists ``environments``
    when ``created`` is true, so several workspaces can be handled with one
    file rewrite.
    """
    for environment in environments:
        if environment.get("parentId") == workspace_id:
            return environment, False
    environment = build_environment_record(workspace_id, now_millis())
    environments.append(environment)
    logger.info("Created base environment {} for collection {}", environment["_id"], workspace_id)
    return environment, True


async def _load_environment(store: RecordStore, collection_id: str) -> Record:
    workspace, _ = await load_workspace(store, collection_id)
    environments = await store.read(RecordType.ENVIRONMENT)
    environment, created = ensure_environment(workspace["_id"], environments)
    if created:
        await store.write(RecordType.ENVIRONMENT, environments)
    return environment


async def get_environment(store: RecordStore, collection_id: str) -> Environment:
    """Get the collection's environment.  Raises ``CollectionNotFoundError``."""
    environment = await _load_environment(store, collection_id)
    return to_environment(environment)


async def set_environment_variable(store: RecordStore, collection_id: str, key: str, value: Any) -> Environment:
    """Create or overwrite one variable.  Bumps environment and collection ``modified``."""
    require_text("key", key)
    workspace, workspaces = await load_workspace(store, collection_id)
    environments = await store.read(RecordType.ENVIRONMENT)
    environment, _ = ensure_environment(workspace["_id"], environments)

    data = environment.get("data")
    if not isinstance(data, dict):
        data = {}
    data[key] = value
    environment["data"] = data

    timestamp = now_millis()
    environment["modified"] = timestamp
    await store.write(RecordType.ENVIRONMENT, environments)
    await touch_workspace(store, workspace, workspaces, timestamp)

    logger.info("Set variable '{}' in collection {}", key, collection_id)
    return to_environment(environment)


async def get_environment_variable(store: RecordStore, collection_id: str, key: str) -> Any:
    """Return one variable's value, or ``None`` if the key is not set."""
    environment = await _load_environment(store, collection_id)
    data = environment.get("data")
    if not isinstance(data, dict):
        return None
    return data.get(key)
