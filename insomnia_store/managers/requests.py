"""Request operations: create, get, update, delete.

Script fields are stored only when they hold non-blank text; absence of the
key (never an empty string) is the canonical "no script" representation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from insomnia_store.converters import to_request
from insomnia_store.errors import RequestNotFoundError, ValidationError
from insomnia_store.managers.workspaces import load_workspace, require_text, touch_workspace
from insomnia_store.models.enums import IdPrefix, RecordType
from insomnia_store.store.ids import create_id, now_millis
from insomnia_store.tree import FolderTree

if TYPE_CHECKING:
    from insomnia_store.models.api import RequestCreate, RequestUpdate
    from insomnia_store.models.entities import Request, RequestBody, RequestHeader
    from insomnia_store.store.base import RecordStore
    from insomnia_store.store.codec import Record

_SCRIPT_FIELDS = {
    "pre_request_script": "preRequestScript",
    "after_response_script": "afterResponseScript",
}


def _dump_headers(headers: list[RequestHeader] | None) -> list[dict]:
    return [header.model_dump(exclude_none=True) for header in headers or []]


def _dump_body(body: RequestBody | None) -> dict | None:
    return body.model_dump(by_alias=True, exclude_none=True) if body is not None else None


def _set_script(record: Record, key: str, script: str | None) -> None:
    if script is None or not script.strip():
        record.pop(key, None)
    else:
        record[key] = script


def build_request_record(parent_id: str, body: RequestCreate, timestamp: int) -> Record:
    record: Record = {
        "_id": create_id(IdPrefix.REQUEST),
        "type": RecordType.REQUEST.value,
        "parentId": parent_id,
        "modified": timestamp,
        "created": timestamp,
        "url": body.url,
        "name": body.name,
        "method": body.method.upper(),
        "headers": _dump_headers(body.headers),
        "body": _dump_body(body.body),
        "parameters": [],
        "authentication": {},
        "metaSortKey": -timestamp,
        "isPrivate": False,
        "settingStoreCookies": True,
        "settingSendCookies": True,
        "settingDisableRenderRequestBody": False,
        "settingEncodeUrl": True,
        "settingRebuildPath": True,
        "settingFollowRedirects": "global",
    }
    if body.description is not None:
        record["description"] = body.description
    for field, key in _SCRIPT_FIELDS.items():
        _set_script(record, key, getattr(body, field))
    return record


async def _load_request(
    store: RecordStore, collection_id: str, request_id: str
) -> tuple[Record, list[Record], Record, list[Record], FolderTree]:
    """Load a collection's request plus everything needed to rewrite it.

    Returns ``(request, requests, workspace, workspaces, tree)``.  Raises
    ``RequestNotFoundError`` if the request is absent or foreign.
    """
    workspace, workspaces = await load_workspace(store, collection_id)
    tree = FolderTree(await store.read(RecordType.REQUEST_GROUP))
    requests = await store.read(RecordType.REQUEST)
    for request in requests:
        if request.get("_id") == request_id:
            if tree.request_belongs_to_workspace(request, workspace["_id"]):
                return request, requests, workspace, workspaces, tree
            break
    raise RequestNotFoundError(request_id, collection_id)


async def create_request(store: RecordStore, collection_id: str, body: RequestCreate) -> Request:
    """Create a request at the collection root or in ``body.folder_id``.

    Raises ``CollectionNotFoundError`` / ``FolderNotFoundError`` if the
    collection or the target folder does not exist.
    """
    require_text("name", body.name)
    require_text("method", body.method)
    workspace, workspaces = await load_workspace(store, collection_id)
    tree = FolderTree(await store.read(RecordType.REQUEST_GROUP))
    parent_id = tree.resolve_request_parent(workspace["_id"], body.folder_id)

    timestamp = now_millis()
    request = build_request_record(parent_id, body, timestamp)
    requests = await store.read(RecordType.REQUEST)
    requests.append(request)
    await store.write(RecordType.REQUEST, requests)
    await touch_workspace(store, workspace, workspaces, timestamp)

    logger.info("Created request {} ({} {}) under {}", request["_id"], request["method"], body.url, parent_id)
    return to_request(request, workspace["_id"])


async def get_request(store: RecordStore, collection_id: str, request_id: str) -> Request:
    """Get a request of the collection.  Raises ``RequestNotFoundError`` if absent or foreign."""
    request, _, workspace, _, _ = await _load_request(store, collection_id, request_id)
    return to_request(request, workspace["_id"])


async def update_request(store: RecordStore, collection_id: str, request_id: str, body: RequestUpdate) -> Request:
    """Partially update a request.  Only fields explicitly set on ``body`` change.

    Explicit ``None`` clears ``description``, ``body`` and the scripts
    (scripts are removed, never stored as ``""``), and moves the request to
    the collection root for ``folder_id``.  ``name``, ``method`` and ``url``
    cannot be cleared.
    """
    fields = body.model_fields_set
    for field in ("name", "method", "url"):
        if field in fields and getattr(body, field) is None:
            msg = f"{field} cannot be cleared"
            raise ValidationError(msg, {field: "must not be null"})
    for field in ("name", "method"):
        if field in fields:
            require_text(field, getattr(body, field))

    request, requests, workspace, workspaces, tree = await _load_request(store, collection_id, request_id)

    if "folder_id" in fields:
        request["parentId"] = tree.resolve_request_parent(workspace["_id"], body.folder_id)
    if "name" in fields:
        request["name"] = body.name
    if "method" in fields:
        request["method"] = body.method.upper()
    if "url" in fields:
        request["url"] = body.url
    if "headers" in fields:
        request["headers"] = _dump_headers(body.headers)
    if "body" in fields:
        request["body"] = _dump_body(body.body)
    if "description" in fields:
        if body.description is None:
            request.pop("description", None)
        else:
            request["description"] = body.description
    for field, key in _SCRIPT_FIELDS.items():
        if field in fields:
            _set_script(request, key, getattr(body, field))

    timestamp = now_millis()
    request["modified"] = timestamp
    await store.write(RecordType.REQUEST, requests)
    await touch_workspace(store, workspace, workspaces, timestamp)

    logger.info("Updated request {} in collection {} (fields={})", request_id, collection_id, sorted(fields))
    return to_request(request, workspace["_id"])


async def delete_request(store: RecordStore, collection_id: str, request_id: str) -> None:
    """Delete a request.  Raises ``RequestNotFoundError`` if absent or foreign."""
    request, requests, workspace, workspaces, _ = await _load_request(store, collection_id, request_id)
    requests.remove(request)
    await store.write(RecordType.REQUEST, requests)
    await touch_workspace(store, workspace, workspaces, now_millis())
    logger.info("Deleted request {} from collection {}", request_id, collection_id)
