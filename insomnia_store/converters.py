"""Map raw on-disk records to the externally visible entity shapes.

Records are read leniently: missing optional keys get defaults, empty
descriptions on folders and collections collapse to ``None``, and a request's
``parentId`` becomes ``folder_id`` only when it points at a folder rather than
at the owning collection.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from typing import Any

from insomnia_store.models.entities import (
    Collection,
    Environment,
    Folder,
    Request,
    RequestBody,
    RequestHeader,
)
from insomnia_store.models.enums import ExportResourceType, WorkspaceScope
from insomnia_store.store.codec import Record
from insomnia_store.store.ids import from_iso, now_millis, to_iso

EXPORT_FORMAT = 4
EXPORT_SOURCE = "insomnia-store"


def _non_empty(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _headers(raw: Any) -> list[RequestHeader]:
    if not isinstance(raw, list):
        return []
    headers = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        disabled = item.get("disabled")
        headers.append(
            RequestHeader(
                name=str(item.get("name", "")),
                value=str(item.get("value", "")),
                disabled=disabled if isinstance(disabled, bool) else None,
            )
        )
    return headers


def to_request(record: Record, collection_id: str) -> Request:
    body = record.get("body")
    parent_id = record.get("parentId")
    return Request(
        id=record["_id"],
        collection_id=collection_id,
        name=record.get("name", ""),
        method=record.get("method", ""),
        url=record.get("url", ""),
        headers=_headers(record.get("headers")),
        body=RequestBody.model_validate(body) if isinstance(body, dict) else None,
        description=_string(record.get("description")),
        folder_id=parent_id if parent_id and parent_id != collection_id else None,
        pre_request_script=_string(record.get("preRequestScript")),
        after_response_script=_string(record.get("afterResponseScript")),
        created_at=to_iso(record.get("created") or 0),
        updated_at=to_iso(record.get("modified") or 0),
    )


def to_folder(record: Record) -> Folder:
    return Folder(
        id=record["_id"],
        name=record.get("name", ""),
        description=_non_empty(record.get("description")),
        parent_id=record.get("parentId", ""),
        created_at=to_iso(record.get("created") or 0),
        updated_at=to_iso(record.get("modified") or 0),
    )


def to_environment(record: Record) -> Environment:
    data = record.get("data")
    return Environment(
        id=record["_id"],
        name=record.get("name", ""),
        variables=data if isinstance(data, dict) else {},
        created_at=to_iso(record.get("created") or 0),
        updated_at=to_iso(record.get("modified") or 0),
    )


def to_collection(
    workspace: Record,
    environment: Record,
    requests: Iterable[Record],
    folders: Iterable[Record],
) -> Collection:
    return Collection(
        id=workspace["_id"],
        name=workspace.get("name", ""),
        description=_non_empty(workspace.get("description")),
        environment=to_environment(environment),
        folders=[to_folder(folder) for folder in folders],
        requests=[to_request(request, workspace["_id"]) for request in requests],
        created_at=to_iso(workspace.get("created") or 0),
        updated_at=to_iso(workspace.get("modified") or 0),
    )


# ---------------------------------------------------------------------------
# Serializations for callers
# ---------------------------------------------------------------------------


def collections_digest(collections: Iterable[Collection]) -> str:
    """SHA-256 over a canonical (sorted-key) JSON rendering of ``collections``.

    Equal store contents always give the same digest, so callers can detect
    changes without keeping their own copy of the data.
    """
    payload = json.dumps(
        [collection.model_dump(mode="json") for collection in collections],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def to_insomnia_export(collections: Iterable[Collection]) -> dict[str, Any]:
    """Render collections as an Insomnia v4 export document (importable by Insomnia)."""
    resources: list[dict[str, Any]] = []
    for collection in collections:
        resources.append(
            {
                "_id": collection.id,
                "_type": ExportResourceType.WORKSPACE.value,
                "parentId": None,
                "created": from_iso(collection.created_at),
                "modified": from_iso(collection.updated_at),
                "name": collection.name,
                "description": collection.description or "",
                "scope": WorkspaceScope.COLLECTION.value,
            }
        )
        for folder in collection.folders:
            resources.append(
                {
                    "_id": folder.id,
                    "_type": ExportResourceType.REQUEST_GROUP.value,
                    "parentId": folder.parent_id or collection.id,
                    "created": from_iso(folder.created_at),
                    "modified": from_iso(folder.updated_at),
                    "name": folder.name,
                    "description": folder.description or "",
                    "environment": {},
                }
            )
        for request in collection.requests:
            resource: dict[str, Any] = {
                "_id": request.id,
                "_type": ExportResourceType.REQUEST.value,
                "parentId": request.folder_id or collection.id,
                "created": from_iso(request.created_at),
                "modified": from_iso(request.updated_at),
                "name": request.name,
                "description": request.description or "",
                "url": request.url,
                "method": request.method,
                "headers": [header.model_dump(exclude_none=True) for header in request.headers],
                "body": request.body.model_dump(by_alias=True, exclude_none=True) if request.body else {},
                "parameters": [],
            }
            if request.pre_request_script:
                resource["preRequestScript"] = request.pre_request_script
            if request.after_response_script:
                resource["afterResponseScript"] = request.after_response_script
            resources.append(resource)
        environment = collection.environment
        resources.append(
            {
                "_id": environment.id,
                "_type": ExportResourceType.ENVIRONMENT.value,
                "parentId": collection.id,
                "created": from_iso(environment.created_at),
                "modified": from_iso(environment.updated_at),
                "name": environment.name,
                "data": environment.variables,
                "isPrivate": False,
            }
        )

    return {
        "_type": "export",
        "__export_format": EXPORT_FORMAT,
        "__export_date": to_iso(now_millis()),
        "__export_source": EXPORT_SOURCE,
        "resources": resources,
    }
