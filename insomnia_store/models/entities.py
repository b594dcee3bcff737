"""Externally visible entity shapes.

These are pure Pydantic models assembled from raw on-disk records by
``insomnia_store.converters``.  Timestamps are ISO-8601 strings (UTC,
millisecond precision) rather than the epoch milliseconds stored on disk.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestHeader(BaseModel):
    name: str
    value: str
    disabled: bool | None = None


class RequestBody(BaseModel):
    """Request body.  Unknown keys (``params``, ``fileName``, ...) are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mime_type: str | None = Field(default=None, alias="mimeType")
    text: str | None = None


class Environment(BaseModel):
    """The single key/value variable map of a collection."""

    id: str
    name: str
    variables: dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: str


class Folder(BaseModel):
    id: str
    name: str
    description: str | None = None
    parent_id: str = Field(description="Parent folder id, or the collection id for top-level folders")
    created_at: str
    updated_at: str


class Request(BaseModel):
    id: str
    collection_id: str
    name: str
    method: str
    url: str
    headers: list[RequestHeader] = Field(default_factory=list)
    body: RequestBody | None = None
    description: str | None = None
    folder_id: str | None = Field(default=None, description="None when the request sits at the collection root")
    pre_request_script: str | None = None
    after_response_script: str | None = None
    created_at: str
    updated_at: str


class Collection(BaseModel):
    """A collection-scoped workspace with everything it owns."""

    id: str
    name: str
    description: str | None = None
    environment: Environment
    folders: list[Folder] = Field(default_factory=list)
    requests: list[Request] = Field(default_factory=list)
    created_at: str
    updated_at: str
