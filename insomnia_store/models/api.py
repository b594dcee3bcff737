"""Operation input / output schemas.

These thin schemas sit between callers (HTTP router, CLI, tests) and the
managers:

- **Create** schemas carry the caller's input and provide defaults.
- **Update** schemas allow partial updates via ``model_fields_set``: a field the
  caller never set is left unchanged, an explicit ``None`` clears it where
  clearing is meaningful (description, scripts, body, folder placement).

Required-name checks live in the managers so that every caller gets the same
``insomnia_store.errors.ValidationError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from insomnia_store.models.entities import RequestBody, RequestHeader

# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


class CollectionCreate(BaseModel):
    name: str
    description: str | None = None


# ---------------------------------------------------------------------------
# Folder
# ---------------------------------------------------------------------------


class FolderCreate(BaseModel):
    name: str
    description: str | None = None
    parent_id: str | None = Field(default=None, description="Parent folder; omitted or the collection id = top level.")


class FolderUpdate(BaseModel):
    """Partial folder update.  ``parent_id=None`` moves the folder to the top level."""

    name: str | None = None
    description: str | None = None
    parent_id: str | None = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class RequestCreate(BaseModel):
    name: str
    method: str
    url: str
    headers: list[RequestHeader] = Field(default_factory=list)
    body: RequestBody | None = None
    description: str | None = None
    folder_id: str | None = Field(default=None, description="Target folder; omitted = collection root.")
    pre_request_script: str | None = None
    after_response_script: str | None = None


class RequestUpdate(BaseModel):
    """Partial request update.

    Managers read ``model_fields_set`` to apply only the provided
    fields.  ``folder_id=None`` moves the request to the collection root;
    ``pre_request_script=None`` removes the script.
    """

    name: str | None = None
    method: str | None = None
    url: str | None = None
    headers: list[RequestHeader] | None = None
    body: RequestBody | None = None
    description: str | None = None
    folder_id: str | None = None
    pre_request_script: str | None = None
    after_response_script: str | None = None


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class VariableSet(BaseModel):
    key: str
    value: Any = None


class VariableResponse(BaseModel):
    key: str
    value: Any = None


# ---------------------------------------------------------------------------
# Change detection
# ---------------------------------------------------------------------------


class DigestResponse(BaseModel):
    """Deterministic hash of the full ``list_collections`` result."""

    digest: str
    collections: int
