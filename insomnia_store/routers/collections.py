"""Collection endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from insomnia_store.converters import collections_digest, to_insomnia_export
from insomnia_store.deps import Store
from insomnia_store.errors import CollectionNotFoundError
from insomnia_store.managers import collections as manager
from insomnia_store.models.api import CollectionCreate, DigestResponse
from insomnia_store.models.entities import Collection

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("/list", response_model=list[Collection])
async def list_collections(store: Store) -> list[Collection]:
    """List all collections with their folders, requests and environment."""
    return await manager.list_collections(store)


@router.get("/export")
async def export_collections(store: Store) -> dict[str, Any]:
    """All collections as an Insomnia v4 export document, importable by URL."""
    return to_insomnia_export(await manager.list_collections(store))


@router.get("/digest", response_model=DigestResponse)
async def digest_collections(store: Store) -> DigestResponse:
    """Deterministic hash of the full collection listing, for change detection."""
    collections = await manager.list_collections(store)
    return DigestResponse(digest=collections_digest(collections), collections=len(collections))


@router.post("/create", response_model=Collection, status_code=status.HTTP_201_CREATED)
async def create_collection(body: CollectionCreate, store: Store) -> Collection:
    """Create a new collection with an empty base environment."""
    return await manager.create_collection(store, body)


@router.get("/{collection_id}/get", response_model=Collection)
async def get_collection(collection_id: str, store: Store) -> Collection:
    """Get a single collection by ID."""
    collection = await manager.get_collection(store, collection_id)
    if collection is None:
        raise CollectionNotFoundError(collection_id)
    return collection
