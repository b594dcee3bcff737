"""Folder endpoints (RPC-style), scoped to one collection."""

from __future__ import annotations

from fastapi import APIRouter, status

from insomnia_store.deps import Store
from insomnia_store.managers import folders as manager
from insomnia_store.models.api import FolderCreate, FolderUpdate
from insomnia_store.models.entities import Folder

router = APIRouter(prefix="/collections/{collection_id}/folders", tags=["folders"])


@router.post("/create", response_model=Folder, status_code=status.HTTP_201_CREATED)
async def create_folder(collection_id: str, body: FolderCreate, store: Store) -> Folder:
    return await manager.create_folder(store, collection_id, body)


@router.get("/{folder_id}/get", response_model=Folder)
async def get_folder(collection_id: str, folder_id: str, store: Store) -> Folder:
    return await manager.get_folder(store, collection_id, folder_id)


@router.post("/{folder_id}/update", response_model=Folder)
async def update_folder(collection_id: str, folder_id: str, body: FolderUpdate, store: Store) -> Folder:
    """Partially update a folder; moving it under its own descendant is rejected (422)."""
    return await manager.update_folder(store, collection_id, folder_id, body)


@router.post("/{folder_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(collection_id: str, folder_id: str, store: Store) -> None:
    """Delete a folder and everything nested under it."""
    await manager.delete_folder(store, collection_id, folder_id)
