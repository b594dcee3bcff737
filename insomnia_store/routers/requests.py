"""Request endpoints (RPC-style), scoped to one collection."""

from __future__ import annotations

from fastapi import APIRouter, status

from insomnia_store.deps import Store
from insomnia_store.managers import requests as manager
from insomnia_store.models.api import RequestCreate, RequestUpdate
from insomnia_store.models.entities import Request

router = APIRouter(prefix="/collections/{collection_id}/requests", tags=["requests"])


@router.post("/create", response_model=Request, status_code=status.HTTP_201_CREATED)
async def create_request(collection_id: str, body: RequestCreate, store: Store) -> Request:
    return await manager.create_request(store, collection_id, body)


@router.get("/{request_id}/get", response_model=Request)
async def get_request(collection_id: str, request_id: str, store: Store) -> Request:
    return await manager.get_request(store, collection_id, request_id)


@router.post("/{request_id}/update", response_model=Request)
async def update_request(collection_id: str, request_id: str, body: RequestUpdate, store: Store) -> Request:
    """Partially update a request.  Omitted fields are unchanged; ``null`` clears optional ones."""
    return await manager.update_request(store, collection_id, request_id, body)


@router.post("/{request_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(collection_id: str, request_id: str, store: Store) -> None:
    await manager.delete_request(store, collection_id, request_id)
