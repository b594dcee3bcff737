"""Environment endpoints (RPC-style).

Each collection has exactly one environment, so there is no environment id
in the paths.
"""

from __future__ import annotations

from fastapi import APIRouter

from insomnia_store.deps import Store
from insomnia_store.managers import environments as manager
from insomnia_store.models.api import VariableResponse, VariableSet
from insomnia_store.models.entities import Environment

router = APIRouter(prefix="/collections/{collection_id}/environment", tags=["environments"])


@router.get("/get", response_model=Environment)
async def get_environment(collection_id: str, store: Store) -> Environment:
    return await manager.get_environment(store, collection_id)


@router.get("/variables/{key}", response_model=VariableResponse)
async def get_environment_variable(collection_id: str, key: str, store: Store) -> VariableResponse:
    """Get one variable.  An unset key returns ``value: null``, not 404."""
    value = await manager.get_environment_variable(store, collection_id, key)
    return VariableResponse(key=key, value=value)


@router.post("/variables/set", response_model=Environment)
async def set_environment_variable(collection_id: str, body: VariableSet, store: Store) -> Environment:
    return await manager.set_environment_variable(store, collection_id, body.key, body.value)
