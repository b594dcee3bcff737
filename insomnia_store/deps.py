"""FastAPI dependency injection for the record store.

Usage in route handlers::

    @router.get("/things")
    async def list_things(store: Store) -> list[Thing]:
        ...

The store is created once during the app lifespan.  Tests swap it with
``app.dependency_overrides[get_store]``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from insomnia_store.store.base import RecordStore


async def get_store(request: Request) -> RecordStore:
    """Return the shared record store.  HTTP 503 if the lifespan has not set one up."""
    store: RecordStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Record store not initialised.",
        )
    return store


Store = Annotated[RecordStore, Depends(get_store)]
"""Annotated dependency: the process-wide record store."""
