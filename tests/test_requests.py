"""Tests for request create / get / update / delete."""

from __future__ import annotations

import pytest

from insomnia_store.errors import CollectionNotFoundError, FolderNotFoundError, RequestNotFoundError, ValidationError
from insomnia_store.managers.collections import create_collection, get_collection
from insomnia_store.managers.folders import create_folder
from insomnia_store.managers.requests import create_request, delete_request, get_request, update_request
from insomnia_store.models.api import CollectionCreate, FolderCreate, RequestCreate, RequestUpdate
from insomnia_store.models.entities import Collection, RequestBody, RequestHeader
from insomnia_store.models.enums import RecordType
from insomnia_store.store.local import LocalRecordStore


@pytest.fixture
async def collection(store: LocalRecordStore) -> Collection:
    return await create_collection(store, CollectionCreate(name="API"))


@pytest.fixture
async def other(store: LocalRecordStore) -> Collection:
    return await create_collection(store, CollectionCreate(name="Other"))


async def _record(store: LocalRecordStore, request_id: str) -> dict:
    return next(r for r in await store.read(RecordType.REQUEST) if r["_id"] == request_id)


# ---------------------------------------------------------------------------
# create_request
# ---------------------------------------------------------------------------


async def test_create_request_at_root(store: LocalRecordStore, collection: Collection) -> None:
    request = await create_request(
        store,
        collection.id,
        RequestCreate(
            name="List users",
            method="get",
            url="https://api.test/users",
            headers=[RequestHeader(name="Accept", value="application/json")],
        ),
    )

    assert request.id.startswith("req_")
    assert request.method == "GET"
    assert request.folder_id is None
    assert request.collection_id == collection.id

    record = await _record(store, request.id)
    assert record["parentId"] == collection.id
    assert record["headers"] == [{"name": "Accept", "value": "application/json"}]
    assert record["body"] is None
    assert record["parameters"] == []
    assert record["authentication"] == {}
    assert record["metaSortKey"] == -record["created"]
    assert "preRequestScript" not in record
    assert "description" not in record


async def test_create_request_in_folder_with_body_and_scripts(store: LocalRecordStore, collection: Collection) -> None:
    folder = await create_folder(store, collection.id, FolderCreate(name="Auth"))

    request = await create_request(
        store,
        collection.id,
        RequestCreate(
            name="Login",
            method="POST",
            url="https://api.test/login",
            body=RequestBody(mime_type="application/json", text='{"user": "a"}'),
            folder_id=folder.id,
            pre_request_script="insomnia.environment.set('t', 1)",
            after_response_script="   ",
        ),
    )

    assert request.folder_id == folder.id
    record = await _record(store, request.id)
    assert record["parentId"] == folder.id
    assert record["body"] == {"mimeType": "application/json", "text": '{"user": "a"}'}
    assert record["preRequestScript"] == "insomnia.environment.set('t', 1)"
    assert "afterResponseScript" not in record


async def test_create_request_in_foreign_folder(store: LocalRecordStore, collection: Collection, other: Collection) -> None:
    foreign = await create_folder(store, other.id, FolderCreate(name="Theirs"))
    with pytest.raises(FolderNotFoundError):
        await create_request(store, collection.id, RequestCreate(name="x", method="GET", url="u", folder_id=foreign.id))
    assert await store.read(RecordType.REQUEST) == []


async def test_create_request_in_missing_collection(store: LocalRecordStore) -> None:
    with pytest.raises(CollectionNotFoundError):
        await create_request(store, "wrk_missing", RequestCreate(name="x", method="GET", url="u"))


@pytest.mark.parametrize(("name", "method"), [("", "GET"), ("Name", " ")])
async def test_create_request_requires_name_and_method(
    store: LocalRecordStore, collection: Collection, name: str, method: str
) -> None:
    with pytest.raises(ValidationError):
        await create_request(store, collection.id, RequestCreate(name=name, method=method, url="u"))


async def test_create_request_bumps_collection(store: LocalRecordStore, collection: Collection) -> None:
    request = await create_request(store, collection.id, RequestCreate(name="Ping", method="GET", url="u"))
    refreshed = await get_collection(store, collection.id)
    assert refreshed is not None
    assert refreshed.updated_at == request.updated_at


# ---------------------------------------------------------------------------
# get_request
# ---------------------------------------------------------------------------


async def test_get_request_is_scoped_to_collection(
    store: LocalRecordStore, collection: Collection, other: Collection
) -> None:
    request = await create_request(store, collection.id, RequestCreate(name="Ping", method="GET", url="u"))

    assert (await get_request(store, collection.id, request.id)).name == "Ping"
    with pytest.raises(RequestNotFoundError):
        await get_request(store, other.id, request.id)
    with pytest.raises(RequestNotFoundError):
        await get_request(store, collection.id, "req_missing")


# ---------------------------------------------------------------------------
# update_request
# ---------------------------------------------------------------------------


async def test_partial_update_keeps_other_fields(store: LocalRecordStore, collection: Collection) -> None:
    created = await create_request(
        store,
        collection.id,
        RequestCreate(
            name="Ping",
            method="GET",
            url="https://a.test",
            headers=[RequestHeader(name="X-Trace", value="1", disabled=True)],
            description="health",
        ),
    )

    updated = await update_request(store, collection.id, created.id, RequestUpdate(url="https://b.test", method="head"))

    assert updated.url == "https://b.test"
    assert updated.method == "HEAD"
    assert updated.name == "Ping"
    assert updated.description == "health"
    assert updated.headers == created.headers
    assert updated.created_at == created.created_at


async def test_update_removes_cleared_scripts(store: LocalRecordStore, collection: Collection) -> None:
    created = await create_request(
        store,
        collection.id,
        RequestCreate(name="S", method="GET", url="u", pre_request_script="a()", after_response_script="b()"),
    )

    updated = await update_request(
        store, collection.id, created.id, RequestUpdate(pre_request_script=None, after_response_script="")
    )

    assert updated.pre_request_script is None
    assert updated.after_response_script is None
    record = await _record(store, created.id)
    assert "preRequestScript" not in record
    assert "afterResponseScript" not in record


async def test_update_clears_optional_fields(store: LocalRecordStore, collection: Collection) -> None:
    created = await create_request(
        store,
        collection.id,
        RequestCreate(
            name="B",
            method="POST",
            url="u",
            body=RequestBody(mime_type="text/plain", text="hi"),
            headers=[RequestHeader(name="A", value="1")],
            description="d",
        ),
    )

    updated = await update_request(
        store, collection.id, created.id, RequestUpdate(body=None, headers=None, description=None)
    )

    assert updated.body is None
    assert updated.headers == []
    assert updated.description is None
    record = await _record(store, created.id)
    assert record["body"] is None
    assert "description" not in record


@pytest.mark.parametrize("field", ["name", "method", "url"])
async def test_update_cannot_clear_required_fields(store: LocalRecordStore, collection: Collection, field: str) -> None:
    created = await create_request(store, collection.id, RequestCreate(name="R", method="GET", url="u"))
    with pytest.raises(ValidationError, match="cannot be cleared"):
        await update_request(store, collection.id, created.id, RequestUpdate(**{field: None}))


async def test_update_moves_between_folders(store: LocalRecordStore, collection: Collection) -> None:
    folder = await create_folder(store, collection.id, FolderCreate(name="F"))
    created = await create_request(store, collection.id, RequestCreate(name="R", method="GET", url="u"))

    moved = await update_request(store, collection.id, created.id, RequestUpdate(folder_id=folder.id))
    assert moved.folder_id == folder.id

    back = await update_request(store, collection.id, created.id, RequestUpdate(folder_id=None))
    assert back.folder_id is None
    assert (await _record(store, created.id))["parentId"] == collection.id


async def test_update_foreign_request_is_not_found(
    store: LocalRecordStore, collection: Collection, other: Collection
) -> None:
    created = await create_request(store, other.id, RequestCreate(name="R", method="GET", url="u"))
    with pytest.raises(RequestNotFoundError):
        await update_request(store, collection.id, created.id, RequestUpdate(name="Stolen"))
    assert (await _record(store, created.id))["name"] == "R"


# ---------------------------------------------------------------------------
# delete_request
# ---------------------------------------------------------------------------


async def test_delete_request(store: LocalRecordStore, collection: Collection) -> None:
    keep = await create_request(store, collection.id, RequestCreate(name="Keep", method="GET", url="u"))
    drop = await create_request(store, collection.id, RequestCreate(name="Drop", method="GET", url="u"))

    await delete_request(store, collection.id, drop.id)

    assert [r["_id"] for r in await store.read(RecordType.REQUEST)] == [keep.id]
    with pytest.raises(RequestNotFoundError):
        await delete_request(store, collection.id, drop.id)
