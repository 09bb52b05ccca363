from datetime import datetime, timezone

import pytest

from leaguepanel.errors import DocumentExistsError, StoreError
from leaguepanel.persistence import Condition, Ordering, SQLiteDocumentStore, encode_timestamp


TEAMS = "leagues/test/teams"


def test_encode_timestamp_is_fixed_width_utc():
    naive = datetime(2024, 3, 5, 10, 0)
    aware = datetime(2024, 3, 5, 10, 0, 0, 123, tzinfo=timezone.utc)
    assert encode_timestamp(naive) == "2024-03-05T10:00:00.000000+00:00"
    assert len(encode_timestamp(naive)) == len(encode_timestamp(aware))


@pytest.mark.anyio
async def test_add_and_get(store):
    doc_id = await store.add(TEAMS, {"name": "Lions", "won": 3})
    document = await store.get(TEAMS, doc_id)
    assert document is not None
    assert document.to_dict() == {"id": doc_id, "name": "Lions", "won": 3}
    assert await store.exists(TEAMS, doc_id)
    assert await store.get(TEAMS, "missing") is None


@pytest.mark.anyio
async def test_create_refuses_existing_key(store):
    await store.create(TEAMS, "t1", {"name": "Lions"})
    with pytest.raises(DocumentExistsError):
        await store.create(TEAMS, "t1", {"name": "Tigers"})
    document = await store.get(TEAMS, "t1")
    assert document.data["name"] == "Lions"


@pytest.mark.anyio
async def test_set_overwrites_whole_document(store):
    await store.set(TEAMS, "t1", {"name": "Lions", "won": 3})
    await store.set(TEAMS, "t1", {"name": "Tigers"})
    document = await store.get(TEAMS, "t1")
    assert document.data == {"name": "Tigers"}


@pytest.mark.anyio
async def test_update_merges_and_ignores_missing_documents(store):
    await store.set(TEAMS, "t1", {"name": "Lions", "won": 3, "tags": ["a", "b"]})
    await store.update(TEAMS, "t1", {"won": 4, "tags": ["c"]})
    document = await store.get(TEAMS, "t1")
    assert document.data == {"name": "Lions", "won": 4, "tags": ["c"]}

    await store.update(TEAMS, "ghost", {"won": 1})
    assert await store.get(TEAMS, "ghost") is None


@pytest.mark.anyio
async def test_delete_missing_is_silent(store):
    await store.delete(TEAMS, "ghost")
    await store.set(TEAMS, "t1", {"name": "Lions"})
    await store.delete(TEAMS, "t1")
    assert not await store.exists(TEAMS, "t1")


@pytest.mark.anyio
async def test_query_filters_and_orders(store):
    await store.set(TEAMS, "a", {"name": "A", "won": 1})
    await store.set(TEAMS, "b", {"name": "B", "won": 5})
    await store.set(TEAMS, "c", {"name": "C", "won": 3})
    await store.set("leagues/test/players", "p", {"name": "P", "won": 9})

    ordered = await store.query(TEAMS, order_by=[Ordering("won", descending=True)])
    assert [doc.doc_id for doc in ordered] == ["b", "c", "a"]

    filtered = await store.query(TEAMS, [Condition("won", ">=", 3)])
    assert {doc.doc_id for doc in filtered} == {"b", "c"}
    assert await store.count(TEAMS, [Condition("name", "==", "A")]) == 1


@pytest.mark.anyio
async def test_query_rejects_unsafe_field_names(store):
    with pytest.raises(StoreError):
        await store.query(TEAMS, [Condition("won') OR 1=1 --", "==", 1)])


@pytest.mark.anyio
async def test_shared_memory_database():
    store = SQLiteDocumentStore("file:leaguepanel-test?mode=memory&cache=shared")
    await store.set(TEAMS, "t1", {"name": "Lions"})
    assert await store.exists(TEAMS, "t1")
