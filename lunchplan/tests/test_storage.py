import json

import pytest

from lunchplan.domain.errors import StorageError
from lunchplan.infra.Storage import (
    INGREDIENTS, PLAN_DAYS, USERS, InMemoryStorage, JsonFileStorage, build_storage,
)
from lunchplan.utilities.constants import EMAIL_INDEX, USER_ID_INDEX


@pytest.mark.asyncio
async def test_put_get_returns_copies():
    storage = InMemoryStorage()
    item = {"ingredientId": "i1", "userId": "u1", "name": "Rice"}
    await storage.put(INGREDIENTS, item)
    item["name"] = "changed after put"

    got = await storage.get(INGREDIENTS, {"ingredientId": "i1"})
    assert got["name"] == "Rice"
    got["name"] = "changed after get"
    again = await storage.get(INGREDIENTS, {"ingredientId": "i1"})
    assert again["name"] == "Rice"


@pytest.mark.asyncio
async def test_get_missing_returns_none():
    storage = InMemoryStorage()
    assert await storage.get(INGREDIENTS, {"ingredientId": "nope"}) is None


@pytest.mark.asyncio
async def test_query_by_index():
    storage = InMemoryStorage()
    await storage.put(INGREDIENTS, {"ingredientId": "i1", "userId": "u1", "name": "Rice"})
    await storage.put(INGREDIENTS, {"ingredientId": "i2", "userId": "u2", "name": "Salt"})
    await storage.put(INGREDIENTS, {"ingredientId": "i3", "userId": "u1", "name": "Oil"})

    items = await storage.query(INGREDIENTS, {"userId": "u1"}, index=USER_ID_INDEX)
    assert {i["ingredientId"] for i in items} == {"i1", "i3"}

    users = await storage.query(USERS, {"email": "nobody@example.com"}, index=EMAIL_INDEX)
    assert users == []


@pytest.mark.asyncio
async def test_range_query_is_inclusive_and_sorted():
    storage = InMemoryStorage()
    for d in ("2024-05-03", "2024-05-01", "2024-05-05", "2024-05-02"):
        await storage.put(PLAN_DAYS, {"userId": "u1", "date": d, "meals": []})
    await storage.put(PLAN_DAYS, {"userId": "u2", "date": "2024-05-02", "meals": []})

    items = await storage.query(PLAN_DAYS, {"userId": "u1"}, between=("2024-05-01", "2024-05-03"))
    assert [i["date"] for i in items] == ["2024-05-01", "2024-05-02", "2024-05-03"]


@pytest.mark.asyncio
async def test_query_rejects_unknown_index_and_non_key_attribute():
    storage = InMemoryStorage()
    with pytest.raises(StorageError):
        await storage.query(INGREDIENTS, {"userId": "u1"})
    with pytest.raises(StorageError):
        await storage.query(INGREDIENTS, {"name": "Rice"}, index=USER_ID_INDEX)


@pytest.mark.asyncio
async def test_update_merges_and_keeps_key():
    storage = InMemoryStorage()
    await storage.put(INGREDIENTS, {"ingredientId": "i1", "userId": "u1", "name": "Rice", "createdAt": 1})
    updated = await storage.update(INGREDIENTS, {"ingredientId": "i1"},
                                   {"name": "Brown rice", "ingredientId": "other"})
    assert updated == {"ingredientId": "i1", "userId": "u1", "name": "Brown rice", "createdAt": 1}
    assert await storage.get(INGREDIENTS, {"ingredientId": "other"}) is None


@pytest.mark.asyncio
async def test_delete_absent_key_is_noop():
    storage = InMemoryStorage()
    await storage.delete(INGREDIENTS, {"ingredientId": "missing"})
    await storage.put(INGREDIENTS, {"ingredientId": "i1", "userId": "u1"})
    await storage.delete(INGREDIENTS, {"ingredientId": "i1"})
    assert await storage.get(INGREDIENTS, {"ingredientId": "i1"}) is None


@pytest.mark.asyncio
async def test_unknown_table_and_incomplete_key():
    storage = InMemoryStorage()
    with pytest.raises(StorageError):
        await storage.get("recipes", {"id": "x"})
    with pytest.raises(StorageError):
        await storage.get(PLAN_DAYS, {"userId": "u1"})


@pytest.mark.asyncio
async def test_json_storage_survives_reload(tmp_path):
    storage = JsonFileStorage(tmp_path)
    await storage.put(PLAN_DAYS, {"userId": "u1", "date": "2024-01-01", "meals": ["m1"]})
    await storage.put(PLAN_DAYS, {"userId": "u1", "date": "2024-01-02", "meals": []})
    await storage.delete(PLAN_DAYS, {"userId": "u1", "date": "2024-01-02"})

    path = storage.path_for(PLAN_DAYS)
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == [{"userId": "u1", "date": "2024-01-01", "meals": ["m1"]}]

    reloaded = JsonFileStorage(tmp_path)
    days = await reloaded.query(PLAN_DAYS, {"userId": "u1"})
    assert [d["date"] for d in days] == ["2024-01-01"]
    # no temp files left behind
    assert [p.name for p in tmp_path.iterdir()] == [path.name]


@pytest.mark.asyncio
async def test_json_storage_rejects_corrupt_file(tmp_path):
    storage = JsonFileStorage(tmp_path)
    storage.path_for(INGREDIENTS).write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        await storage.get(INGREDIENTS, {"ingredientId": "i1"})


@pytest.mark.asyncio
async def test_json_storage_failed_write_leaves_table_unchanged(tmp_path):
    storage = JsonFileStorage(tmp_path)
    await storage.put(INGREDIENTS, {"ingredientId": "i1", "userId": "u", "name": "a"})

    def disk_full(path, items):
        raise OSError("No space left on device")

    storage._atomic_write = disk_full

    with pytest.raises(StorageError):
        await storage.put(INGREDIENTS, {"ingredientId": "i2", "userId": "u", "name": "b"})
    assert await storage.get(INGREDIENTS, {"ingredientId": "i2"}) is None

    with pytest.raises(StorageError):
        await storage.update(INGREDIENTS, {"ingredientId": "i1"}, {"name": "renamed"})
    assert (await storage.get(INGREDIENTS, {"ingredientId": "i1"}))["name"] == "a"

    with pytest.raises(StorageError):
        await storage.delete(INGREDIENTS, {"ingredientId": "i1"})
    assert await storage.get(INGREDIENTS, {"ingredientId": "i1"}) is not None

    # the next successful write must not carry the rejected item to disk
    del storage._atomic_write
    await storage.put(INGREDIENTS, {"ingredientId": "i3", "userId": "u", "name": "c"})
    with open(storage.path_for(INGREDIENTS), encoding="utf-8") as f:
        on_disk = json.load(f)
    assert sorted(i["ingredientId"] for i in on_disk) == ["i1", "i3"]
    assert next(i for i in on_disk if i["ingredientId"] == "i1")["name"] == "a"


def test_build_storage(tmp_path):
    assert isinstance(build_storage("memory"), InMemoryStorage)
    json_storage = build_storage("json", tmp_path)
    assert isinstance(json_storage, JsonFileStorage)
    assert json_storage.data_dir == tmp_path
    with pytest.raises(ValueError):
        build_storage("dynamo")
