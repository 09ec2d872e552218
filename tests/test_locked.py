"""Tests for the asyncio-locked multimap facade."""

import asyncio

import pytest

from linkedmultimap import LinkedListMultimap, LockedMultimap, MultimapClosedError


@pytest.mark.asyncio
async def test_locked_creation() -> None:
    """Test creating an empty facade."""
    locked = LockedMultimap[str, int]()
    assert await locked.size() == 0
    assert await locked.key_set() == []
    assert not locked.closed


@pytest.mark.asyncio
async def test_put_and_get() -> None:
    """Test basic put and get operations return snapshots."""
    locked = LockedMultimap[str, int]()
    assert await locked.put("A", 1)
    await locked.put("B", 2)
    await locked.put("A", 3)

    values = await locked.get("A")
    assert values == [1, 3]
    assert isinstance(values, list)
    assert await locked.entries() == [("A", 1), ("B", 2), ("A", 3)]
    assert await locked.key_set() == ["A", "B"]
    assert await locked.size() == 3


@pytest.mark.asyncio
async def test_wraps_existing_multimap() -> None:
    """Test guarding a multimap that already holds entries."""
    mm = LinkedListMultimap[str, int]([("a", 1)])
    locked = LockedMultimap(mm)
    await locked.put("a", 2)
    assert mm.get("a") == [1, 2]


@pytest.mark.asyncio
async def test_bulk_operations() -> None:
    """Test put_all, update, replace_values, remove_all and clear."""
    locked = LockedMultimap[str, int]()
    assert await locked.put_all("a", [1, 2])
    await locked.update([("b", 3), ("a", 4)])

    assert await locked.replace_values("a", [9]) == [1, 2, 4]
    assert await locked.entries() == [("a", 9), ("b", 3)]

    assert await locked.remove("b", 3)
    assert not await locked.remove("b", 3)
    assert await locked.remove_all("a") == [9]

    await locked.put("c", 5)
    await locked.clear()
    assert await locked.size() == 0


@pytest.mark.asyncio
async def test_contains() -> None:
    """Test membership queries."""
    locked = LockedMultimap[str, int]()
    await locked.put("a", 1)
    assert await locked.contains_key("a")
    assert not await locked.contains_key("b")
    assert await locked.contains_value(1)
    assert await locked.contains_entry("a", 1)
    assert not await locked.contains_entry("a", 2)


@pytest.mark.asyncio
async def test_transaction() -> None:
    """Test compound operations under one lock acquisition."""
    locked = LockedMultimap[str, int]()
    await locked.put_all("a", [1, 2, 3])

    async with locked.transaction() as mm:
        values = iter(mm.get("a"))
        for value in values:
            if value % 2:
                values.remove()
        mm.put("b", 4)

    assert await locked.entries() == [("a", 2), ("b", 4)]


@pytest.mark.asyncio
async def test_transaction_blocks_other_calls() -> None:
    """Test that other calls wait until a transaction ends."""
    locked = LockedMultimap[str, int]()
    order: list[str] = []

    async def writer() -> None:
        await locked.put("a", 2)
        order.append("writer")

    async with locked.transaction() as mm:
        task = asyncio.create_task(writer())
        await asyncio.sleep(0.01)
        mm.put("a", 1)
        order.append("transaction")

    await task
    assert order == ["transaction", "writer"]
    assert await locked.get("a") == [1, 2]


@pytest.mark.asyncio
async def test_concurrent_writers() -> None:
    """Test multiple writers adding entries concurrently."""
    locked = LockedMultimap[str, int]()

    async def writer(key: str, count: int) -> None:
        for i in range(count):
            await locked.put(key, i)
            await asyncio.sleep(0)

    await asyncio.gather(writer("a", 10), writer("b", 10), writer("c", 10))

    assert await locked.size() == 30
    for key in "abc":
        assert await locked.get(key) == list(range(10))


@pytest.mark.asyncio
async def test_close_rejects_operations() -> None:
    """Test that a closed facade refuses every operation."""
    locked = LockedMultimap[str, int]()
    await locked.put("a", 1)
    await locked.close()
    await locked.close()

    assert locked.closed
    with pytest.raises(MultimapClosedError):
        await locked.put("a", 2)
    with pytest.raises(MultimapClosedError):
        await locked.get("a")
    with pytest.raises(MultimapClosedError):
        await locked.size()
    with pytest.raises(MultimapClosedError):
        async with locked.transaction():
            pass


@pytest.mark.asyncio
async def test_context_manager_closes() -> None:
    """Test that leaving the async context closes the facade."""
    async with LockedMultimap[str, int]() as locked:
        await locked.put("a", 1)
        assert await locked.size() == 1
    assert locked.closed
