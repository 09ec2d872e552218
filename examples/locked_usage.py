"""Example sharing a multimap between coroutines through LockedMultimap."""

import asyncio

from linkedmultimap import LockedMultimap


async def collector(events: LockedMultimap[str, int], source: str, count: int) -> None:
    """Record readings from one source."""
    for i in range(count):
        await events.put(source, i)
        await asyncio.sleep(0.01)
    print(f"[{source}] Recorded {count} readings")


async def main() -> None:
    """Run collectors concurrently, then summarize under one lock acquisition."""
    async with LockedMultimap[str, int]() as events:
        await asyncio.gather(
            collector(events, "sensor-a", 3),
            collector(events, "sensor-b", 5),
        )

        async with events.transaction() as mm:
            for source, readings in mm.as_map().items():
                print(f"{source}: {list(readings)}")
            # Keep only the latest reading per source
            for source in list(mm.key_set()):
                mm.replace_values(source, [mm.get(source)[-1]])

        print(f"Latest: {await events.entries()}")


if __name__ == "__main__":
    asyncio.run(main())
