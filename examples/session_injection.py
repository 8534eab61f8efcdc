"""Example showing session injection for Home Assistant integration."""

import asyncio

from aiohttp import ClientSession

from pylifxhttp import LifxClient


async def main() -> None:
    """Demonstrate session injection pattern for HA integration."""
    # This pattern is useful for Home Assistant integrations where
    # the session is managed by the application

    async with ClientSession() as session:
        print("Using application-managed aiohttp session")

        # Client will use the provided session instead of creating its own
        client = LifxClient(
            access_token="your_access_token",
            session=session,  # Inject existing session
        )

        async with client:
            completion = await client.list_lights()
            print(f"Found {len(completion.records)} light(s) using injected session")

            for light in completion.records:
                print(f"  - {light.label} ({light.id})")

        # Session remains open after client exits
        print("\nClient closed, but session still available for other requests")


async def concurrent_commands() -> None:
    """Issue several commands at once; handlers still run one at a time."""
    async with LifxClient(access_token="your_access_token") as client:

        async def on_complete(completion) -> None:
            print(f"{completion.request.url}: {[r.status.value for r in completion.records]}")

        await asyncio.gather(
            client.set_lights_power("group:Office", False, on_complete=on_complete),
            client.set_lights_power("group:Kitchen", True, on_complete=on_complete),
            client.set_lights_color("group:Hall", "blue", on_complete=on_complete),
        )


if __name__ == "__main__":
    asyncio.run(main())
    asyncio.run(concurrent_commands())
