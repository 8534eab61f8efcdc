"""Basic usage example for pylifxhttp library."""

import asyncio

from pylifxhttp import LifxClient


async def main() -> None:
    """Demonstrate basic usage of pylifxhttp."""
    # Initialize client with a personal access token from https://cloud.lifx.com/settings
    async with LifxClient(access_token="your_access_token") as client:
        print("Connected to LIFX HTTP API")

        # Get all lights
        completion = await client.list_lights()
        if completion.error is not None:
            print(f"Failed to list lights: {completion.error}")
            return

        print(f"Found {len(completion.records)} light(s)")

        for light in completion.records:
            print(f"\nLight: {light.label}")
            print(f"  ID: {light.id}")
            print(f"  Connected: {light.connected}")
            print(f"  Power: {'ON' if light.power else 'OFF'}")
            print(f"  Brightness: {light.brightness:.0%}")
            print(f"  Color: hue {light.color.hue:.0f}, saturation {light.color.saturation:.2f}, {light.color.kelvin}K")


if __name__ == "__main__":
    asyncio.run(main())
