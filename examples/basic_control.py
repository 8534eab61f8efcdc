"""Basic light control example for pylifxhttp.

This example demonstrates:
- Reading the access token from the environment
- Turning lights on and off
- Setting colors from expressions and Color values
- Receiving results through a completion handler
"""

import asyncio
import logging

from pylifxhttp import Color, Completion, LifxClient, Result, Selector


# Configure logging to see what's happening
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def print_results(completion: Completion[Result]) -> None:
    """Print the per-light outcome of a command."""
    if completion.error is not None:
        print(f"  ✗ {completion.request.method} {completion.request.url} failed: {completion.error}")
        return

    for result in completion.records:
        mark = "✓" if result.is_ok else "✗"
        print(f"  {mark} {result.id}: {result.status.value}")


async def main() -> None:
    """Main example function."""
    # Reads LIFX_ACCESS_TOKEN (and optional LIFX_BASE_URL, LIFX_TIMEOUT)
    async with LifxClient.from_env() as client:
        selector = Selector.all()

        print("Turning lights ON...")
        await client.set_lights_power(selector, True, duration=1.0, on_complete=print_results)

        await asyncio.sleep(2)

        print("\nSetting lights to GREEN...")
        await client.set_lights_color(selector, Color.color(hue=120, saturation=1.0), on_complete=print_results)

        await asyncio.sleep(2)

        print("\nSetting lights to warm white...")
        await client.set_lights_color(selector, "kelvin:2700", duration=2.0, on_complete=print_results)

        # Check current state
        completion = await client.list_lights(selector)
        for light in completion.records:
            print(f"\n{light.label}: {'ON' if light.power else 'OFF'} at {light.brightness:.0%}, {light.color.kelvin}K")


if __name__ == "__main__":
    asyncio.run(main())
