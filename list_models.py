"""List the judge models the configured Dedalus key can reach and check the configured one."""

import asyncio
import os

from artfolio.detection.errors import DetectionServiceError
from artfolio.integrations import dedalus


async def main() -> None:
    api_key = os.getenv("DEDALUS_API_KEY")
    if not api_key:
        print("DEDALUS_API_KEY is not set")
        return

    try:
        print(f"Health: {await dedalus.get_health(api_key)}")
        print("Listing models...")
        for m in await dedalus.list_models(api_key):
            print(f"{m.get('id')}  ({m.get('owned_by', '?')})")
    except DetectionServiceError as e:
        print(f"Error listing models: {e}")
        return

    judge_model = os.getenv("DEDALUS_MODEL", "anthropic/claude-opus-4-5")
    try:
        model = await dedalus.get_model(api_key, judge_model)
        print(f"Judge model {model.get('id', judge_model)} is available")
    except DetectionServiceError as e:
        print(f"Judge model {judge_model} is NOT available: {e}")


if __name__ == "__main__":
    asyncio.run(main())
