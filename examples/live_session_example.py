"""Example: run one live session against Azure Media Services.

This script provisions a pass-through RTMP live event, prints its ingest and
playback URLs, keeps it up for a short while and then cleans everything up.

Prerequisites:
    1. Install dependencies: uv sync
    2. Set environment variables in env.local (do not commit):
       AADCLIENTID=PLACEHOLDER_CLIENT_ID
       AADSECRET=PLACEHOLDER_CLIENT_SECRET
       AADTENANTDOMAIN=contoso.onmicrosoft.com
       SUBSCRIPTIONID=PLACEHOLDER_SUBSCRIPTION_ID
       RESOURCEGROUP=PLACEHOLDER_RESOURCE_GROUP
       ACCOUNTNAME=PLACEHOLDER_ACCOUNT_NAME

Run:
    uv run python examples/live_session_example.py
"""

import asyncio

from livecast.domain.live.session import SessionOrchestrator
from livecast.domain.live.session._manifest import build_manifest_paths
from livecast.schemas import LiveSessionOutput
from livecast.shared.logger import init_logger

HOLD_SECONDS = 60


async def hold(output: LiveSessionOutput) -> None:
    print(f"\n   Push RTMP to: {output.ingest_url}")
    print(f"   Preview:      {output.preview_endpoint}")
    print(f"   Holding the session for {HOLD_SECONDS}s...")
    await asyncio.sleep(HOLD_SECONDS)


async def main():
    """Demonstrate manifest building and a full session run."""

    print("Live Session Example")
    print("=" * 50)

    # Example 1: Manifest URLs are pure string composition
    print("\n1. Building manifest URLs offline:")
    paths = build_manifest_paths("https", "abc.streaming.media.azure.net", "L1", "output")
    print(f"   HLS:  {paths.hls_manifest}")
    print(f"   DASH: {paths.dash_manifest}")

    # Example 2: Provision, hold, clean up
    print("\n2. Running a live session:")
    result = await SessionOrchestrator(hold=hold).run()
    if result.succeeded:
        print(f"   HLS manifest:  {result.output.hls_manifest}")
        print(f"   DASH manifest: {result.output.dash_manifest}")
    else:
        print(f"   Error: {result.errcode} {result.error}")
    for cleanup_error in result.cleanup_errors:
        print(f"   Cleanup error: {cleanup_error}")

    print("\n" + "=" * 50)
    print("Example completed!")


if __name__ == "__main__":
    init_logger("INFO")
    asyncio.run(main())
