from azure.mgmt.media.models import StreamingLocator
from loguru import logger

from livecast.services.integrations.media_service import CLEAR_STREAMING_POLICY, MediaService


async def create_streaming_locator(
    media: MediaService,
    asset_name: str,
    locator_name: str,
) -> StreamingLocator:
    """Publish an asset through the predefined clear streaming policy."""
    locator = await media.create_streaming_locator(
        locator_name,
        asset_name,
        streaming_policy_name=CLEAR_STREAMING_POLICY,
    )
    logger.info(f"Streaming locator {locator_name} id={locator.streaming_locator_id}")
    return locator
