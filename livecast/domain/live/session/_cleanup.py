"""Teardown of the resources created by one live session run.

Cleanup is best effort: each step is attempted even when an earlier one
failed, and failures are collected instead of raised so they cannot mask the
error that ended the run.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger

from livecast.schemas import SessionResourceNames
from livecast.services.integrations.media_service import RUNNING_STATE, MediaService


def _describe(step: str, exc: Exception) -> str:
    return f"{step}: {type(exc).__name__}: {exc}"


async def cleanup_session_resources(
    media: MediaService,
    names: SessionResourceNames,
    delete_locator: bool = False,
) -> list[str]:
    """Delete the live output, then stop and delete the live event.

    The archive asset is kept. The streaming locator is kept unless
    `delete_locator` is set.

    Args:
        media: Authenticated media service
        names: Resource names of the run
        delete_locator: Also delete the streaming locator

    Returns:
        Description of every cleanup step that failed (empty on success)
    """
    errors: list[str] = []
    logger.info(f"🧹 Cleaning up live session {names.uniqueness}")

    if delete_locator:
        try:
            await media.delete_streaming_locator(names.streaming_locator)
        except Exception as e:
            logger.exception(f"Failed to delete streaming locator {names.streaming_locator}")
            errors.append(_describe("delete streaming locator", e))
    else:
        logger.info(f"Leaving streaming locator {names.streaming_locator} in place")

    # The live output depends on the live event, so it goes first.
    try:
        live_output = await media.get_live_output(names.live_event, names.live_output)
        if live_output:
            await media.delete_live_output(names.live_event, names.live_output)
    except Exception as e:
        logger.exception(f"Failed to delete live output {names.live_output}")
        errors.append(_describe("delete live output", e))

    try:
        live_event = await media.get_live_event(names.live_event)
        if live_event:
            if live_event.resource_state == RUNNING_STATE:
                await media.stop_live_event(names.live_event)
            await media.delete_live_event(names.live_event)
    except Exception as e:
        logger.exception(f"Failed to stop/delete live event {names.live_event}")
        errors.append(_describe("delete live event", e))

    if errors:
        logger.warning(
            f"⚠️  Cleanup of live session {names.uniqueness} finished with {len(errors)} error(s)"
        )
    else:
        logger.info(f"✅ Cleanup of live session {names.uniqueness} completed")
    return errors


@asynccontextmanager
async def session_cleanup_scope(
    media: MediaService,
    names: SessionResourceNames,
    delete_locator: bool = False,
) -> AsyncIterator[list[str]]:
    """Run cleanup exactly once when the block exits, however it exits.

    Yields the list that receives cleanup errors once the block has exited.
    """
    cleanup_errors: list[str] = []
    try:
        yield cleanup_errors
    finally:
        cleanup_errors.extend(
            await cleanup_session_resources(media, names, delete_locator=delete_locator)
        )
