"""Provision, start and tear down one live streaming session."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from azure.core.exceptions import HttpResponseError
from loguru import logger

from livecast.app_config import AppEnvironConfig, get_app_environ_config
from livecast.schemas import LiveSessionOutput, SessionResourceNames, SessionRunResult
from livecast.services.integrations.media_service import RUNNING_STATE, MediaService
from livecast.utils.app_errors import AppError, AppErrorCode

from ._cleanup import session_cleanup_scope
from ._locator import create_streaming_locator
from ._manifest import build_manifest_paths

HoldCallback = Callable[[LiveSessionOutput], Awaitable[None]]

PLAYBACK_SCHEME = "https"


def _first_endpoint_url(surface: Any) -> str | None:
    """URL of the first endpoint of a live event input/preview, if populated."""
    endpoints = getattr(surface, "endpoints", None) if surface is not None else None
    if not endpoints:
        return None
    return endpoints[0].url


class SessionOrchestrator:
    """Runs the create -> start -> publish -> cleanup sequence of a live session.

    The media service is injected so tests can substitute a double; when
    omitted it is built from configuration.
    """

    def __init__(
        self,
        media: MediaService | None = None,
        cfg: AppEnvironConfig | None = None,
        hold: HoldCallback | None = None,
    ) -> None:
        self._cfg = cfg or get_app_environ_config()
        self.media = media if media is not None else MediaService(self._cfg)
        self._hold = hold

    def _failure(self, names: SessionResourceNames, exc: Exception) -> SessionRunResult:
        if isinstance(exc, AppError):
            errcode, errmesg = exc.errcode, exc.errmesg
        elif isinstance(exc, HttpResponseError):
            errcode, errmesg = AppErrorCode.E_MEDIA_SERVICE_ERROR.value, str(exc.message or exc)
        else:
            errcode, errmesg = AppErrorCode.E_PROVISION_FAILED.value, f"{type(exc).__name__}: {exc}"
        return SessionRunResult(names=names, error=errmesg, errcode=errcode)

    async def run(self) -> SessionRunResult:
        """Run one live session end to end.

        Returns:
            SessionRunResult with the session URLs on success, or an error.
            Cleanup failures are reported in `cleanup_errors` and never raised.
        """
        names = SessionResourceNames.generate(streaming_endpoint=self._cfg.STREAMING_ENDPOINT_NAME)
        logger.info(f"🎬 Starting live session {names.uniqueness}")

        try:
            await self.media.authenticate()
        except AppError as e:
            logger.error(f"❌ Authentication failed for live session {names.uniqueness}: {e}")
            return self._failure(names, e)
        except Exception as e:
            logger.exception(f"❌ Authentication failed for live session {names.uniqueness}")
            return SessionRunResult(
                names=names,
                error=f"{type(e).__name__}: {e}",
                errcode=AppErrorCode.E_AUTH_FAILED.value,
            )

        try:
            return await self._run_authenticated(names)
        finally:
            await self.media.close()

    async def _run_authenticated(self, names: SessionResourceNames) -> SessionRunResult:
        try:
            account = await self.media.get_account()
        except Exception as e:
            # Nothing has been created yet, so there is nothing to clean up.
            logger.exception(f"❌ Could not resolve Media Services account: {e}")
            return self._failure(names, e)

        async with session_cleanup_scope(
            self.media, names, delete_locator=self._cfg.DELETE_STREAMING_LOCATOR
        ) as cleanup_errors:
            try:
                output = await self._provision(names, account.location)
                if self._hold is not None:
                    await self._hold(output)
            except Exception as e:
                logger.exception(f"❌ Live session {names.uniqueness} failed: {e}")
                result = self._failure(names, e)
            else:
                result = SessionRunResult(names=names, output=output)

        result.cleanup_errors = list(cleanup_errors)
        if cleanup_errors and result.error is None:
            result.errcode = AppErrorCode.E_CLEANUP_FAILED.value
            result.error = f"Cleanup failed: {'; '.join(cleanup_errors)}"
        return result

    async def _provision(self, names: SessionResourceNames, location: str) -> LiveSessionOutput:
        cfg = self._cfg
        media = self.media

        await media.create_live_event(
            names.live_event,
            location=location,
            access_token=cfg.LIVE_EVENT_ACCESS_TOKEN,
            description=cfg.LIVE_EVENT_DESCRIPTION,
        )

        asset = await media.create_asset(names.asset)
        if asset.name:
            await media.create_live_output(
                names.live_event,
                names.live_output,
                asset_name=asset.name,
                manifest_name=cfg.MANIFEST_NAME,
                archive_window=timedelta(minutes=cfg.ARCHIVE_WINDOW_MINUTES),
                description=cfg.LIVE_OUTPUT_DESCRIPTION,
            )
        else:
            logger.warning(f"Asset {names.asset} returned no name, skipping live output")

        await media.start_live_event(names.live_event)
        live_event = await media.get_live_event(names.live_event)
        if live_event is None:
            raise AppError(
                errcode=AppErrorCode.E_RESOURCE_NOT_FOUND,
                errmesg=f"Live event {names.live_event} disappeared after start",
            )

        output = LiveSessionOutput(
            ingest_url=_first_endpoint_url(live_event.input),
            preview_endpoint=_first_endpoint_url(live_event.preview),
        )
        if output.ingest_url:
            logger.info(f"📡 RTMP ingest: {output.ingest_url}")
        else:
            logger.warning(f"Live event {names.live_event} has no ingest endpoint yet")
        if output.preview_endpoint:
            logger.info(f"👀 Preview URL: {output.preview_endpoint}")

        locator = await create_streaming_locator(media, names.asset, names.streaming_locator)

        endpoint = await media.get_streaming_endpoint(names.streaming_endpoint)
        if endpoint.resource_state != RUNNING_STATE:
            wait = cfg.WAIT_FOR_STREAMING_ENDPOINT
            if not wait:
                logger.warning(
                    f"Streaming endpoint {names.streaming_endpoint} start not awaited, "
                    "manifests may not be served yet"
                )
            await media.start_streaming_endpoint(names.streaming_endpoint, wait=wait)

        manifests = build_manifest_paths(
            PLAYBACK_SCHEME,
            endpoint.host_name,
            locator.streaming_locator_id,
            cfg.MANIFEST_NAME,
        )
        output.streaming_endpoint = endpoint.host_name
        output.hls_manifest = manifests.hls_manifest
        output.dash_manifest = manifests.dash_manifest
        logger.info(f"HLS manifest: {output.hls_manifest}")
        logger.info(f"DASH manifest: {output.dash_manifest}")
        logger.info(f"✅ Live session {names.uniqueness} is ready")
        return output
