"""Azure Media Services helper service.

This module provides a thin async wrapper around the `azure-mgmt-media` package,
authenticated with a service principal through `azure-identity`.

Usage:
    from livecast.services.integrations.media_service import MediaService

    media = MediaService()
    await media.authenticate()

    # Create a pass-through RTMP live event
    live_event = await media.create_live_event("liveEvent-1234", location="westeurope")

    # Start it and read the ingest URL
    await media.start_live_event("liveEvent-1234")
    live_event = await media.get_live_event("liveEvent-1234")

    await media.close()
"""

from __future__ import annotations

from datetime import timedelta

from azure.core.exceptions import ClientAuthenticationError, ResourceNotFoundError
from azure.identity.aio import ClientSecretCredential
from azure.mgmt.media.aio import AzureMediaServices
from azure.mgmt.media.models import (
    Asset,
    Hls,
    IPAccessControl,
    IPRange,
    LiveEvent,
    LiveEventActionInput,
    LiveEventEncoding,
    LiveEventInput,
    LiveEventInputAccessControl,
    LiveEventPreview,
    LiveEventPreviewAccessControl,
    LiveOutput,
    MediaService as MediaServiceAccount,
    StreamingEndpoint,
    StreamingLocator,
)
from loguru import logger

from livecast.app_config import AppEnvironConfig, get_app_environ_config
from livecast.utils.app_errors import AppError, AppErrorCode

ARM_SCOPE = "https://management.azure.com/.default"

# Predefined policy for unencrypted delivery; manifests play without DRM.
CLEAR_STREAMING_POLICY = "Predefined_ClearStreamingOnly"

RUNNING_STATE = "Running"


def allow_all_ip_access() -> IPAccessControl:
    """IP allow-list admitting every IPv4 source (0.0.0.0/0)."""
    return IPAccessControl(
        allow=[IPRange(name="AllowAll", address="0.0.0.0", subnet_prefix_length=0)]
    )


class MediaService:
    """Service wrapper for the Azure Media Services control plane."""

    def __init__(self, cfg: AppEnvironConfig | None = None) -> None:
        self._cfg = cfg or get_app_environ_config()
        self._credential: ClientSecretCredential | None = None
        self._client: AzureMediaServices | None = None

    @property
    def resource_group(self) -> str:
        return self._cfg.RESOURCEGROUP or ""

    @property
    def account_name(self) -> str:
        return self._cfg.ACCOUNTNAME or ""

    @property
    def is_authenticated(self) -> bool:
        return self._client is not None

    async def authenticate(self) -> None:
        """Exchange service principal credentials for a token and build the client.

        The token is requested eagerly so a bad secret fails here rather than on
        the first control plane call.

        Raises:
            AppError: E_INVALID_CONFIG if credentials are missing,
                E_AUTH_FAILED if the token exchange is rejected
        """
        cfg = self._cfg
        missing = [
            key
            for key in ("AADCLIENTID", "AADSECRET", "AADTENANTDOMAIN", "SUBSCRIPTIONID")
            if not getattr(cfg, key)
        ]
        if missing:
            logger.error(f"Media Services credentials not configured: {', '.join(missing)}")
            raise AppError(
                errcode=AppErrorCode.E_INVALID_CONFIG,
                errmesg=f"Missing configuration: {', '.join(missing)}",
            )

        credential = ClientSecretCredential(
            tenant_id=cfg.AADTENANTDOMAIN,
            client_id=cfg.AADCLIENTID,
            client_secret=cfg.AADSECRET,
        )
        try:
            await credential.get_token(ARM_SCOPE)
        except ClientAuthenticationError as e:
            await credential.close()
            logger.error(f"Error retrieving Media Services client: {e}")
            raise AppError(
                errcode=AppErrorCode.E_AUTH_FAILED,
                errmesg=f"Service principal authentication failed: {e}",
            ) from e
        except Exception:
            # Unreachable login host, timeouts: release the transport and re-raise.
            await credential.close()
            raise

        self._credential = credential
        self._client = AzureMediaServices(
            credential,
            cfg.SUBSCRIPTIONID,
            polling_interval=cfg.LRO_POLLING_INTERVAL,
        )
        logger.info("Media Services client created")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
        if self._credential is not None:
            await self._credential.close()
            self._credential = None

    def _get_client(self) -> AzureMediaServices:
        if self._client is None:
            raise AppError(
                errcode=AppErrorCode.E_CLIENT_NOT_READY,
                errmesg="Media Services client used before authenticate()",
            )
        return self._client

    async def get_account(self) -> MediaServiceAccount:
        client = self._get_client()
        account = await client.mediaservices.get(self.resource_group, self.account_name)
        logger.info(f"Resolved Media Services account {self.account_name} in {account.location}")
        return account

    # Live events

    async def create_live_event(
        self,
        name: str,
        location: str,
        access_token: str | None = None,
        description: str | None = None,
    ) -> LiveEvent:
        """Create a stopped pass-through RTMP live event and wait for completion.

        Args:
            name: Live event name
            location: Azure region, normally the account location
            access_token: Fixed ingest token; keeps the ingest URL stable across
                runs. When None the service generates a random one.
            description: Free-form description

        Returns:
            The created LiveEvent
        """
        client = self._get_client()
        parameters = LiveEvent(
            location=location,
            description=description,
            use_static_hostname=True,
            input=LiveEventInput(
                streaming_protocol="RTMP",
                access_control=LiveEventInputAccessControl(ip=allow_all_ip_access()),
                access_token=access_token,
            ),
            encoding=LiveEventEncoding(encoding_type="PassthroughStandard"),
            preview=LiveEventPreview(
                access_control=LiveEventPreviewAccessControl(ip=allow_all_ip_access())
            ),
            stream_options=["LowLatency"],
        )

        logger.info(f"Creating live event {name} in {location}")
        poller = await client.live_events.begin_create(
            self.resource_group,
            self.account_name,
            name,
            parameters,
            auto_start=False,
        )
        live_event = await poller.result()
        logger.info(f"Created live event {name}")
        return live_event

    async def start_live_event(self, name: str) -> None:
        client = self._get_client()
        logger.info(f"Starting live event {name}, please stand by")
        poller = await client.live_events.begin_start(self.resource_group, self.account_name, name)
        await poller.result()
        logger.info(f"Live event {name} started")

    async def get_live_event(self, name: str) -> LiveEvent | None:
        """Get a live event by name, or None if it does not exist."""
        client = self._get_client()
        try:
            return await client.live_events.get(self.resource_group, self.account_name, name)
        except ResourceNotFoundError:
            logger.debug(f"Live event {name} not found")
            return None

    async def stop_live_event(self, name: str, remove_outputs_on_stop: bool = False) -> None:
        client = self._get_client()
        logger.info(f"Stopping live event {name}")
        poller = await client.live_events.begin_stop(
            self.resource_group,
            self.account_name,
            name,
            LiveEventActionInput(remove_outputs_on_stop=remove_outputs_on_stop),
        )
        await poller.result()
        logger.info(f"Live event {name} stopped")

    async def delete_live_event(self, name: str) -> None:
        client = self._get_client()
        logger.info(f"Deleting live event {name}")
        poller = await client.live_events.begin_delete(self.resource_group, self.account_name, name)
        await poller.result()
        logger.info(f"Deleted live event {name}")

    # Assets and live outputs

    async def create_asset(self, name: str) -> Asset:
        client = self._get_client()
        logger.info(f"Creating an asset named {name}")
        return await client.assets.create_or_update(
            self.resource_group, self.account_name, name, Asset()
        )

    async def create_live_output(
        self,
        live_event_name: str,
        name: str,
        asset_name: str,
        manifest_name: str,
        archive_window: timedelta = timedelta(hours=1),
        description: str | None = None,
    ) -> LiveOutput:
        """Record a live event into an asset.

        Args:
            live_event_name: Live event whose stream is archived
            name: Live output name
            asset_name: Destination asset, must already exist
            manifest_name: Manifest base name used in playback URLs
            archive_window: Retention window of the archive
            description: Free-form description

        Returns:
            The created LiveOutput
        """
        client = self._get_client()
        parameters = LiveOutput(
            description=description,
            asset_name=asset_name,
            manifest_name=manifest_name,
            archive_window_length=archive_window,
            hls=Hls(fragments_per_ts_segment=1),
        )

        logger.info(f"Creating a live output named {name}")
        poller = await client.live_outputs.begin_create(
            self.resource_group,
            self.account_name,
            live_event_name,
            name,
            parameters,
        )
        live_output = await poller.result()
        logger.info(f"Created live output {name} -> asset {asset_name}")
        return live_output

    async def get_live_output(self, live_event_name: str, name: str) -> LiveOutput | None:
        """Get a live output by name, or None if it (or its live event) does not exist."""
        client = self._get_client()
        try:
            return await client.live_outputs.get(
                self.resource_group, self.account_name, live_event_name, name
            )
        except ResourceNotFoundError:
            logger.debug(f"Live output {name} not found on live event {live_event_name}")
            return None

    async def delete_live_output(self, live_event_name: str, name: str) -> None:
        client = self._get_client()
        logger.info(f"Deleting live output {name}")
        poller = await client.live_outputs.begin_delete(
            self.resource_group, self.account_name, live_event_name, name
        )
        await poller.result()
        logger.info(f"Deleted live output {name}")

    # Streaming locators and endpoints

    async def create_streaming_locator(
        self,
        name: str,
        asset_name: str,
        streaming_policy_name: str = CLEAR_STREAMING_POLICY,
    ) -> StreamingLocator:
        client = self._get_client()
        logger.info(f"Creating streaming locator {name} for asset {asset_name}")
        return await client.streaming_locators.create(
            self.resource_group,
            self.account_name,
            name,
            StreamingLocator(asset_name=asset_name, streaming_policy_name=streaming_policy_name),
        )

    async def delete_streaming_locator(self, name: str) -> None:
        client = self._get_client()
        logger.info(f"Deleting streaming locator {name}")
        await client.streaming_locators.delete(self.resource_group, self.account_name, name)

    async def get_streaming_endpoint(self, name: str) -> StreamingEndpoint:
        client = self._get_client()
        endpoint = await client.streaming_endpoints.get(
            self.resource_group, self.account_name, name
        )
        logger.info(f"Streaming endpoint {name} state={endpoint.resource_state}")
        return endpoint

    async def start_streaming_endpoint(self, name: str, wait: bool = True) -> None:
        """Start a streaming endpoint.

        Args:
            name: Streaming endpoint name
            wait: When False the start request is issued but not polled, so the
                endpoint may still be starting when this returns
        """
        client = self._get_client()
        logger.info(f"Starting streaming endpoint {name} (wait={wait})")
        poller = await client.streaming_endpoints.begin_start(
            self.resource_group, self.account_name, name
        )
        if wait:
            await poller.result()
            logger.info(f"Streaming endpoint {name} is running")
