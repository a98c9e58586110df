from pydantic import BaseModel

from livecast.shared.config import config


def _optional(key: str) -> str | None:
    return (config.get(key) or "").strip() or None


def _flag(key: str, default: str) -> bool:
    return (config.get(key) or default).strip().lower() == "true"


class AppEnvironConfig(BaseModel):
    # Service principal credentials. Not validated here; a missing value
    # surfaces as an authentication failure when the session starts.
    AADCLIENTID: str | None = _optional("AADCLIENTID")
    AADSECRET: str | None = _optional("AADSECRET")
    AADTENANTDOMAIN: str | None = _optional("AADTENANTDOMAIN")

    # Media Services account coordinates
    SUBSCRIPTIONID: str | None = _optional("SUBSCRIPTIONID")
    RESOURCEGROUP: str | None = _optional("RESOURCEGROUP")
    ACCOUNTNAME: str | None = _optional("ACCOUNTNAME")

    # Pre-existing delivery endpoint; never created or deleted by a run
    STREAMING_ENDPOINT_NAME: str = (config.get("STREAMING_ENDPOINT_NAME") or "default").strip()

    # Fixed ingest access token keeps the RTMP ingest URL stable across runs.
    # When unset the service generates a random one per live event.
    LIVE_EVENT_ACCESS_TOKEN: str | None = _optional("LIVE_EVENT_ACCESS_TOKEN")
    LIVE_EVENT_DESCRIPTION: str = (
        config.get("LIVE_EVENT_DESCRIPTION") or "livecast live event"
    ).strip()
    LIVE_OUTPUT_DESCRIPTION: str = (
        config.get("LIVE_OUTPUT_DESCRIPTION") or "livecast archive output"
    ).strip()
    MANIFEST_NAME: str = (config.get("MANIFEST_NAME") or "output").strip()
    ARCHIVE_WINDOW_MINUTES: int = int((config.get("ARCHIVE_WINDOW_MINUTES") or "").strip() or 60)

    # Poll interval (seconds) for long-running control plane operations
    LRO_POLLING_INTERVAL: int = int((config.get("LRO_POLLING_INTERVAL") or "").strip() or 5)

    # When false the streaming endpoint start is fire-and-forget and manifests
    # may be handed out before the endpoint actually serves them.
    WAIT_FOR_STREAMING_ENDPOINT: bool = _flag("WAIT_FOR_STREAMING_ENDPOINT", "true")
    # Streaming locators are left in place unless this is enabled.
    DELETE_STREAMING_LOCATOR: bool = _flag("DELETE_STREAMING_LOCATOR", "false")

    LOG_LEVEL: str = (config.get("LOG_LEVEL") or "INFO").strip().upper()


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
