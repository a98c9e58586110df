"""Models describing one provisioned live session and its outcome."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from livecast.domain.utils.idgen import (
    asset_name,
    live_event_name,
    live_output_name,
    new_uniqueness_token,
    streaming_locator_name,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionResourceNames(_CamelModel):
    """Names of every resource touched by one run, derived from a single token."""

    uniqueness: str
    live_event: str
    asset: str
    live_output: str
    streaming_locator: str
    streaming_endpoint: str = "default"

    @classmethod
    def generate(
        cls,
        streaming_endpoint: str = "default",
        uniqueness: str | None = None,
    ) -> SessionResourceNames:
        token = uniqueness or new_uniqueness_token()
        return cls(
            uniqueness=token,
            live_event=live_event_name(token),
            asset=asset_name(token),
            live_output=live_output_name(token),
            streaming_locator=streaming_locator_name(token),
            streaming_endpoint=streaming_endpoint,
        )


class ManifestPaths(_CamelModel):
    hls_manifest: str
    dash_manifest: str


class LiveSessionOutput(_CamelModel):
    """Playback and ingest URLs of a started session.

    Each field stays None when the service did not populate the matching
    endpoint list, so callers must handle the not-yet-available case.
    """

    ingest_url: str | None = Field(default=None, description="RTMP ingest URL")
    preview_endpoint: str | None = Field(default=None, description="Preview playback URL")
    streaming_endpoint: str | None = Field(
        default=None, description="Host name of the streaming endpoint"
    )
    hls_manifest: str | None = Field(default=None, description="HLS (CMAF) manifest URL")
    dash_manifest: str | None = Field(default=None, description="DASH (CMAF) manifest URL")


class SessionRunResult(_CamelModel):
    names: SessionResourceNames | None = None
    output: LiveSessionOutput | None = None
    error: str | None = None
    errcode: str | None = None
    cleanup_errors: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.output is not None
