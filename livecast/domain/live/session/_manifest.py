"""Playback manifest URL composition."""

from livecast.schemas import ManifestPaths

# HLS compliant players (HLS.js, Shaka, ExoPlayer) and iOS devices
HLS_FORMAT = "format=m3u8-cmaf"
# DASH players such as dash.js
DASH_FORMAT = "format=mpd-time-cmaf"


def build_manifest_paths(
    scheme: str,
    hostname: str | None,
    streaming_locator_id: str | None,
    manifest_name: str,
) -> ManifestPaths:
    """Build the HLS and DASH manifest URLs for a streaming locator.

    Inputs are not validated: a missing hostname or locator id yields a
    malformed URL rather than an error.

    Example:
        >>> build_manifest_paths("https", "abc.streaming.media.azure.net", "L1", "output").hls_manifest
        'https://abc.streaming.media.azure.net/L1/output.ism/manifest(format=m3u8-cmaf)'
    """
    manifest_base = f"{scheme}://{hostname}/{streaming_locator_id}/{manifest_name}.ism/manifest"
    return ManifestPaths(
        hls_manifest=f"{manifest_base}({HLS_FORMAT})",
        dash_manifest=f"{manifest_base}({DASH_FORMAT})",
    )
