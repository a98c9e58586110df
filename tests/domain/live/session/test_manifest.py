"""Tests for manifest URL composition."""

from unittest.mock import patch

from livecast.domain.live.session._manifest import build_manifest_paths


class TestBuildManifestPaths:
    """Tests for build_manifest_paths."""

    def test_builds_hls_and_dash_urls(self):
        """Test HLS and DASH URLs share the locator base path."""
        # Act
        paths = build_manifest_paths("https", "abc.streaming.media.azure.net", "L1", "output")

        # Assert
        assert (
            paths.hls_manifest
            == "https://abc.streaming.media.azure.net/L1/output.ism/manifest(format=m3u8-cmaf)"
        )
        assert (
            paths.dash_manifest
            == "https://abc.streaming.media.azure.net/L1/output.ism/manifest(format=mpd-time-cmaf)"
        )

    def test_is_deterministic_and_offline(self):
        """Test identical inputs give identical outputs without touching the network."""
        # Act
        with patch("socket.socket", side_effect=AssertionError("network access")):
            first = build_manifest_paths("https", "host.example.net", "loc-1", "archive")
            second = build_manifest_paths("https", "host.example.net", "loc-1", "archive")

        # Assert
        assert first == second

    def test_missing_parts_do_not_raise(self):
        """Test absent hostname/locator id still produce a string."""
        # Act
        paths = build_manifest_paths("https", None, None, "output")

        # Assert
        assert paths.hls_manifest == "https://None/None/output.ism/manifest(format=m3u8-cmaf)"
        assert paths.dash_manifest.endswith("(format=mpd-time-cmaf)")
