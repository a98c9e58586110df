from .live_session import (
    LiveSessionOutput,
    ManifestPaths,
    SessionResourceNames,
    SessionRunResult,
)

__all__ = [
    "LiveSessionOutput",
    "ManifestPaths",
    "SessionResourceNames",
    "SessionRunResult",
]
