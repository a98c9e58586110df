import uuid


def new_uniqueness_token() -> str:
    """Short random token shared by every resource name of one session run."""
    return uuid.uuid4().hex[:8]


def live_event_name(token: str) -> str:
    return f"liveEvent-{token}"


def asset_name(token: str) -> str:
    return f"archiveAsset{token}"


def live_output_name(token: str) -> str:
    return f"liveOutput{token}"


def streaming_locator_name(token: str) -> str:
    return f"liveStreamLocator{token}"
