"""
Ports between the generator and the UI around it.
"""

from typing import Optional, Protocol


class VideoSink(Protocol):
    """Receives produced videos."""

    def download(self, filename: str, data: bytes) -> str:
        """Save a video for the user and return a playable location."""

    def show_video(self, location: str) -> None:
        """Make a video visible in the player."""


class FormHost(VideoSink, Protocol):
    """The UI surrounding the generator: controls, status line, player, notices."""

    def set_controls_enabled(self, enabled: bool) -> None:
        ...

    def set_status(self, text: str) -> None:
        ...

    def hide_video(self) -> None:
        ...

    def set_quota_notice_visible(self, visible: bool) -> None:
        ...

    def open_key_selection(self) -> Optional[str]:
        """Let the user pick an API key. Returns the key, or None if cancelled."""
