"""
Console Form Host

Terminal implementation of the form host: status lines are printed with
ANSI colors, downloaded videos are written to an output directory and the
"player" reports the file it would show.
"""

import getpass
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from services.video_generation.session import STATUS_DONE

logger = logging.getLogger(__name__)

QUOTA_NOTICE = (
    "The request was rejected for quota or credentials. "
    "Add a valid API key (set GEMINI_API_KEY or run with --ask-key), "
    "or check the usage limits of your plan."
)


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def colored(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{color}{text}{Colors.RESET}"


class ConsoleFormHost:
    """
    Form host for the terminal.

    Usage:
        host = ConsoleFormHost(output_dir="output")
        session = StudioSession(host, collector, orchestrator)
    """

    def __init__(
        self,
        output_dir: str = "output",
        stream: Optional[TextIO] = None,
        use_color: Optional[bool] = None,
    ):
        self.output_dir = Path(output_dir)
        self.stream = stream or sys.stdout
        if use_color is None:
            use_color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_color = use_color

        self.controls_enabled = True
        self.status = ""
        self.video_source: Optional[str] = None
        self.video_visible = False
        self.quota_notice_visible = False
        self.downloads: list[Path] = []

    def _print(self, text: str, color: Optional[str] = None):
        if color and self.use_color:
            text = colored(text, color)
        print(text, file=self.stream, flush=True)

    def set_controls_enabled(self, enabled: bool) -> None:
        self.controls_enabled = enabled
        logger.debug(f"Controls {'enabled' if enabled else 'disabled'}")

    def set_status(self, text: str) -> None:
        self.status = text
        if not text:
            return
        if text == STATUS_DONE:
            self._print(text, Colors.GREEN)
        elif text.endswith("..."):
            self._print(text, Colors.CYAN)
        else:
            self._print(text, Colors.RED)

    def hide_video(self) -> None:
        self.video_visible = False

    def download(self, filename: str, data: bytes) -> str:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        path.write_bytes(data)
        self.downloads.append(path)

        self._print(f"Saved {path} ({len(data) / 1024 / 1024:.1f} MB)", Colors.DIM)
        return str(path)

    def show_video(self, location: str) -> None:
        self.video_source = location
        self.video_visible = True
        self._print(f"Video ready: {location}", Colors.BOLD)

    def set_quota_notice_visible(self, visible: bool) -> None:
        if visible and not self.quota_notice_visible:
            self._print(QUOTA_NOTICE, Colors.YELLOW)
        self.quota_notice_visible = visible

    def open_key_selection(self) -> Optional[str]:
        try:
            api_key = getpass.getpass("Gemini API key: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        return api_key or None
