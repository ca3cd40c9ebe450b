"""
Input Collector - latest values reported by the form host.

Each field is updated on its own change notification. Nothing is validated
here; bad values surface as errors from the remote service.
"""

import base64
import logging
import math
import re
from pathlib import Path
from typing import Optional, Union

from .models import InputSnapshot

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def coerce_duration(raw: Union[str, int, float, None]) -> Optional[int]:
    """Coerce a duration field value the way a form's integer parse does.

    "8" -> 8, " 6s" -> 6, "7.9" -> 7, "abc" -> None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    match = _LEADING_INT.match(str(raw).strip())
    return int(match.group()) if match else None


class InputCollector:
    """Holds the current prompt, image, duration and aspect ratio."""

    def __init__(self, duration_seconds: int = 5, aspect_ratio: str = "1:1"):
        self.prompt: str = ""
        self.image_bytes_b64: Optional[str] = None
        self.duration_seconds: Optional[int] = duration_seconds
        self.aspect_ratio: str = aspect_ratio

    def set_prompt(self, text: str):
        self.prompt = text

    def set_image(self, data: Optional[bytes]):
        """Store image bytes base64 encoded. None (no file chosen) keeps the previous image."""
        if data is None:
            return
        self.image_bytes_b64 = base64.b64encode(data).decode("ascii")
        logger.debug(f"Source image updated ({len(data)} bytes)")

    def set_image_file(self, path: Union[str, Path]):
        self.set_image(Path(path).read_bytes())

    def clear_image(self):
        self.image_bytes_b64 = None

    def set_duration(self, raw: Union[str, int, float, None]):
        self.duration_seconds = coerce_duration(raw)

    def set_aspect_ratio(self, value: str):
        self.aspect_ratio = str(value)

    def snapshot(self) -> InputSnapshot:
        """Freeze the current values for one generation."""
        return InputSnapshot(
            prompt=self.prompt,
            image_bytes_b64=self.image_bytes_b64,
            duration_seconds=self.duration_seconds,
            aspect_ratio=self.aspect_ratio,
        )
