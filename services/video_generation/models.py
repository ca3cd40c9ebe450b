"""
Data model for a single video generation invocation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class AspectRatio(str, Enum):
    """Output frame shapes offered by the form."""
    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


@dataclass(frozen=True)
class InputSnapshot:
    """Values of the input form at the moment generation was triggered."""
    prompt: str = ""
    image_bytes_b64: Optional[str] = None
    duration_seconds: Optional[int] = 5
    aspect_ratio: str = AspectRatio.SQUARE.value


@dataclass(frozen=True)
class SourceImage:
    """First frame for image-to-video, base64 encoded."""
    image_bytes_b64: str
    mime_type: str = "image/png"


@dataclass(frozen=True)
class GenerationRequest:
    """Request for video generation."""
    prompt: str
    model: str
    aspect_ratio: str
    duration_seconds: Optional[int] = None
    source_image: Optional[SourceImage] = None
    number_of_videos: int = 1

    @classmethod
    def from_snapshot(
        cls,
        inputs: InputSnapshot,
        model: str,
        image_mime_type: str = "image/png",
        number_of_videos: int = 1,
    ) -> "GenerationRequest":
        """Build a request; the image is attached only when bytes are present."""
        source_image = None
        if inputs.image_bytes_b64:
            source_image = SourceImage(inputs.image_bytes_b64, image_mime_type)

        return cls(
            prompt=inputs.prompt,
            model=model,
            aspect_ratio=inputs.aspect_ratio,
            duration_seconds=inputs.duration_seconds,
            source_image=source_image,
            number_of_videos=number_of_videos,
        )


@dataclass(frozen=True)
class VideoReference:
    """Fetchable locator of one produced video."""
    uri: Optional[str] = None

    # Some backends return the bytes inline instead of a URI
    data: Optional[bytes] = field(default=None, repr=False)


@dataclass
class GenerationOperation:
    """Handle for an in-flight or completed remote generation job."""
    name: Optional[str]
    done: bool = False
    videos: Optional[List[VideoReference]] = None
    error: Optional[dict] = None

    # SDK operation object, needed to re-fetch status
    raw: Any = field(default=None, repr=False)


class DownloadedVideo(BaseModel):
    """A produced video handed to the form host."""
    index: int
    filename: str
    uri: str
    size_bytes: int
    location: Optional[str] = None


class GenerationResult(BaseModel):
    """Outcome of one successful generate() call."""
    operation_name: Optional[str] = None
    model: str
    polls: int = 0
    videos: List[DownloadedVideo] = []
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def processing_time_seconds(self) -> Optional[float]:
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()
