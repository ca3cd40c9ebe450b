"""
Video Generation Service

Veo video generation through the Gemini API:
- InputCollector: latest form values
- GenerationOrchestrator: submit, poll, deliver
- StudioSession: UI state machine and error classification
"""

from .client import VeoClient
from .errors import (
    ClassifiedError,
    GenerationCancelledError,
    NoVideosGeneratedError,
    PollTimeoutError,
    RemoteServiceError,
    VideoGenerationError,
    classify_error,
)
from .host import FormHost, VideoSink
from .inputs import InputCollector
from .models import (
    AspectRatio,
    DownloadedVideo,
    GenerationOperation,
    GenerationRequest,
    GenerationResult,
    InputSnapshot,
    SourceImage,
    VideoReference,
)
from .orchestrator import GenerationOrchestrator
from .session import SessionState, StudioSession

__all__ = [
    "VeoClient",
    "ClassifiedError",
    "GenerationCancelledError",
    "NoVideosGeneratedError",
    "PollTimeoutError",
    "RemoteServiceError",
    "VideoGenerationError",
    "classify_error",
    "FormHost",
    "VideoSink",
    "InputCollector",
    "AspectRatio",
    "DownloadedVideo",
    "GenerationOperation",
    "GenerationRequest",
    "GenerationResult",
    "InputSnapshot",
    "SourceImage",
    "VideoReference",
    "GenerationOrchestrator",
    "SessionState",
    "StudioSession",
]
