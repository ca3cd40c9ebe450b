"""
Veo Client - remote side of video generation.

Narrow submit / poll / fetch contract over the google-genai SDK:
- submit: start a generate_videos operation
- poll_status: refresh an operation by handle
- fetch_video: download a produced video with httpx

SDK API errors are re-raised as RemoteServiceError so their code and message
travel in the exception text.
"""

import base64
import logging
from typing import Any, Optional
from urllib.parse import unquote

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from core.config import Config, get_config

from .errors import RemoteServiceError, VideoGenerationError
from .models import GenerationOperation, GenerationRequest, VideoReference

logger = logging.getLogger(__name__)


def _remote_error(exc: genai_errors.APIError) -> RemoteServiceError:
    return RemoteServiceError(exc.code, exc.message, getattr(exc, "status", None))


def to_operation(operation: Any) -> GenerationOperation:
    """Convert an SDK operation into a GenerationOperation."""
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    generated = getattr(response, "generated_videos", None) if response is not None else None

    videos = None
    if generated is not None:
        videos = []
        for item in generated:
            video = getattr(item, "video", None)
            if video is None:
                continue
            videos.append(
                VideoReference(
                    uri=getattr(video, "uri", None),
                    data=getattr(video, "video_bytes", None),
                )
            )

    return GenerationOperation(
        name=getattr(operation, "name", None),
        done=bool(getattr(operation, "done", False)),
        videos=videos,
        error=getattr(operation, "error", None),
        raw=operation,
    )


class VeoClient:
    """
    Client for the Veo video models through the Gemini API.

    Usage:
        client = VeoClient()
        operation = await client.submit(request)
        while not operation.done:
            operation = await client.poll_status(operation)
        data = await client.fetch_video(operation.videos[0])
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        genai_client: Optional[Any] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_config()
        self._genai_client = genai_client
        self._http_client = http_client

    def _get_genai_client(self):
        """Get or create the Gemini client (lazy-loaded)."""
        if self._genai_client is None:
            if not self.config.api.google_api_key:
                # Same outcome as calling the service without a key
                raise RemoteServiceError(401, "API key not set", status="UNAUTHENTICATED")
            self._genai_client = genai.Client(api_key=self.config.api.google_api_key)
        return self._genai_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.download.timeout_seconds)
        return self._http_client

    def set_api_key(self, api_key: str):
        """Install a new key; the SDK client is rebuilt on next use."""
        self.config.api.google_api_key = api_key
        self._genai_client = None

    async def close(self):
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def submit(self, request: GenerationRequest) -> GenerationOperation:
        """Start a generation job."""
        client = self._get_genai_client()

        params = {
            "model": request.model,
            "prompt": request.prompt,
            "config": types.GenerateVideosConfig(
                aspect_ratio=request.aspect_ratio,
                duration_seconds=request.duration_seconds,
                number_of_videos=request.number_of_videos,
            ),
        }
        if request.source_image is not None:
            params["image"] = types.Image(
                image_bytes=base64.b64decode(request.source_image.image_bytes_b64),
                mime_type=request.source_image.mime_type,
            )

        mode = "image-to-video" if request.source_image else "text-to-video"
        logger.info(f"Veo request: model={request.model}, mode={mode}, prompt={request.prompt[:50]}...")

        try:
            operation = await client.aio.models.generate_videos(**params)
        except genai_errors.APIError as e:
            raise _remote_error(e) from e

        result = to_operation(operation)
        logger.info(f"Veo operation started: {result.name}")
        return result

    async def poll_status(self, operation: GenerationOperation) -> GenerationOperation:
        """Re-fetch an operation by its handle."""
        client = self._get_genai_client()
        handle = operation.raw or types.GenerateVideosOperation(name=operation.name)

        try:
            refreshed = await client.aio.operations.get(handle)
        except genai_errors.APIError as e:
            raise _remote_error(e) from e

        return to_operation(refreshed)

    async def fetch_video(self, reference: VideoReference) -> bytes:
        """Download the bytes behind a video reference."""
        if reference.data is not None:
            return reference.data
        if not reference.uri:
            raise VideoGenerationError("Generated video has no URI", error_code="NO_VIDEO_URI")

        url = unquote(reference.uri)
        client = await self._get_http_client()
        headers = {"x-goog-api-key": self.config.api.google_api_key}

        try:
            response = await client.get(url, headers=headers, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteServiceError(
                e.response.status_code,
                f"Video download failed: {e.response.reason_phrase}",
            ) from e
        except httpx.RequestError as e:
            raise VideoGenerationError(
                f"Video download failed: {type(e).__name__}: {e}",
                error_code="DOWNLOAD_ERROR",
            ) from e

        logger.info(f"Video fetched: {len(response.content) / 1024 / 1024:.1f} MB")
        return response.content
