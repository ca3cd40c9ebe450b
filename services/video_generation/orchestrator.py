"""
Generation Orchestrator

Runs one video generation end to end:
1. Build a GenerationRequest from an input snapshot
2. Submit it to the remote service
3. Poll the operation at a fixed interval until it reports done
4. Fetch every produced video and hand it to the sink for download and playback

The poll loop is unbounded unless max_polls or timeout_seconds is set, and
can be stopped early with cancel().
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    stop_any,
    wait_fixed,
)

from core.config import Config, get_config

from .client import VeoClient
from .errors import (
    GenerationCancelledError,
    NoVideosGeneratedError,
    PollTimeoutError,
    RemoteServiceError,
)
from .host import VideoSink
from .models import (
    DownloadedVideo,
    GenerationOperation,
    GenerationRequest,
    GenerationResult,
    InputSnapshot,
    VideoReference,
)

logger = logging.getLogger(__name__)


def video_filename(index: int) -> str:
    return f"video{index}.mp4"


class GenerationOrchestrator:
    """
    Drives submit -> poll -> deliver for one invocation at a time.

    Usage:
        orchestrator = GenerationOrchestrator(VeoClient(), sink=host)
        result = await orchestrator.generate(collector.snapshot())
    """

    def __init__(
        self,
        remote: VeoClient,
        sink: VideoSink,
        config: Optional[Config] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.remote = remote
        self.sink = sink
        self.config = config or get_config()
        self._sleep = sleep
        self._cancel_event = asyncio.Event()
        self._polls = 0

    def cancel(self):
        """Stop the running poll loop at its next status check."""
        self._cancel_event.set()

    def build_request(self, inputs: InputSnapshot) -> GenerationRequest:
        return GenerationRequest.from_snapshot(
            inputs,
            model=self.config.models.video_model,
            image_mime_type=self.config.models.image_mime_type,
            number_of_videos=self.config.models.number_of_videos,
        )

    async def generate(self, inputs: InputSnapshot) -> GenerationResult:
        """
        Generate video(s) for the given inputs.

        Raises:
            RemoteServiceError: submit, poll or download was rejected
            NoVideosGeneratedError: the operation finished without videos
            PollTimeoutError: the configured poll bound was reached
            GenerationCancelledError: cancel() was called while polling
        """
        self._cancel_event.clear()
        self._polls = 0
        started_at = datetime.utcnow()

        request = self.build_request(inputs)
        operation = await self.remote.submit(request)

        operation, polls = await self._wait_until_done(operation)

        if operation.error:
            error = operation.error
            raise RemoteServiceError(error.get("code"), error.get("message"), error.get("status"))

        references = operation.videos
        if not references:
            raise NoVideosGeneratedError()

        videos = await self._deliver_all(references)

        return GenerationResult(
            operation_name=operation.name,
            model=request.model,
            polls=polls,
            videos=videos,
            started_at=started_at,
            completed_at=datetime.utcnow(),
        )

    def _poll_stop(self):
        polling = self.config.polling
        conditions = [lambda retry_state: self._cancel_event.is_set()]
        if polling.max_polls is not None:
            conditions.append(stop_after_attempt(polling.max_polls))
        if polling.timeout_seconds is not None:
            conditions.append(stop_after_delay(polling.timeout_seconds))
        return stop_any(*conditions)

    async def _fetch_status(self, operation: GenerationOperation) -> GenerationOperation:
        self._polls += 1
        logger.info(f"Waiting for completion (status check {self._polls})")
        refreshed = await self.remote.poll_status(operation)
        logger.debug(f"Operation {refreshed.name}: done={refreshed.done}")
        return refreshed

    async def _wait_until_done(self, operation: GenerationOperation) -> tuple[GenerationOperation, int]:
        """Poll until done. Returns the finished operation and the number of status fetches."""
        if operation.done:
            return operation, self._polls

        interval = self.config.polling.interval_seconds
        retrying = AsyncRetrying(
            retry=retry_if_result(lambda op: not op.done),
            wait=wait_fixed(interval),
            stop=self._poll_stop(),
            sleep=self._sleep,
            reraise=True,
        )

        # First status check also waits one interval after submit
        await self._sleep(interval)
        try:
            finished = await retrying(self._fetch_status, operation)
        except RetryError:
            if self._cancel_event.is_set():
                raise GenerationCancelledError(operation.name) from None
            raise PollTimeoutError(operation.name, self._polls) from None

        return finished, self._polls

    async def _deliver_all(self, references: list[VideoReference]) -> list[DownloadedVideo]:
        # Handlers run independently; the player ends up on whichever finishes last
        outcomes = await asyncio.gather(
            *(self._deliver(index, reference) for index, reference in enumerate(references)),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)

    async def _deliver(self, index: int, reference: VideoReference) -> DownloadedVideo:
        filename = video_filename(index)
        data = await self.remote.fetch_video(reference)

        location = self.sink.download(filename, data)
        self.sink.show_video(location)
        logger.info(f"Downloaded video {filename}")

        return DownloadedVideo(
            index=index,
            filename=filename,
            uri=reference.uri or "",
            size_bytes=len(data),
            location=location,
        )
