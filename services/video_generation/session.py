"""
Studio Session - UI state machine around the orchestrator.

IDLE -> GENERATING -> (DONE | FAILED). Controls are disabled while
generating and re-enabled after either outcome. Failures are classified
into a status message and an optional quota/auth notice.
"""

import logging
from enum import Enum
from typing import Optional

from .errors import classify_error
from .host import FormHost
from .inputs import InputCollector
from .models import GenerationResult
from .orchestrator import GenerationOrchestrator

logger = logging.getLogger(__name__)

STATUS_GENERATING = "Generating..."
STATUS_DONE = "Done."


class SessionState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


class StudioSession:
    """
    Connects a form host, the input collector and the orchestrator.

    Usage:
        session = StudioSession(host, collector, orchestrator)
        collector.set_prompt("A neon hologram of a cat driving at top speed")
        await session.generate()
    """

    def __init__(
        self,
        host: FormHost,
        collector: InputCollector,
        orchestrator: GenerationOrchestrator,
    ):
        self.host = host
        self.collector = collector
        self.orchestrator = orchestrator
        self.state = SessionState.IDLE
        self.last_result: Optional[GenerationResult] = None
        self.last_error: Optional[BaseException] = None

    @property
    def busy(self) -> bool:
        return self.state == SessionState.GENERATING

    async def generate(self) -> bool:
        """Run one generation from the current inputs. Returns True on success."""
        if self.busy:
            logger.warning("Generation already in progress, ignoring trigger")
            return False

        self.state = SessionState.GENERATING
        self.last_result = None
        self.last_error = None

        self.host.set_status(STATUS_GENERATING)
        self.host.hide_video()
        self.host.set_controls_enabled(False)
        self.host.set_quota_notice_visible(False)

        try:
            self.last_result = await self.orchestrator.generate(self.collector.snapshot())
            self.host.set_status(STATUS_DONE)
            self.state = SessionState.DONE
        except Exception as e:
            logger.error(f"Generation failed: {type(e).__name__}: {e}")
            self.last_error = e

            classified = classify_error(e)
            self.host.set_status(classified.display_message)
            if classified.is_quota_or_auth_error:
                self.host.set_quota_notice_visible(True)
            self.state = SessionState.FAILED
        finally:
            if self.state == SessionState.GENERATING:
                # Cancelled task; nothing was reported
                self.state = SessionState.IDLE
            self.host.set_controls_enabled(True)

        return self.state == SessionState.DONE

    def cancel(self):
        """Ask the running generation to stop polling."""
        if self.busy:
            self.orchestrator.cancel()

    def select_api_key(self) -> bool:
        """Open the host's key selection and install the chosen key."""
        api_key = self.host.open_key_selection()
        if not api_key:
            return False

        self.orchestrator.remote.set_api_key(api_key)
        self.host.set_quota_notice_visible(False)
        logger.info("API key updated")
        return True
