"""Generation service that wraps OrchestratorAgent for streaming progress updates."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, AsyncGenerator, Callable

from conceptsheet.core.agents import OrchestratorAgent
from conceptsheet.core.errors import describe_error
from conceptsheet.core.prompts.prompt_templates import GENERATION_INTERRUPTED_MESSAGE
from conceptsheet.core.schemas import GenerationRequest, Screen

if TYPE_CHECKING:
    from conceptsheet.backend.session_manager import Session

logger = logging.getLogger(__name__)


def make_event(event_type: str, **data) -> str:
    """Create SSE-formatted event."""
    payload = {"event": event_type, **data}
    return f"data: {json.dumps(payload)}\n\n"


class GenerationService:
    """Wraps OrchestratorAgent for async web execution with progress streaming."""

    def __init__(self, orchestrator_factory: Callable[[], OrchestratorAgent] = OrchestratorAgent):
        self.orchestrator_factory = orchestrator_factory
        # Workflows outlive their stream if the client goes away
        self.running_tasks: set[asyncio.Task] = set()

    async def generate_stream(
        self, session: Session, request: GenerationRequest
    ) -> AsyncGenerator[str, None]:
        """Generate a character sheet with streaming progress updates.

        The caller moves the session to the loading screen with
        begin_generation() and passes the returned request along, so the
        guard check happens before the stream starts. If the stream is closed
        before the workflow starts, or the workflow ends without leaving the
        loading screen, the session is returned to upload with an error. A
        workflow that is already running when the client disconnects keeps
        going and leaves its outcome on the session.

        Args:
            session: The user session, already on the loading screen
            request: Context returned by begin_generation()

        Yields:
            SSE-formatted strings with progress events
        """
        orchestrator = self.orchestrator_factory()
        queue: asyncio.Queue[str] = asyncio.Queue()
        task: asyncio.Task | None = None
        getter: asyncio.Future | None = None

        try:
            yield make_event("generation_started", screen=Screen.LOADING.value)

            task = asyncio.create_task(
                orchestrator.generate_for_session(
                    session.state, on_progress=queue.put_nowait, request=request
                )
            )
            self.running_tasks.add(task)
            task.add_done_callback(self.running_tasks.discard)

            # Forward captions while the workflow runs
            while not task.done():
                getter = asyncio.ensure_future(queue.get())
                await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
                if getter.done():
                    yield make_event("progress", status=getter.result())
                else:
                    getter.cancel()

            while not queue.empty():
                yield make_event("progress", status=queue.get_nowait())

            try:
                results = task.result()
            except Exception as e:
                logger.exception("Generation stream for session %s failed", session.session_id)
                if session.state.screen == Screen.LOADING:
                    session.state.fail_generation(describe_error(e))
                yield make_event("generation_error", error=describe_error(e))
            else:
                if session.state.screen == Screen.RESULTS:
                    yield make_event(
                        "generation_complete",
                        success=True,
                        results=[{"label": r.label, "src": r.src} for r in results],
                    )
                else:
                    yield make_event("generation_error", error=session.state.error)

            yield "data: [DONE]\n\n"
        finally:
            if getter is not None and not getter.done():
                getter.cancel()
            if session.state.screen == Screen.LOADING and (task is None or task.done()):
                logger.warning(
                    "Generation stream for session %s ended before the workflow finished",
                    session.session_id,
                )
                session.state.fail_generation(GENERATION_INTERRUPTED_MESSAGE)


# Global generation service instance
generation_service = GenerationService()
