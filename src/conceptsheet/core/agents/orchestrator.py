"""Orchestrator agent that coordinates the character sheet pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from conceptsheet.core.agents.describer import CharacterDescriberAgent
from conceptsheet.core.agents.view_renderer import ViewRendererAgent
from conceptsheet.core.catalog import CHARACTER_VIEWS, View
from conceptsheet.core.errors import describe_error
from conceptsheet.core.model_provider import DescriptionService, ImageGenerationService
from conceptsheet.core.prompts.prompt_templates import DESCRIBE_PROGRESS
from conceptsheet.core.retry import RetryPolicy
from conceptsheet.core.schemas import GeneratedResult, GenerationRequest

if TYPE_CHECKING:
    from conceptsheet.core.session import SessionState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class PipelineStep:
    """One fixed step of the pipeline."""

    kind: str
    view: View | None = None

    @property
    def name(self) -> str:
        if self.view is None:
            return self.kind
        return f"{self.kind}:{self.view.value}"


PIPELINE_STEPS: tuple[PipelineStep, ...] = (
    PipelineStep("describe"),
    *(PipelineStep("generate", view) for view in CHARACTER_VIEWS),
    PipelineStep("aggregate"),
)


@dataclass
class CharacterSheetTask:
    """State carried through the pipeline for one generation request."""

    request: GenerationRequest
    description: str | None = None
    rendered: list[GeneratedResult] = field(default_factory=list)
    results: list[GeneratedResult] = field(default_factory=list)
    position: int = 0

    @property
    def done(self) -> bool:
        return self.position >= len(PIPELINE_STEPS)

    @property
    def next_step(self) -> PipelineStep | None:
        if self.done:
            return None
        return PIPELINE_STEPS[self.position]


class OrchestratorAgent:
    """Orchestrates describe -> generate(view) x 3 -> aggregate."""

    def __init__(
        self,
        description_service: DescriptionService | None = None,
        image_service: ImageGenerationService | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        """Initialize the Orchestrator agent.

        Args:
            description_service: Service used by the describer (Gemini by default)
            image_service: Service used by the view renderer (Imagen by default)
            retry_policy: Retry policy for each view (from config by default)
        """
        self.description_service = description_service
        self.image_service = image_service
        self.retry_policy = retry_policy

        # Sub-agents
        self._describer: CharacterDescriberAgent | None = None
        self._renderer: ViewRendererAgent | None = None

    @property
    def describer(self) -> CharacterDescriberAgent:
        """Get or create the describer agent."""
        if self._describer is None:
            self._describer = CharacterDescriberAgent(service=self.description_service)
        return self._describer

    @property
    def renderer(self) -> ViewRendererAgent:
        """Get or create the view renderer agent."""
        if self._renderer is None:
            self._renderer = ViewRendererAgent(
                service=self.image_service, retry_policy=self.retry_policy
            )
        return self._renderer

    def create_task(self, request: GenerationRequest) -> CharacterSheetTask:
        return CharacterSheetTask(request=request)

    async def advance(
        self, task: CharacterSheetTask, on_progress: ProgressCallback | None = None
    ) -> PipelineStep:
        """Execute the next pipeline step of a task.

        Returns:
            The step that was executed

        Raises:
            CharacterSheetError: If the step failed
        """
        step = task.next_step
        if step is None:
            raise RuntimeError("Character sheet task has already finished")

        if step.kind == "describe":
            if on_progress is not None:
                on_progress(DESCRIBE_PROGRESS)
            task.description = await self.describer.describe(task.request.image)

        elif step.kind == "generate":
            result = await self.renderer.render(
                step.view, task.request, task.description, on_progress=on_progress
            )
            task.rendered.append(result)

        elif step.kind == "aggregate":
            expected = list(CHARACTER_VIEWS)
            if [result.view for result in task.rendered] != expected:
                raise RuntimeError("Rendered views do not match the view catalog")
            task.results = list(task.rendered)

        task.position += 1
        return step

    async def run(
        self, request: GenerationRequest, on_progress: ProgressCallback | None = None
    ) -> list[GeneratedResult]:
        """Run every pipeline step and return the ordered results.

        There is no partial success: any failing step raises and the task,
        with whatever views it already rendered, is dropped.
        """
        task = self.create_task(request)
        while not task.done:
            step = await self.advance(task, on_progress)
            logger.debug("Completed pipeline step %s", step.name)
        return task.results

    async def generate_for_session(
        self,
        state: SessionState,
        on_progress: ProgressCallback | None = None,
        request: GenerationRequest | None = None,
    ) -> list[GeneratedResult]:
        """Drive a session through loading to results, or back to upload.

        Workflow errors are recorded as the session error rather than raised.

        Args:
            state: Session on the upload screen, or already moved to loading
                by a begin_generation() call whose request is passed along
            on_progress: Receives every progress caption
            request: Context returned by state.begin_generation(), if the
                caller already started the transition

        Raises:
            InvalidTransitionError: If the session cannot start generating
        """
        if request is None:
            request = state.begin_generation()

        def report(caption: str) -> None:
            state.report_progress(caption)
            if on_progress is not None:
                on_progress(caption)

        try:
            results = await self.run(request, on_progress=report)
        except Exception as e:
            logger.exception("Character sheet generation failed")
            state.fail_generation(describe_error(e))
            return []

        state.complete_generation(results)
        return results
