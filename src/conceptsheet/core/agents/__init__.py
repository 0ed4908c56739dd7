"""Core agents for character sheet generation."""

from conceptsheet.core.agents.describer import CharacterDescriberAgent
from conceptsheet.core.agents.orchestrator import (
    PIPELINE_STEPS,
    CharacterSheetTask,
    OrchestratorAgent,
    PipelineStep,
)
from conceptsheet.core.agents.view_renderer import (
    ViewRendererAgent,
    build_generation_prompt,
    build_label,
)

__all__ = [
    "PIPELINE_STEPS",
    "CharacterDescriberAgent",
    "CharacterSheetTask",
    "OrchestratorAgent",
    "PipelineStep",
    "ViewRendererAgent",
    "build_generation_prompt",
    "build_label",
]
