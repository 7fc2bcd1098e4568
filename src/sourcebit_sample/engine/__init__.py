"""Host engine: Orchestrator and interactive setup driver."""

from sourcebit_sample.engine.orchestrator import (
    Orchestrator,
    PipelineConfig,
    build_pipeline,
)
from sourcebit_sample.engine.setup import (
    SetupResult,
    apply_setup,
    collect_answers,
    run_setup,
    save_setup,
)

__all__ = [
    "Orchestrator",
    "PipelineConfig",
    "SetupResult",
    "apply_setup",
    "build_pipeline",
    "collect_answers",
    "run_setup",
    "save_setup",
]
