"""AetherLens - prompt-driven image generation, reimagining and identity studio."""

__version__ = "0.1.0"

from aetherlens.core.config import AetherLensConfig, config
from aetherlens.core.orchestrator import RequestOrchestrator, RequestSequencer, create_orchestrator

__all__ = [
    "AetherLensConfig",
    "config",
    "RequestOrchestrator",
    "RequestSequencer",
    "create_orchestrator",
]
