"""Core functionality for AetherLens.

This package holds everything the REST API and the Gradio UI share:

- **AetherLensConfig / config**: settings loaded from ``AETHERLENS_*``
  environment variables and ``.env``
- **build_prompt**: composes style keywords, the base prompt and the avoid
  clause into the final request prompt
- **GenAIService**: image and text generation through ``google-genai``
- **IdentityClient**: multipart client for the identity backend
- **RequestOrchestrator**: validation, remote calls and result mapping for
  every user action

Architecture Overview
---------------------
1. **Configuration Layer** (config.py)
2. **Domain Layer** (models.py, catalog.py, prompt_builder.py, validation.py,
   images.py): pure functions and dataclasses, no I/O except reading
   uploaded files
3. **Remote Layer** (genai_client.py, identity_client.py): the only modules
   that talk to the network; failures become ``RemoteServiceError``
4. **Orchestration Layer** (orchestrator.py): turns user actions into
   result objects that never raise for expected failures

Usage Example
-------------
::

    from aetherlens.core import PromptComposition, config, create_orchestrator

    orchestrator = create_orchestrator(config)
    result = await orchestrator.generate(
        PromptComposition("a fox in snow", number_of_images=4, aspect_ratio="16:9")
    )
    if result.ok:
        print(len(result.images))
"""

from aetherlens.core.config import AetherLensConfig, config
from aetherlens.core.exceptions import (
    GenAIServiceError,
    IdentityBackendError,
    ImageReadError,
    RemoteServiceError,
)
from aetherlens.core.genai_client import GenAIService
from aetherlens.core.identity_client import IdentityClient
from aetherlens.core.models import (
    EditableImage,
    ErrorKind,
    GenerationResult,
    IdentityResult,
    Persona,
    PromptComposition,
    StyleCore,
    TextResult,
)
from aetherlens.core.orchestrator import RequestOrchestrator, RequestSequencer, create_orchestrator
from aetherlens.core.prompt_builder import build_prompt, merge_negative_terms
from aetherlens.core.validation import ValidationError

__all__ = [
    "AetherLensConfig",
    "config",
    "EditableImage",
    "ErrorKind",
    "GenAIService",
    "GenAIServiceError",
    "GenerationResult",
    "IdentityBackendError",
    "IdentityClient",
    "IdentityResult",
    "ImageReadError",
    "Persona",
    "PromptComposition",
    "RemoteServiceError",
    "RequestOrchestrator",
    "RequestSequencer",
    "StyleCore",
    "TextResult",
    "ValidationError",
    "build_prompt",
    "create_orchestrator",
    "merge_negative_terms",
]
