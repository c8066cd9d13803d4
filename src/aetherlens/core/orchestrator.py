"""Request orchestration for every user action.

:class:`RequestOrchestrator` is the one place that turns a user action into
remote calls and maps the outcome to a result object.  Each public method:

1. runs local validation first; a failure returns an error result and no
   remote call is made,
2. invokes the remote service(s) exactly once per phase,
3. converts any remote failure into an error result carrying the message
   verbatim.

Nothing raises to the caller for expected failures, so the REST API and the
Gradio handlers only have to render the result.

Overlapping requests
--------------------
Every surface owns a :class:`RequestSequencer`.  An action takes a token
when it starts; when its result arrives the caller asks ``is_current`` and
drops the result if a newer action has started since.  The superseded call
itself still runs to completion.
"""

from __future__ import annotations

import logging
import random

from aetherlens.core.catalog import pick_loading_tip
from aetherlens.core.config import AetherLensConfig
from aetherlens.core.exceptions import RemoteServiceError
from aetherlens.core.genai_client import GenAIService
from aetherlens.core.identity_client import IdentityClient
from aetherlens.core.models import (
    EditableImage,
    ErrorKind,
    GenerationResult,
    IdentityResult,
    PromptComposition,
    TextResult,
)
from aetherlens.core.validation import (
    ValidationError,
    validate_aspect_ratio,
    validate_base_images,
    validate_composition,
    validate_identity_request,
    validate_image_mime,
    validate_prompt,
)

logger = logging.getLogger(__name__)

NO_IMAGES_MESSAGE = "The image service returned no images. Try adjusting your prompt."
REIMAGINE_EMPTY_MESSAGE = "Please enter a prompt to reimagine the image(s)."


class RequestSequencer:
    """Issues monotonically increasing tokens for one display surface."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def next_token(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        """Whether ``token`` belongs to the most recently started action."""
        current = token == self._current
        if not current:
            logger.info(f"Discarding stale result (token {token}, current {self._current})")
        return current


class RequestOrchestrator:
    """Coordinates validation, remote calls and result mapping.

    Attributes:
        genai: Image and text generation service
        identity: Identity backend client
        config: Application configuration
    """

    def __init__(
        self,
        genai: GenAIService,
        identity: IdentityClient,
        config: AetherLensConfig,
        rng: random.Random | None = None,
    ) -> None:
        self.genai = genai
        self.identity = identity
        self.config = config
        self._rng = rng

    def loading_tip(self) -> str:
        return pick_loading_tip(self._rng)

    # -- Image generation ---------------------------------------------------

    async def generate(
        self, composition: PromptComposition, loading_tip: str | None = None
    ) -> GenerationResult:
        """Compose the prompt and generate images.

        Args:
            composition: The user's prompt composition
            loading_tip: Tip already shown for this request (picked if None)

        Returns:
            GenerationResult with the ordered images or one error
        """
        tip = loading_tip or self.loading_tip()

        try:
            validate_composition(composition)
            prompt = composition.compose()
        except ValidationError as e:
            logger.warning(f"Generation rejected: {e}")
            return GenerationResult(
                error=str(e), error_kind=ErrorKind.VALIDATION, loading_tip=tip
            )

        return await self._generate_from_prompt(
            prompt, composition.number_of_images, composition.aspect_ratio, tip
        )

    async def _generate_from_prompt(
        self, prompt: str, number_of_images: int, aspect_ratio: str, tip: str
    ) -> GenerationResult:
        try:
            images = await self.genai.generate_images(prompt, number_of_images, aspect_ratio)
        except RemoteServiceError as e:
            return GenerationResult(
                error=str(e), error_kind=ErrorKind.REMOTE, prompt=prompt, loading_tip=tip
            )

        if not images:
            logger.warning("Image service returned an empty result")
            return GenerationResult(
                error=NO_IMAGES_MESSAGE,
                error_kind=ErrorKind.REMOTE,
                prompt=prompt,
                loading_tip=tip,
            )

        return GenerationResult(images=list(images), prompt=prompt, loading_tip=tip)

    # -- Text transforms ----------------------------------------------------

    async def enhance_prompt(self, prompt: str) -> TextResult:
        try:
            cleaned = validate_prompt(prompt)
        except ValidationError as e:
            logger.warning(f"Enhance rejected: {e}")
            return TextResult(error=str(e), error_kind=ErrorKind.VALIDATION)

        try:
            return TextResult(text=await self.genai.enhance_prompt(cleaned))
        except RemoteServiceError as e:
            return TextResult(error=str(e), error_kind=ErrorKind.REMOTE)

    async def random_prompt(self) -> TextResult:
        try:
            return TextResult(text=await self.genai.random_prompt())
        except RemoteServiceError as e:
            return TextResult(error=str(e), error_kind=ErrorKind.REMOTE)

    async def describe_image(self, image: EditableImage) -> TextResult:
        try:
            validate_image_mime(image.mime_type)
        except ValidationError as e:
            logger.warning(f"Describe rejected: {e}")
            return TextResult(error=str(e), error_kind=ErrorKind.VALIDATION)

        try:
            return TextResult(text=await self.genai.describe_image(image))
        except RemoteServiceError as e:
            return TextResult(error=str(e), error_kind=ErrorKind.REMOTE)

    # -- Reimagine / upscale ------------------------------------------------

    async def reimagine(
        self,
        images: list[EditableImage],
        instruction: str,
        aspect_ratio: str,
        loading_tip: str | None = None,
    ) -> GenerationResult:
        """Fuse all base images with an instruction, then render one image.

        The image call only starts after the prompt synthesis succeeded.
        """
        tip = loading_tip or self.loading_tip()

        try:
            validate_base_images(images)
            cleaned = validate_prompt(instruction, REIMAGINE_EMPTY_MESSAGE)
            validate_aspect_ratio(aspect_ratio)
        except ValidationError as e:
            logger.warning(f"Reimagine rejected: {e}")
            return GenerationResult(
                error=str(e), error_kind=ErrorKind.VALIDATION, loading_tip=tip
            )

        try:
            prompt = await self.genai.reimagine_prompt(images, cleaned)
        except RemoteServiceError as e:
            logger.warning("Reimagine aborted: prompt synthesis failed")
            return GenerationResult(error=str(e), error_kind=ErrorKind.REMOTE, loading_tip=tip)

        logger.info(f"Reimagined prompt: {prompt[:80]}")
        return await self._generate_from_prompt(prompt, 1, aspect_ratio, tip)

    async def upscale(
        self,
        images: list[EditableImage],
        aspect_ratio: str,
        loading_tip: str | None = None,
    ) -> GenerationResult:
        """Describe the first base image as an upscale prompt, then render it."""
        tip = loading_tip or self.loading_tip()

        try:
            validate_base_images(images)
            validate_aspect_ratio(aspect_ratio)
        except ValidationError as e:
            logger.warning(f"Upscale rejected: {e}")
            return GenerationResult(
                error=str(e), error_kind=ErrorKind.VALIDATION, loading_tip=tip
            )

        try:
            prompt = await self.genai.upscale_prompt(images[0])
        except RemoteServiceError as e:
            logger.warning("Upscale aborted: prompt synthesis failed")
            return GenerationResult(error=str(e), error_kind=ErrorKind.REMOTE, loading_tip=tip)

        return await self._generate_from_prompt(prompt, 1, aspect_ratio, tip)

    # -- Identity -----------------------------------------------------------

    async def generate_identity(
        self,
        images: list[EditableImage],
        scenario: str,
        aspect_ratio: str,
        style: str,
    ) -> IdentityResult:
        try:
            validate_identity_request(
                images, scenario, aspect_ratio, style, self.config.max_identity_images
            )
        except ValidationError as e:
            logger.warning(f"Identity request rejected: {e}")
            return IdentityResult(error=str(e), error_kind=ErrorKind.VALIDATION)

        try:
            persona, image = await self.identity.generate_identity(
                images, scenario.strip(), aspect_ratio, style
            )
        except RemoteServiceError as e:
            return IdentityResult(error=str(e), error_kind=ErrorKind.REMOTE)

        return IdentityResult(persona=persona, generated_image=image)

    async def aclose(self) -> None:
        self.genai.close()
        await self.identity.aclose()


def create_orchestrator(config: AetherLensConfig) -> RequestOrchestrator:
    """Build an orchestrator with real services for ``config``."""
    return RequestOrchestrator(GenAIService(config), IdentityClient(config), config)
