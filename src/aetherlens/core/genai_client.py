"""Remote text and image generation for AetherLens.

This module provides :class:`GenAIService`, the single point of control for
calls to the Gemini / Imagen API through the ``google-genai`` SDK.

Key Responsibilities
--------------------
- **Lazy client creation**: the SDK client is built on the first call, so
  importing the module or starting the server never needs a credential.
- **Image generation**: ``generate_images`` returns base64 data URLs in the
  order the API produced them.
- **Text transforms**: prompt enhancement, random prompt, image description,
  multi-image reimagine and upscale prompt synthesis.
- **Error normalisation**: every failure at the call boundary becomes a
  :class:`~aetherlens.core.exceptions.GenAIServiceError` carrying the
  message the user will see.  Nothing is retried.

Usage
-----
::

    from aetherlens.core.config import config
    from aetherlens.core.genai_client import GenAIService

    service = GenAIService(config)
    images = await service.generate_images("a fox in snow", 2, "16:9")
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import errors, types

from aetherlens.core.config import AetherLensConfig
from aetherlens.core.exceptions import GenAIServiceError
from aetherlens.core.models import EditableImage, to_data_url

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# System instructions.
# ---------------------------------------------------------------------------

ENHANCE_INSTRUCTION = """You are The Prompt Alchemist. Your task is to take a user's simple prompt and transform it into a rich, detailed, and evocative description suitable for a powerful AI image generator.
- Analyze the user's core idea.
- Enhance it with sensory details, artistic terms, camera angles, lighting styles, and composition keywords.
- The output should be a single, cohesive, and powerful prompt string. Do NOT add any preamble or explanation. Just return the enhanced prompt.
- For example, if the user prompt is "a knight in a forest", a good enhanced prompt would be: "An epic cinematic shot of a lone knight in weathered steel armor, standing amidst a misty, ancient redwood forest. Sunbeams pierce through the dense canopy, illuminating dust motes in the air. Close-up on the knight's determined face, a single scar across his cheek. Photorealistic, 8K, dramatic lighting.\""""

RANDOM_PROMPT_INSTRUCTION = """You are an idea generator for an AI artist. Generate a single, random, creative, and visually interesting prompt for an AI image generator. The prompt should be a short phrase or sentence. Do not add any preamble or explanation. Just return the prompt. Examples: "a crystal fox drinking from a bioluminescent river", "a steampunk library on Mars", "a knight made of constellations"."""

DESCRIBE_IMAGE_REQUEST = (
    "Analyze this image in detail. Generate a rich, descriptive prompt that could be used "
    "to recreate it with an AI image generator. Focus on subject, setting, style, "
    "composition, lighting, and mood. The output should be a single, cohesive, and "
    "powerful prompt string. Do NOT add any preamble or explanation."
)

REIMAGINE_INSTRUCTION = """You are a visual fusion artist. Your task is to analyze the provided base images and a user's text prompt.
- First, understand the core subjects, styles, colors, and compositions of each image.
- Then, understand the user's desired transformation or combination from their text prompt.
- Finally, synthesize all of this information into a single, new, rich, and detailed prompt for an AI image generator. This new prompt should creatively merge the key elements from the base images with the user's request.
- Do NOT add any preamble or explanation. Just return the new, synthesized prompt."""

UPSCALE_INSTRUCTION = """You are an image enhancement specialist. Analyze the provided image and generate a new, highly-detailed prompt to recreate it at a much higher quality.
- Deconstruct the image into its core components: subject, environment, composition, and style.
- Enhance the description with specific, professional keywords for achieving ultra-realism and detail.
- Add terms like: "hyper-detailed, photorealistic, 8K resolution, professional photography, sharp focus, intricate details, cinematic lighting, masterpiece, octane render".
- The final output must be only the prompt string, without any preamble."""

UPSCALE_REQUEST = "Analyze and create an upscale prompt for this image."


class GenAIService:
    """Wraps the ``google-genai`` client for the calls AetherLens needs.

    Attributes:
        _config (AetherLensConfig):
            Model ids, output encoding and the API credential.
        _client:
            The SDK client, or ``None`` until the first call.
    """

    def __init__(self, config: AetherLensConfig, client: Any | None = None) -> None:
        """Initialise the service.

        Args:
            config: Application configuration instance.
            client: Pre-built SDK client.  Tests pass a mock here; in normal
                use it is created lazily from ``config.api_key``.
        """
        self._config = config
        self._client = client

        if client is None and not config.has_api_key:
            logger.warning(
                "No API key configured (AETHERLENS_API_KEY / API_KEY / GEMINI_API_KEY); "
                "generation calls will fail until one is set."
            )

    # -- Lifecycle ----------------------------------------------------------

    @property
    def client(self) -> Any:
        if self._client is None:
            logger.info("Creating google-genai client")
            self._client = genai.Client(api_key=self._config.api_key)
        return self._client

    def close(self) -> None:
        """Drop the SDK client; the next call creates a fresh one."""
        self._client = None

    # -- Image generation ---------------------------------------------------

    async def generate_images(
        self, prompt: str, number_of_images: int, aspect_ratio: str
    ) -> list[str]:
        """Generate images for a composed prompt.

        Args:
            prompt: The final request prompt.
            number_of_images: How many images to request (1, 2 or 4).
            aspect_ratio: One of the supported aspect ratio values.

        Returns:
            Ordered list of data URLs (may be empty if the API filtered
            every candidate).

        Raises:
            GenAIServiceError: If the call fails or the response is malformed.
        """
        mime_type = self._config.image_output_mime_type
        logger.info(
            f"Generating {number_of_images} image(s) at {aspect_ratio} "
            f"with {self._config.image_model}"
        )

        try:
            response = await self.client.aio.models.generate_images(
                model=self._config.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=number_of_images,
                    output_mime_type=mime_type,
                    aspect_ratio=aspect_ratio,
                ),
            )
            images: list[str] = []
            for generated in response.generated_images or []:
                image_bytes = generated.image.image_bytes
                if isinstance(image_bytes, str):
                    image_bytes = base64.b64decode(image_bytes)
                images.append(to_data_url(image_bytes, mime_type))
        except errors.APIError as e:
            logger.error(f"Error generating images: {e}", exc_info=True)
            raise GenAIServiceError(str(e), operation="generate_images") from e
        except Exception as e:
            logger.error(f"Error generating images: {e}", exc_info=True)
            raise GenAIServiceError(
                str(e) or "An unknown error occurred during image generation.",
                operation="generate_images",
            ) from e

        logger.info(f"Image generation returned {len(images)} image(s)")
        return images

    # -- Text generation ----------------------------------------------------

    async def generate_text(
        self,
        contents: Any,
        *,
        system_instruction: str | None = None,
        fast: bool = False,
        operation: str = "generate_text",
        fallback_message: str = "An unknown error occurred while generating text.",
    ) -> str:
        """Run one text-generation call and return the stripped text.

        Args:
            contents: Prompt string or list of ``types.Part``.
            system_instruction: Optional system instruction.
            fast: Disable model thinking for a quicker response.
            operation: Name used in logs and on the raised error.
            fallback_message: Message used when the failure has no text.

        Raises:
            GenAIServiceError: If the call fails or returns no text.
        """
        config_kwargs: dict[str, Any] = {}
        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction
        if fast:
            config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=0)

        try:
            response = await self.client.aio.models.generate_content(
                model=self._config.text_model,
                contents=contents,
                config=types.GenerateContentConfig(**config_kwargs) if config_kwargs else None,
            )
            text = response.text
        except errors.APIError as e:
            logger.error(f"Error in {operation}: {e}", exc_info=True)
            raise GenAIServiceError(str(e), operation=operation) from e
        except Exception as e:
            logger.error(f"Error in {operation}: {e}", exc_info=True)
            raise GenAIServiceError(str(e) or fallback_message, operation=operation) from e

        if not text or not text.strip():
            logger.warning(f"{operation} returned an empty response")
            raise GenAIServiceError("The model returned an empty response.", operation=operation)

        return text.strip()

    async def enhance_prompt(self, prompt: str) -> str:
        return await self.generate_text(
            prompt,
            system_instruction=ENHANCE_INSTRUCTION,
            fast=True,
            operation="enhance_prompt",
            fallback_message="An unknown error occurred while enhancing the prompt.",
        )

    async def random_prompt(self) -> str:
        return await self.generate_text(
            "Generate a new prompt.",
            system_instruction=RANDOM_PROMPT_INSTRUCTION,
            fast=True,
            operation="random_prompt",
            fallback_message="An unknown error occurred while generating a prompt.",
        )

    async def describe_image(self, image: EditableImage) -> str:
        """Turn an image into a prompt that could recreate it."""
        return await self.generate_text(
            [_image_part(image), types.Part.from_text(text=DESCRIBE_IMAGE_REQUEST)],
            operation="describe_image",
            fallback_message="An unknown error occurred while analyzing the image.",
        )

    async def reimagine_prompt(self, images: list[EditableImage], instruction: str) -> str:
        """Fuse several base images and an instruction into one new prompt."""
        parts = [_image_part(image) for image in images]
        parts.append(types.Part.from_text(text=f'User request: "{instruction}"'))
        return await self.generate_text(
            parts,
            system_instruction=REIMAGINE_INSTRUCTION,
            operation="reimagine_prompt",
            fallback_message="An unknown error occurred while reimagining the prompt.",
        )

    async def upscale_prompt(self, image: EditableImage) -> str:
        """Describe one image as a higher-quality recreation prompt."""
        return await self.generate_text(
            [_image_part(image), types.Part.from_text(text=UPSCALE_REQUEST)],
            system_instruction=UPSCALE_INSTRUCTION,
            operation="upscale_prompt",
            fallback_message="An unknown error occurred while creating the upscale prompt.",
        )


def _image_part(image: EditableImage) -> types.Part:
    """Build an inline-data part from an editable image.

    Raises:
        GenAIServiceError: If the image payload is not valid base64.
    """
    try:
        data = image.to_bytes()
    except ValueError as e:
        raise GenAIServiceError(str(e), operation="encode_image") from e
    return types.Part.from_bytes(data=data, mime_type=image.mime_type)
