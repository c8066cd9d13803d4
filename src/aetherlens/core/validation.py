"""Validation utilities for AetherLens inputs.

Everything here runs locally, before any remote call.  A failed check raises
:class:`ValidationError` whose message is shown to the user unchanged.
"""

import logging

from .models import ASPECT_RATIO_VALUES, EditableImage, PromptComposition

logger = logging.getLogger(__name__)

IDENTITY_STYLES = ("realistic", "anime", "sketch", "cyberpunk", "fantasy")


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_composition(composition: PromptComposition) -> None:
    """Validate a prompt composition with user-friendly messages.

    Args:
        composition: Prompt composition to validate

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    try:
        composition.validate()
    except ValueError as e:
        raise ValidationError(str(e)) from e


def validate_prompt(prompt: str | None, message: str = "Prompt cannot be empty.") -> str:
    """Ensure a prompt has non-whitespace content.

    Returns:
        The stripped prompt
    """
    if not prompt or not prompt.strip():
        raise ValidationError(message)
    return prompt.strip()


def validate_aspect_ratio(aspect_ratio: str) -> None:
    if aspect_ratio not in ASPECT_RATIO_VALUES:
        raise ValidationError(
            f"Aspect ratio must be one of {', '.join(ASPECT_RATIO_VALUES)}, got {aspect_ratio}"
        )


def validate_image_mime(mime_type: str | None) -> None:
    """Reject payloads that are not images."""
    if not mime_type or not mime_type.startswith("image/"):
        raise ValidationError("Please select an image file.")


def validate_base_images(
    images: list[EditableImage],
    max_images: int | None = None,
    empty_message: str = "Please upload at least one base image.",
) -> None:
    """Validate a set of base images.

    Args:
        images: Images to check
        max_images: Upper bound, or None for no limit
        empty_message: Message used when the set is empty

    Raises:
        ValidationError: If the set is empty, too large, or holds a non-image
    """
    if not images:
        raise ValidationError(empty_message)

    if max_images is not None and len(images) > max_images:
        raise ValidationError(f"You can upload a maximum of {max_images} images.")

    for image in images:
        if not image.mime_type.startswith("image/"):
            logger.warning(f"Rejected non-image payload: {image.name} ({image.mime_type})")
            raise ValidationError(f"'{image.name}' is not an image file.")


def validate_identity_request(
    images: list[EditableImage],
    scenario: str,
    aspect_ratio: str,
    style: str,
    max_images: int,
) -> None:
    """Validate everything the identity backend needs.

    Raises:
        ValidationError: On the first failing check
    """
    validate_base_images(
        images,
        max_images=max_images,
        empty_message="Please upload at least one base image first.",
    )
    validate_prompt(scenario, "Please describe a scenario.")
    validate_aspect_ratio(aspect_ratio)
    if style not in IDENTITY_STYLES:
        raise ValidationError(
            f"Style must be one of {', '.join(IDENTITY_STYLES)}, got {style}"
        )
