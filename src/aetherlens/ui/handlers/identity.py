"""Identity Studio tab handlers."""

import logging
from collections.abc import AsyncIterator

import gradio as gr

from aetherlens.core.exceptions import ImageReadError
from aetherlens.core.images import load_editable_images
from aetherlens.core.validation import ValidationError

from ..components import image_set_update, render_image
from ..formatting import (
    error_markdown,
    loading_markdown,
    persona_markdown,
    slots_markdown,
    success_markdown,
)
from ..models import IdentityState, UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def _upload_set_outputs(identity: IdentityState, status: str) -> tuple:
    """Common outputs after the upload set changed.

    Returns:
        Tuple of (uploads_gallery, slots, upload_component, persona,
        generated_image, status)
    """
    return (
        image_set_update(identity.images),
        slots_markdown(len(identity.images), identity.max_images),
        gr.update(value=None, interactive=identity.can_add),
        persona_markdown(identity.persona),
        gr.update(value=render_image(identity.generated_image)),
        status,
    )


def add_identity_images(files: list[str] | None, state: UIState) -> tuple:
    """Add face images, up to the configured limit.

    Exceeding the limit rejects the whole upload and leaves the set,
    persona and generated image as they were.

    Returns:
        Tuple of (uploads_gallery, slots, upload_component, persona,
        generated_image, status, updated_state)
    """
    state = initialize_ui_state(state)
    identity = state.identity

    if not files:
        return (*_upload_set_outputs(identity, ""), state)

    try:
        images = load_editable_images(files)
        identity.add_images(images)
    except (ImageReadError, ValidationError) as e:
        logger.warning(f"Identity upload rejected: {e}")
        return (*_upload_set_outputs(identity, error_markdown(str(e))), state)

    logger.info(f"Identity set now holds {len(identity.images)} image(s)")
    return (*_upload_set_outputs(identity, ""), state)


def select_identity_image(state: UIState, evt: gr.SelectData) -> UIState:
    state.identity.selected_index = evt.index
    return state


def remove_identity_image(state: UIState) -> tuple:
    """Remove the selected face image; this frees one upload slot."""
    state = initialize_ui_state(state)
    identity = state.identity
    if identity.selected_index is None:
        return (
            *_upload_set_outputs(identity, error_markdown("Click an image to select it first.")),
            state,
        )

    identity.remove_image(identity.selected_index)
    return (*_upload_set_outputs(identity, ""), state)


def clear_identity_images(state: UIState) -> tuple:
    state = initialize_ui_state(state)
    state.identity.clear_images()
    return (*_upload_set_outputs(state.identity, ""), state)


async def generate_identity(
    scenario: str, aspect_ratio: str, style: str, state: UIState
) -> AsyncIterator[tuple[str, dict, str, UIState]]:
    """Send the face set to the identity backend.

    Yields:
        Tuples of (persona_markdown, image_update, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    identity = state.identity
    identity.scenario = scenario or ""
    identity.aspect_ratio = aspect_ratio
    identity.style = style

    token = identity.sequencer.next_token()
    identity.clear_results()
    identity.loading = True

    yield "", gr.update(value=None), loading_markdown("", "Generating identity"), state

    result = await state.orchestrator.generate_identity(
        list(identity.images), identity.scenario, aspect_ratio, style
    )
    if not identity.sequencer.is_current(token):
        return

    identity.loading = False
    if result.ok:
        identity.persona = result.persona
        identity.generated_image = result.generated_image
        yield (
            persona_markdown(result.persona),
            gr.update(value=render_image(result.generated_image)),
            success_markdown("Identity generated."),
            state,
        )
    else:
        identity.error = result.error
        yield (
            "",
            gr.update(value=None),
            error_markdown(result.error, "Click **Generate Identity** to try again."),
            state,
        )
