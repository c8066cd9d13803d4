"""Edit & Reimagine tab handlers."""

import logging
from collections.abc import AsyncIterator

import gradio as gr

from aetherlens.core.exceptions import ImageReadError
from aetherlens.core.images import load_editable_images

from ..components import image_set_update, result_gallery_update
from ..formatting import error_markdown, loading_markdown, success_markdown
from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def add_edit_images(files: list[str] | None, state: UIState) -> tuple[dict, str, dict, UIState]:
    """Append uploaded files to the base image list.

    A file that cannot be read aborts the whole batch; nothing is added.

    Returns:
        Tuple of (base_gallery_update, status_markdown, upload_reset, updated_state)
    """
    if not files:
        return gr.update(), "", gr.update(), state

    try:
        images = load_editable_images(files)
    except ImageReadError as e:
        return gr.update(), error_markdown(str(e)), gr.update(value=None), state

    state.edit.add_images(images)
    logger.info(f"Edit surface now holds {len(state.edit.images)} base image(s)")
    return (
        image_set_update(state.edit.images),
        success_markdown(f"{len(state.edit.images)} base image(s) ready."),
        gr.update(value=None),
        state,
    )


def select_edit_image(state: UIState, evt: gr.SelectData) -> UIState:
    state.edit.selected_index = evt.index
    return state


def remove_edit_image(state: UIState) -> tuple[dict, str, UIState]:
    index = state.edit.selected_index
    if index is None:
        return gr.update(), error_markdown("Click an image to select it first."), state

    state.edit.remove_image(index)
    return image_set_update(state.edit.images), "", state


def clear_edit_images(state: UIState) -> tuple[dict, str, UIState]:
    state.edit.images = []
    state.edit.selected_index = None
    return image_set_update([]), "", state


async def reimagine_images(
    instruction: str, aspect_ratio: str, state: UIState
) -> AsyncIterator[tuple[dict, str, UIState]]:
    """Fuse the base images with the instruction and render one new image.

    Yields:
        Tuples of (result_gallery_update, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    edit = state.edit
    edit.instruction = instruction or ""
    edit.aspect_ratio = aspect_ratio

    token = edit.sequencer.next_token()
    tip = state.orchestrator.loading_tip()
    edit.start_loading(tip)

    yield result_gallery_update([]), loading_markdown(tip, "Reimagining"), state

    result = await state.orchestrator.reimagine(
        list(edit.images), edit.instruction, aspect_ratio, loading_tip=tip
    )
    if not edit.sequencer.is_current(token):
        return

    edit.loading = False
    if result.ok:
        edit.result = result.images
        yield result_gallery_update(edit.result), success_markdown("Reimagined."), state
    else:
        edit.error = result.error
        yield (
            result_gallery_update([]),
            error_markdown(result.error, "Click **Reimagine** to try again."),
            state,
        )


async def upscale_image(
    aspect_ratio: str, state: UIState
) -> AsyncIterator[tuple[dict, str, UIState]]:
    """Recreate the first base image at higher quality."""
    state = initialize_ui_state(state)
    edit = state.edit
    edit.aspect_ratio = aspect_ratio

    token = edit.sequencer.next_token()
    tip = state.orchestrator.loading_tip()
    edit.start_loading(tip)

    yield result_gallery_update([]), loading_markdown(tip, "Upscaling"), state

    result = await state.orchestrator.upscale(list(edit.images), aspect_ratio, loading_tip=tip)
    if not edit.sequencer.is_current(token):
        return

    edit.loading = False
    if result.ok:
        edit.result = result.images
        yield result_gallery_update(edit.result), success_markdown("Upscaled."), state
    else:
        edit.error = result.error
        yield (
            result_gallery_update([]),
            error_markdown(result.error, "Click **Upscale** to try again."),
            state,
        )


def refine_edit_result(state: UIState) -> tuple[dict, dict, str, UIState]:
    """Use the latest edit result as the new (single) base image.

    Returns:
        Tuple of (base_gallery_update, result_gallery_update, status, updated_state)
    """
    if not state.edit.result:
        return gr.update(), gr.update(), error_markdown("Nothing to refine yet."), state

    image = state.edit.replace_with_generated(state.edit.result[0])
    return (
        image_set_update(state.edit.images),
        result_gallery_update([]),
        success_markdown(f"**{image.name}** is the new base image."),
        state,
    )
