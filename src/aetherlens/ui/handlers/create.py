"""Create tab handlers: prompt tools, style selection and image generation."""

import logging
from collections.abc import AsyncIterator

import gradio as gr

from aetherlens.core import catalog
from aetherlens.core.exceptions import ImageReadError
from aetherlens.core.images import load_editable_image
from aetherlens.core.prompt_builder import merge_negative_terms

from ..components import (
    image_set_update,
    result_gallery_update,
    selected_style_markdown,
    style_gallery_items,
)
from ..formatting import error_markdown, loading_markdown, success_markdown
from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)

GENERATE_RETRY_HINT = "Adjust your prompt if needed and click **Generate** to try again."


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def filter_catalog(term: str) -> tuple[dict, dict]:
    """Filter the style gallery and the inspiration list.

    Returns:
        Tuple of (style_gallery_update, inspiration_dropdown_update)
    """
    styles = catalog.filter_styles(term)
    inspirations = catalog.filter_inspirations(term)
    return (
        gr.update(value=style_gallery_items(styles)),
        gr.update(choices=[item.title for item in inspirations], value=None),
    )


def select_style(term: str, state: UIState, evt: gr.SelectData) -> tuple[str, UIState]:
    """Toggle the style clicked in the (possibly filtered) style gallery."""
    styles = catalog.filter_styles(term)
    if evt.index is None or not 0 <= evt.index < len(styles):
        return selected_style_markdown(catalog.get_style(state.create.selected_style_id)), state

    clicked = styles[evt.index]
    state.create.selected_style_id = catalog.toggle_style(
        state.create.selected_style_id, clicked.id
    )
    logger.info(f"Style core: {state.create.selected_style_id}")
    return selected_style_markdown(catalog.get_style(state.create.selected_style_id)), state


def clear_style(state: UIState) -> tuple[str, UIState]:
    state.create.selected_style_id = None
    return selected_style_markdown(None), state


def suggest_style_for_prompt(prompt: str) -> str:
    style = catalog.get_style(catalog.suggest_style(prompt))
    if style is None:
        return ""
    return f"💡 Suggested style: **{style.name}**"


def apply_suggested_style(prompt: str, state: UIState) -> tuple[str, UIState]:
    suggested = catalog.suggest_style(prompt)
    if suggested is not None:
        state.create.selected_style_id = suggested
    return selected_style_markdown(catalog.get_style(state.create.selected_style_id)), state


def add_negative_preset(preset_name: str, negative_prompt: str) -> str:
    """Merge a negative preset into the negative prompt box."""
    preset = catalog.get_negative_preset(preset_name)
    if preset is None:
        logger.warning(f"Unknown negative preset: {preset_name}")
        return negative_prompt
    return merge_negative_terms(negative_prompt or "", preset.value)


def use_inspiration(title: str | None, current_prompt: str) -> str:
    item = next((i for i in catalog.INSPIRATION_PROMPTS if i.title == title), None)
    return item.prompt if item is not None else current_prompt


# ---------------------------------------------------------------------------
# Prompt transforms
# ---------------------------------------------------------------------------


async def enhance_prompt(prompt: str, state: UIState) -> AsyncIterator[tuple[dict, str, UIState]]:
    """Replace the prompt with an enhanced version.

    Yields:
        Tuples of (prompt_update, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    sequencer = state.create.prompt_sequencer
    token = sequencer.next_token()

    yield gr.update(), loading_markdown("", "Enhancing prompt"), state

    result = await state.orchestrator.enhance_prompt(prompt)
    if not sequencer.is_current(token):
        return

    if result.ok:
        state.create.prompt = result.text
        yield gr.update(value=result.text), success_markdown("Prompt enhanced."), state
    else:
        yield gr.update(), error_markdown(result.error, "Click **Enhance** to try again."), state


async def random_prompt(state: UIState) -> AsyncIterator[tuple[dict, str, UIState]]:
    state = initialize_ui_state(state)
    sequencer = state.create.prompt_sequencer
    token = sequencer.next_token()

    yield gr.update(), loading_markdown("", "Dreaming up a prompt"), state

    result = await state.orchestrator.random_prompt()
    if not sequencer.is_current(token):
        return

    if result.ok:
        state.create.prompt = result.text
        yield gr.update(value=result.text), success_markdown("New prompt ready."), state
    else:
        yield gr.update(), error_markdown(result.error, "Click **Random** to try again."), state


async def describe_image(
    image_path: str | None, state: UIState
) -> AsyncIterator[tuple[dict, str, UIState]]:
    """Turn an uploaded image into a prompt."""
    state = initialize_ui_state(state)
    sequencer = state.create.prompt_sequencer

    if not image_path:
        yield gr.update(), error_markdown("Please select an image file."), state
        return

    try:
        image = load_editable_image(image_path)
    except ImageReadError as e:
        yield gr.update(), error_markdown(str(e)), state
        return

    # Rejected uploads must not supersede an enhance or random in flight
    token = sequencer.next_token()

    yield gr.update(), loading_markdown("", "Analyzing image"), state

    result = await state.orchestrator.describe_image(image)
    if not sequencer.is_current(token):
        return

    if result.ok:
        state.create.prompt = result.text
        yield gr.update(value=result.text), success_markdown("Image described."), state
    else:
        yield gr.update(), error_markdown(result.error, "Upload the image again to retry."), state


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


async def generate_images(
    prompt: str,
    negative_prompt: str,
    number_of_images: int,
    aspect_ratio: str,
    state: UIState,
) -> AsyncIterator[tuple[dict, str, UIState]]:
    """Generate images from the current composition.

    Yields the loading state first (empty gallery, random tip), then the
    images or the error.  A superseded request yields nothing further.

    Yields:
        Tuples of (gallery_update, status_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    create = state.create
    create.prompt = prompt or ""
    create.negative_prompt = negative_prompt or ""
    create.number_of_images = int(number_of_images)
    create.aspect_ratio = aspect_ratio

    token = create.generation_sequencer.next_token()
    tip = state.orchestrator.loading_tip()
    create.start_loading(tip)

    yield result_gallery_update([]), loading_markdown(tip), state

    result = await state.orchestrator.generate(create.to_composition(), loading_tip=tip)
    if not create.generation_sequencer.is_current(token):
        return

    create.loading = False
    if result.ok:
        create.images = result.images
        logger.info(f"Showing {len(result.images)} generated image(s)")
        yield (
            result_gallery_update(create.images),
            success_markdown(f"Generated {len(create.images)} image(s)."),
            state,
        )
    else:
        create.error = result.error
        yield result_gallery_update([]), error_markdown(result.error, GENERATE_RETRY_HINT), state


def select_output(state: UIState, evt: gr.SelectData) -> UIState:
    state.create.selected_index = evt.index
    return state


def refine_and_upscale(state: UIState) -> tuple[dict, str, dict, UIState]:
    """Send the selected result (or the first one) to the Edit tab.

    Returns:
        Tuple of (edit_gallery_update, edit_status, tabs_update, updated_state)
    """
    src = state.create.selected_image()
    if src is None and state.create.images:
        src = state.create.images[0]

    if src is None:
        return (
            gr.update(),
            error_markdown("Generate an image first."),
            gr.update(),
            state,
        )

    image = state.edit.replace_with_generated(src)
    logger.info(f"Sent {image.name} to the edit surface")
    return (
        image_set_update(state.edit.images),
        success_markdown(f"**{image.name}** is ready to reimagine or upscale."),
        gr.update(selected="edit_tab"),
        state,
    )

