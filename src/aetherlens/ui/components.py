"""Reusable UI components for the AetherLens Gradio interface."""

import logging

import gradio as gr

from aetherlens.core.exceptions import ImageReadError
from aetherlens.core.images import decode_image
from aetherlens.core.models import EditableImage, StyleCore

from .models import ASPECT_RATIO_CHOICES, grid_columns

logger = logging.getLogger(__name__)


class AspectRatioSelector:
    """Radio group over the five supported aspect ratios."""

    def __init__(self, label: str = "Aspect Ratio", value: str = "1:1"):
        self.radio = gr.Radio(
            label=label,
            choices=ASPECT_RATIO_CHOICES,
            value=value,
        )


class ImageSetUI:
    """Upload area plus a removable list of base images.

    Used by the Edit & Reimagine tab and (with a limit) the Identity Studio
    tab.  The gallery shows the current set; clicking an image selects it
    for the remove button.
    """

    def __init__(self, name: str, max_images: int | None = None):
        """Initialize an image set component.

        Args:
            name: Label prefix (e.g. "Base", "Face")
            max_images: Upload limit shown to the user, or None
        """
        self.name = name
        self.max_images = max_images

        with gr.Group():
            self.upload = gr.File(
                label=f"Upload {name} Images",
                file_count="multiple",
                file_types=["image"],
                type="filepath",
            )
            self.slots = gr.Markdown(
                value="" if max_images is None else f"**0/{max_images} images**"
            )
            self.gallery = gr.Gallery(
                label=f"{name} Images",
                columns=5,
                height=180,
                object_fit="cover",
                allow_preview=False,
            )
            with gr.Row():
                self.remove_btn = gr.Button("Remove Selected", size="sm")
                self.clear_btn = gr.Button("Clear All", size="sm")


def render_images(sources: list[str]) -> list:
    """Decode data URLs into PIL images for a gallery, skipping bad payloads."""
    rendered = []
    for src in sources:
        try:
            rendered.append(decode_image(src))
        except ImageReadError as e:
            logger.warning(f"Skipping undecodable result image: {e}")
    return rendered


def result_gallery_update(sources: list[str]) -> dict:
    """Gallery update for a result set: 1 column for one image, 2 otherwise."""
    return gr.update(value=render_images(sources), columns=grid_columns(len(sources)))


def image_set_update(images: list[EditableImage]) -> dict:
    rendered = []
    for image in images:
        try:
            rendered.append((decode_image(image.src), image.name))
        except ImageReadError as e:
            logger.warning(f"Skipping undecodable base image {image.name}: {e}")
    return gr.update(value=rendered)


def style_gallery_items(styles: list[StyleCore]) -> list[tuple[str, str]]:
    return [(style.thumbnail, style.name) for style in styles]


def selected_style_markdown(style: StyleCore | None) -> str:
    if style is None:
        return "**Style Core:** none selected"
    return f"**Style Core:** {style.name}\n\n*{style.description}*"


def render_image(src: str | None):
    """Decode a single data URL for an Image component; None clears it."""
    if not src:
        return None
    try:
        return decode_image(src)
    except ImageReadError as e:
        logger.warning(f"Cannot display image: {e}")
        return None
