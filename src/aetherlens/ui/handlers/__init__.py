"""UI event handlers organized by tab.

This package provides handlers for all Gradio UI events:
- create: prompt tools, style selection and image generation
- edit: base image management, reimagine and upscale
- identity: face upload set and identity generation

Long-running handlers are async generators.  They yield a loading state
first and the final state once the remote call completes; a handler whose
request was superseded by a newer one on the same surface yields nothing
further.
"""

from .create import (
    add_negative_preset,
    apply_suggested_style,
    clear_style,
    describe_image,
    enhance_prompt,
    filter_catalog,
    generate_images,
    random_prompt,
    refine_and_upscale,
    select_output,
    select_style,
    suggest_style_for_prompt,
    use_inspiration,
)
from .edit import (
    add_edit_images,
    clear_edit_images,
    refine_edit_result,
    reimagine_images,
    remove_edit_image,
    select_edit_image,
    upscale_image,
)
from .identity import (
    add_identity_images,
    clear_identity_images,
    generate_identity,
    remove_identity_image,
    select_identity_image,
)

__all__ = [
    # Create handlers
    "add_negative_preset",
    "apply_suggested_style",
    "clear_style",
    "describe_image",
    "enhance_prompt",
    "filter_catalog",
    "generate_images",
    "random_prompt",
    "refine_and_upscale",
    "select_output",
    "select_style",
    "suggest_style_for_prompt",
    "use_inspiration",
    # Edit handlers
    "add_edit_images",
    "clear_edit_images",
    "refine_edit_result",
    "reimagine_images",
    "remove_edit_image",
    "select_edit_image",
    "upscale_image",
    # Identity handlers
    "add_identity_images",
    "clear_identity_images",
    "generate_identity",
    "remove_identity_image",
    "select_identity_image",
]
