"""Gradio UI for AetherLens."""

import logging

import gradio as gr

from aetherlens.core import catalog
from aetherlens.core.config import config

from .components import (
    AspectRatioSelector,
    ImageSetUI,
    selected_style_markdown,
    style_gallery_items,
)
from .handlers import (
    add_edit_images,
    add_identity_images,
    add_negative_preset,
    apply_suggested_style,
    clear_edit_images,
    clear_identity_images,
    clear_style,
    describe_image,
    enhance_prompt,
    filter_catalog,
    generate_identity,
    generate_images,
    random_prompt,
    refine_and_upscale,
    refine_edit_result,
    reimagine_images,
    remove_edit_image,
    remove_identity_image,
    select_edit_image,
    select_identity_image,
    select_output,
    select_style,
    suggest_style_for_prompt,
    upscale_image,
    use_inspiration,
)
from .models import IDENTITY_STYLE_CHOICES, IMAGE_COUNT_CHOICES, UIState

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .status-area {
        min-height: 48px;
    }
    .style-gallery {
        max-height: 360px;
        overflow-y: auto;
    }
    """

    app = gr.Blocks(title="AetherLens")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # AetherLens
            ### Compose, generate and reimagine images
            """
        )

        with gr.Tabs() as tabs:
            with gr.Tab("Create", id="create_tab"):
                create_components = create_create_tab(ui_state)

            with gr.Tab("Edit & Reimagine", id="edit_tab"):
                edit_components = create_edit_tab(ui_state)

            with gr.Tab("Identity Studio", id="identity_tab"):
                create_identity_tab(ui_state)

        # Cross-tab: send a generated image to the edit surface
        create_components["refine_btn"].click(
            fn=refine_and_upscale,
            inputs=[ui_state],
            outputs=[
                edit_components["image_set"].gallery,
                edit_components["status"],
                tabs,
                ui_state,
            ],
        )

    return app, custom_css


def create_create_tab(ui_state) -> dict:
    """Create the Create tab.

    Args:
        ui_state: UI state component

    Returns:
        Components other tabs need to wire up
    """
    with gr.Row():
        with gr.Column(scale=1):
            prompt_input = gr.Textbox(
                label="Prompt",
                placeholder="Describe the image you want to create...",
                lines=4,
            )
            suggestion = gr.Markdown(value="")
            with gr.Row():
                enhance_btn = gr.Button("✨ Enhance", size="sm")
                random_btn = gr.Button("🎲 Random", size="sm")
                use_suggestion_btn = gr.Button("Use Suggested Style", size="sm")

            with gr.Accordion("Aether's Eye: describe an image", open=False):
                describe_input = gr.Image(label="Image to describe", type="filepath")
                describe_btn = gr.Button("Describe Image", size="sm")

            negative_input = gr.Textbox(
                label="Negative Prompt",
                placeholder="Terms to avoid, comma separated",
                lines=2,
            )
            with gr.Row():
                preset_buttons = [
                    (gr.Button(f"+ Avoid {preset.name}", size="sm"), preset.name)
                    for preset in catalog.NEGATIVE_PRESETS
                ]

            with gr.Row():
                count_radio = gr.Radio(
                    label="Number of Images",
                    choices=IMAGE_COUNT_CHOICES,
                    value=1,
                )
                aspect_ratio = AspectRatioSelector()

            generate_btn = gr.Button("Generate", variant="primary", size="lg")

        with gr.Column(scale=1):
            gr.Markdown("### Style Cores")
            style_filter = gr.Textbox(label="Filter styles and inspirations", lines=1)
            selected_style = gr.Markdown(value=selected_style_markdown(None))
            clear_style_btn = gr.Button("Clear Style", size="sm")
            style_gallery = gr.Gallery(
                value=style_gallery_items(list(catalog.STYLE_CORES)),
                label="Style Cores",
                columns=4,
                height=300,
                allow_preview=False,
                elem_classes=["style-gallery"],
            )
            inspiration_dropdown = gr.Dropdown(
                label="Inspiration",
                choices=[item.title for item in catalog.INSPIRATION_PROMPTS],
                value=None,
            )

    gr.Markdown("### Results")
    status = gr.Markdown(value="", elem_classes=["status-area"])
    output_gallery = gr.Gallery(
        label="Generated Images",
        columns=1,
        height=520,
        object_fit="contain",
    )
    refine_btn = gr.Button("Refine & Upscale Selected")

    # Event handlers
    prompt_input.change(fn=suggest_style_for_prompt, inputs=[prompt_input], outputs=[suggestion])
    use_suggestion_btn.click(
        fn=apply_suggested_style,
        inputs=[prompt_input, ui_state],
        outputs=[selected_style, ui_state],
    )

    enhance_btn.click(
        fn=enhance_prompt,
        inputs=[prompt_input, ui_state],
        outputs=[prompt_input, status, ui_state],
    )
    random_btn.click(fn=random_prompt, inputs=[ui_state], outputs=[prompt_input, status, ui_state])
    describe_btn.click(
        fn=describe_image,
        inputs=[describe_input, ui_state],
        outputs=[prompt_input, status, ui_state],
    )

    for button, preset_name in preset_buttons:
        button.click(
            fn=lambda negative, name=preset_name: add_negative_preset(name, negative),
            inputs=[negative_input],
            outputs=[negative_input],
        )

    style_filter.change(
        fn=filter_catalog,
        inputs=[style_filter],
        outputs=[style_gallery, inspiration_dropdown],
    )
    style_gallery.select(
        fn=select_style,
        inputs=[style_filter, ui_state],
        outputs=[selected_style, ui_state],
    )
    clear_style_btn.click(fn=clear_style, inputs=[ui_state], outputs=[selected_style, ui_state])
    inspiration_dropdown.change(
        fn=use_inspiration,
        inputs=[inspiration_dropdown, prompt_input],
        outputs=[prompt_input],
    )

    generate_btn.click(
        fn=generate_images,
        inputs=[prompt_input, negative_input, count_radio, aspect_ratio.radio, ui_state],
        outputs=[output_gallery, status, ui_state],
    )
    output_gallery.select(fn=select_output, inputs=[ui_state], outputs=[ui_state])

    return {"refine_btn": refine_btn}


def create_edit_tab(ui_state) -> dict:
    """Create the Edit & Reimagine tab."""
    with gr.Row():
        with gr.Column(scale=1):
            image_set = ImageSetUI("Base")
            instruction = gr.Textbox(
                label="Reimagine Prompt",
                placeholder="e.g. combine these into a watercolor landscape",
                lines=3,
            )
            aspect_ratio = AspectRatioSelector()
            with gr.Row():
                reimagine_btn = gr.Button("Reimagine", variant="primary")
                upscale_btn = gr.Button("Upscale First Image")

        with gr.Column(scale=1):
            status = gr.Markdown(value="", elem_classes=["status-area"])
            result_gallery = gr.Gallery(
                label="Result",
                columns=1,
                height=520,
                object_fit="contain",
            )
            refine_btn = gr.Button("Use Result as Base Image")

    image_set.upload.upload(
        fn=add_edit_images,
        inputs=[image_set.upload, ui_state],
        outputs=[image_set.gallery, status, image_set.upload, ui_state],
    )
    image_set.gallery.select(fn=select_edit_image, inputs=[ui_state], outputs=[ui_state])
    image_set.remove_btn.click(
        fn=remove_edit_image,
        inputs=[ui_state],
        outputs=[image_set.gallery, status, ui_state],
    )
    image_set.clear_btn.click(
        fn=clear_edit_images,
        inputs=[ui_state],
        outputs=[image_set.gallery, status, ui_state],
    )

    reimagine_btn.click(
        fn=reimagine_images,
        inputs=[instruction, aspect_ratio.radio, ui_state],
        outputs=[result_gallery, status, ui_state],
    )
    upscale_btn.click(
        fn=upscale_image,
        inputs=[aspect_ratio.radio, ui_state],
        outputs=[result_gallery, status, ui_state],
    )
    refine_btn.click(
        fn=refine_edit_result,
        inputs=[ui_state],
        outputs=[image_set.gallery, result_gallery, status, ui_state],
    )

    return {"image_set": image_set, "status": status}


def create_identity_tab(ui_state) -> None:
    """Create the Identity Studio tab."""
    with gr.Row():
        with gr.Column(scale=1):
            image_set = ImageSetUI("Face", max_images=config.max_identity_images)
            scenario = gr.Textbox(
                label="Scenario",
                placeholder="e.g. exploring a neon-lit night market",
                lines=3,
            )
            aspect_ratio = AspectRatioSelector()
            style = gr.Radio(
                label="Style",
                choices=IDENTITY_STYLE_CHOICES,
                value=IDENTITY_STYLE_CHOICES[0][1],
            )
            generate_btn = gr.Button("Generate Identity", variant="primary")

        with gr.Column(scale=1):
            status = gr.Markdown(value="", elem_classes=["status-area"])
            generated_image = gr.Image(label="Generated Image", interactive=False)
            persona = gr.Markdown(value="")

    upload_set_outputs = [
        image_set.gallery,
        image_set.slots,
        image_set.upload,
        persona,
        generated_image,
        status,
        ui_state,
    ]

    image_set.upload.upload(
        fn=add_identity_images,
        inputs=[image_set.upload, ui_state],
        outputs=upload_set_outputs,
    )
    image_set.gallery.select(fn=select_identity_image, inputs=[ui_state], outputs=[ui_state])
    image_set.remove_btn.click(
        fn=remove_identity_image,
        inputs=[ui_state],
        outputs=upload_set_outputs,
    )
    image_set.clear_btn.click(
        fn=clear_identity_images,
        inputs=[ui_state],
        outputs=upload_set_outputs,
    )

    generate_btn.click(
        fn=generate_identity,
        inputs=[scenario, aspect_ratio.radio, style, ui_state],
        outputs=[persona, generated_image, status, ui_state],
    )


def main():
    """Main entry point for the Gradio UI."""
    logger.info("Starting AetherLens UI...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    if not config.has_api_key:
        logger.warning("No API key configured; generation requests will fail.")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
