"""Integration tests for UI components."""

from unittest.mock import patch

import gradio as gr

from aetherlens.core.catalog import STYLE_CORES, get_style
from aetherlens.core.models import EditableImage
from aetherlens.ui.components import (
    AspectRatioSelector,
    ImageSetUI,
    image_set_update,
    render_image,
    render_images,
    result_gallery_update,
    selected_style_markdown,
    style_gallery_items,
)
from aetherlens.ui.models import ASPECT_RATIO_CHOICES


class TestImageSetUI:
    """Integration tests for ImageSetUI component."""

    def test_image_set_creation(self):
        with (
            patch("gradio.Group"),
            patch("gradio.File") as MockFile,
            patch("gradio.Markdown") as MockMarkdown,
            patch("gradio.Gallery") as MockGallery,
            patch("gradio.Row"),
            patch("gradio.Button") as MockButton,
        ):
            image_set = ImageSetUI("Face", max_images=5)

            assert image_set.name == "Face"
            assert image_set.upload is MockFile.return_value
            assert image_set.gallery is MockGallery.return_value
            assert MockButton.call_count == 2
            MockMarkdown.assert_called_once_with(value="**0/5 images**")
            assert MockFile.call_args.kwargs["file_count"] == "multiple"

    def test_unlimited_set_has_no_slot_text(self):
        with (
            patch("gradio.Group"),
            patch("gradio.File"),
            patch("gradio.Markdown") as MockMarkdown,
            patch("gradio.Gallery"),
            patch("gradio.Row"),
            patch("gradio.Button"),
        ):
            ImageSetUI("Base")

            MockMarkdown.assert_called_once_with(value="")


class TestAspectRatioSelector:
    def test_choices(self):
        with patch("gradio.Radio") as MockRadio:
            selector = AspectRatioSelector(value="16:9")

        assert selector.radio is MockRadio.return_value
        kwargs = MockRadio.call_args.kwargs
        assert kwargs["choices"] == ASPECT_RATIO_CHOICES
        assert kwargs["value"] == "16:9"


class TestRendering:
    def test_render_images_skips_bad_payloads(self, jpeg_data_url):
        rendered = render_images([jpeg_data_url, "data:image/png;base64,AAAA", jpeg_data_url])
        assert len(rendered) == 2

    def test_result_gallery_columns(self, jpeg_data_url):
        single = result_gallery_update([jpeg_data_url])
        assert single["columns"] == 1
        assert len(single["value"]) == 1

        quad = result_gallery_update([jpeg_data_url] * 4)
        assert quad["columns"] == 2

    def test_image_set_update_keeps_names(self, sample_images):
        update = image_set_update(sample_images)
        assert [caption for _, caption in update["value"]] == ["red.png", "green.png", "blue.png"]

    def test_image_set_update_skips_bad(self, sample_image):
        bad = EditableImage(src="data:image/png;base64,AAAA", name="bad.png")
        update = image_set_update([sample_image, bad])
        assert len(update["value"]) == 1

    def test_render_image(self, jpeg_data_url):
        assert render_image(None) is None
        assert render_image(jpeg_data_url).size == (8, 8)


class TestStyleHelpers:
    def test_gallery_items(self):
        items = style_gallery_items(STYLE_CORES)
        assert len(items) == 11
        assert items[0] == (STYLE_CORES[0].thumbnail, STYLE_CORES[0].name)

    def test_selected_markdown(self):
        assert selected_style_markdown(None) == "**Style Core:** none selected"
        assert "Baroque Grandeur" in selected_style_markdown(get_style("baroque"))


def test_update_is_a_dict():
    assert isinstance(gr.update(value=1), dict)
