"""Unit tests for the API request models."""

import pytest
from pydantic import ValidationError

from aetherlens.api.models import (
    GenerateRequest,
    IdentityRequest,
    ImagePayload,
    NegativePresetRequest,
)


class TestGenerateRequest:
    def test_defaults(self):
        req = GenerateRequest()
        assert req.prompt == ""
        assert req.style_id is None
        assert req.negative_prompt == ""
        assert req.number_of_images == 1
        assert req.aspect_ratio == "1:1"

    def test_values_are_not_checked_here(self):
        # Domain checks run in the orchestrator so every surface shares them
        req = GenerateRequest(prompt="a cat", number_of_images=3, aspect_ratio="2:1")
        assert req.number_of_images == 3

    def test_wrong_type_rejected(self):
        with pytest.raises(ValidationError):
            GenerateRequest(number_of_images="many")


class TestNegativePresetRequest:
    def test_preset_required(self):
        with pytest.raises(ValidationError):
            NegativePresetRequest(negative_prompt="blurry")


class TestImagePayload:
    def test_data_url_kept(self, jpeg_data_url):
        image = ImagePayload(data=jpeg_data_url, name="a.jpg").to_editable()
        assert image.src == jpeg_data_url
        assert image.name == "a.jpg"

    def test_bare_base64_defaults_to_jpeg(self):
        image = ImagePayload(data="QUJD").to_editable()
        assert image.src == "data:image/jpeg;base64,QUJD"
        assert image.name == "image"

    def test_bare_base64_with_mime(self):
        image = ImagePayload(data="QUJD", mime_type="image/png").to_editable()
        assert image.mime_type == "image/png"


class TestIdentityRequest:
    def test_defaults(self):
        req = IdentityRequest()
        assert req.images == []
        assert req.style == "realistic"

    def test_nested_images(self, jpeg_data_url):
        req = IdentityRequest.model_validate(
            {"images": [{"data": jpeg_data_url, "name": "me.jpg"}], "scenario": "at sea"}
        )
        assert req.images[0].name == "me.jpg"
