"""Unit tests for RequestOrchestrator and RequestSequencer."""

from unittest.mock import patch

import pytest

from aetherlens.core.catalog import LOADING_TIPS, get_style
from aetherlens.core.exceptions import GenAIServiceError, IdentityBackendError
from aetherlens.core.models import EditableImage, ErrorKind, PromptComposition
from aetherlens.core.orchestrator import (
    NO_IMAGES_MESSAGE,
    REIMAGINE_EMPTY_MESSAGE,
    RequestOrchestrator,
    RequestSequencer,
    create_orchestrator,
)


class TestRequestSequencer:
    def test_tokens_increase(self):
        sequencer = RequestSequencer()
        assert sequencer.current == 0
        first = sequencer.next_token()
        second = sequencer.next_token()
        assert second > first
        assert sequencer.current == second

    def test_only_latest_is_current(self):
        sequencer = RequestSequencer()
        first = sequencer.next_token()
        assert sequencer.is_current(first)

        second = sequencer.next_token()
        assert not sequencer.is_current(first)
        assert sequencer.is_current(second)


@pytest.mark.asyncio
class TestGenerate:
    async def test_generates_requested_count(self, orchestrator, mock_genai, jpeg_data_url):
        composition = PromptComposition(
            base_prompt="a lighthouse at dusk", number_of_images=4, aspect_ratio="16:9"
        )

        result = await orchestrator.generate(composition)

        assert result.ok
        assert result.images == [jpeg_data_url] * 4
        assert result.loading_tip in LOADING_TIPS
        mock_genai.generate_images.assert_awaited_once_with("a lighthouse at dusk", 4, "16:9")

    async def test_style_and_negative_are_composed(self, orchestrator, mock_genai):
        composition = PromptComposition(
            base_prompt="a cat",
            style=get_style("baroque"),
            negative_prompt="blurry",
        )

        result = await orchestrator.generate(composition)

        prompt = mock_genai.generate_images.call_args.args[0]
        assert prompt == result.prompt
        assert prompt.startswith("Baroque painting, ")
        assert ", a cat. Avoid the following: minimalist, " in prompt
        assert prompt.endswith(", blurry.")

    async def test_empty_prompt_makes_no_call(self, orchestrator, mock_genai):
        result = await orchestrator.generate(PromptComposition(base_prompt="   "))

        assert result.error == "Please enter a prompt to generate images."
        assert result.error_kind is ErrorKind.VALIDATION
        assert result.images == []
        mock_genai.generate_images.assert_not_called()

    async def test_invalid_count(self, orchestrator, mock_genai):
        result = await orchestrator.generate(PromptComposition(base_prompt="a cat", number_of_images=3))

        assert result.error_kind is ErrorKind.VALIDATION
        mock_genai.generate_images.assert_not_called()

    async def test_zero_images_is_an_error(self, orchestrator, mock_genai):
        mock_genai.generate_images.side_effect = None
        mock_genai.generate_images.return_value = []

        result = await orchestrator.generate(PromptComposition(base_prompt="a cat"))

        assert result.error == NO_IMAGES_MESSAGE
        assert result.error_kind is ErrorKind.REMOTE

    async def test_remote_error_passed_through(self, orchestrator, mock_genai):
        mock_genai.generate_images.side_effect = GenAIServiceError("Quota exceeded.")

        result = await orchestrator.generate(PromptComposition(base_prompt="a cat"))

        assert result.error == "Quota exceeded."
        assert result.error_kind is ErrorKind.REMOTE
        assert result.to_dict() == {"error": "Quota exceeded."}

    async def test_given_tip_is_kept(self, orchestrator):
        result = await orchestrator.generate(
            PromptComposition(base_prompt="a cat"), loading_tip="Patience."
        )
        assert result.loading_tip == "Patience."


@pytest.mark.asyncio
class TestTextTransforms:
    async def test_enhance(self, orchestrator, mock_genai):
        result = await orchestrator.enhance_prompt("  a knight  ")

        assert result.text == "an enhanced prompt"
        mock_genai.enhance_prompt.assert_awaited_once_with("a knight")

    async def test_enhance_empty(self, orchestrator, mock_genai):
        result = await orchestrator.enhance_prompt("")

        assert result.error == "Prompt cannot be empty."
        mock_genai.enhance_prompt.assert_not_called()

    async def test_enhance_failure(self, orchestrator, mock_genai):
        mock_genai.enhance_prompt.side_effect = GenAIServiceError("Model overloaded.")

        result = await orchestrator.enhance_prompt("a knight")

        assert not result.ok
        assert result.error == "Model overloaded."
        assert result.text == ""

    async def test_random(self, orchestrator):
        result = await orchestrator.random_prompt()
        assert result.to_dict() == {"prompt": "a random prompt"}

    async def test_describe(self, orchestrator, mock_genai, sample_image):
        result = await orchestrator.describe_image(sample_image)

        assert result.text == "a described prompt"
        mock_genai.describe_image.assert_awaited_once_with(sample_image)

    async def test_describe_rejects_non_image(self, orchestrator, mock_genai):
        doc = EditableImage(src="data:application/pdf;base64,QUJD", name="doc.pdf")

        result = await orchestrator.describe_image(doc)

        assert result.error == "Please select an image file."
        mock_genai.describe_image.assert_not_called()


@pytest.mark.asyncio
class TestReimagine:
    async def test_two_phase_flow(self, orchestrator, mock_genai, sample_images, jpeg_data_url):
        result = await orchestrator.reimagine(sample_images, " make it winter ", "4:3")

        assert result.images == [jpeg_data_url]
        assert result.prompt == "a reimagined prompt"
        mock_genai.reimagine_prompt.assert_awaited_once_with(sample_images, "make it winter")
        mock_genai.generate_images.assert_awaited_once_with("a reimagined prompt", 1, "4:3")

    async def test_no_images(self, orchestrator, mock_genai):
        result = await orchestrator.reimagine([], "make it winter", "1:1")

        assert result.error == "Please upload at least one base image."
        mock_genai.reimagine_prompt.assert_not_called()

    async def test_empty_instruction(self, orchestrator, mock_genai, sample_images):
        result = await orchestrator.reimagine(sample_images, "  ", "1:1")

        assert result.error == REIMAGINE_EMPTY_MESSAGE
        mock_genai.reimagine_prompt.assert_not_called()

    async def test_bad_aspect_ratio(self, orchestrator, mock_genai, sample_images):
        result = await orchestrator.reimagine(sample_images, "winter", "2:1")

        assert result.error_kind is ErrorKind.VALIDATION
        mock_genai.reimagine_prompt.assert_not_called()

    async def test_synthesis_failure_skips_image_call(
        self, orchestrator, mock_genai, sample_images
    ):
        mock_genai.reimagine_prompt.side_effect = GenAIServiceError("Safety block.")

        result = await orchestrator.reimagine(sample_images, "winter", "1:1")

        assert result.error == "Safety block."
        assert result.error_kind is ErrorKind.REMOTE
        mock_genai.generate_images.assert_not_called()

    async def test_image_failure_after_synthesis(self, orchestrator, mock_genai, sample_images):
        mock_genai.generate_images.side_effect = GenAIServiceError("Image quota exceeded.")

        result = await orchestrator.reimagine(sample_images, "winter", "1:1")

        assert result.error == "Image quota exceeded."
        assert result.prompt == "a reimagined prompt"


@pytest.mark.asyncio
class TestUpscale:
    async def test_uses_first_image_only(self, orchestrator, mock_genai, sample_images):
        result = await orchestrator.upscale(sample_images, "9:16")

        assert result.ok
        mock_genai.upscale_prompt.assert_awaited_once_with(sample_images[0])
        mock_genai.generate_images.assert_awaited_once_with("an upscale prompt", 1, "9:16")

    async def test_no_images(self, orchestrator, mock_genai):
        result = await orchestrator.upscale([], "1:1")

        assert result.error_kind is ErrorKind.VALIDATION
        mock_genai.upscale_prompt.assert_not_called()

    async def test_zero_images_returned(self, orchestrator, mock_genai, sample_image):
        mock_genai.generate_images.side_effect = lambda prompt, n, ratio: []

        result = await orchestrator.upscale([sample_image], "1:1")

        assert result.error == NO_IMAGES_MESSAGE


@pytest.mark.asyncio
class TestIdentity:
    async def test_success(
        self, orchestrator, mock_identity, sample_images, sample_persona, jpeg_data_url
    ):
        result = await orchestrator.generate_identity(
            sample_images, "  hiking in the alps ", "3:4", "sketch"
        )

        assert result.persona == sample_persona
        assert result.generated_image == jpeg_data_url
        mock_identity.generate_identity.assert_awaited_once_with(
            sample_images, "hiking in the alps", "3:4", "sketch"
        )
        body = result.to_dict()
        assert body["generatedImage"] == jpeg_data_url
        assert body["persona"]["faceShape"] == "oval"

    async def test_too_many_images(self, orchestrator, mock_identity, sample_image):
        result = await orchestrator.generate_identity(
            [sample_image] * 6, "portrait", "1:1", "realistic"
        )

        assert result.error == "You can upload a maximum of 5 images."
        mock_identity.generate_identity.assert_not_called()

    async def test_no_images(self, orchestrator, mock_identity):
        result = await orchestrator.generate_identity([], "portrait", "1:1", "realistic")

        assert result.error == "Please upload at least one base image first."
        mock_identity.generate_identity.assert_not_called()

    async def test_empty_scenario(self, orchestrator, mock_identity, sample_image):
        result = await orchestrator.generate_identity([sample_image], "", "1:1", "realistic")

        assert result.error == "Please describe a scenario."
        mock_identity.generate_identity.assert_not_called()

    async def test_unknown_style(self, orchestrator, mock_identity, sample_image):
        result = await orchestrator.generate_identity([sample_image], "portrait", "1:1", "oil")

        assert result.error_kind is ErrorKind.VALIDATION
        mock_identity.generate_identity.assert_not_called()

    async def test_backend_error(self, orchestrator, mock_identity, sample_image):
        mock_identity.generate_identity.side_effect = IdentityBackendError(
            "Server error: 503 Service Unavailable", status_code=503
        )

        result = await orchestrator.generate_identity(
            [sample_image], "portrait", "1:1", "realistic"
        )

        assert result.error == "Server error: 503 Service Unavailable"
        assert result.error_kind is ErrorKind.REMOTE
        assert result.persona is None


@pytest.mark.asyncio
async def test_aclose_closes_services(orchestrator, mock_genai, mock_identity):
    await orchestrator.aclose()

    mock_genai.close.assert_called_once()
    mock_identity.aclose.assert_awaited_once()


def test_create_orchestrator(test_config):
    with patch("aetherlens.core.orchestrator.GenAIService") as MockGenAI, patch(
        "aetherlens.core.orchestrator.IdentityClient"
    ) as MockIdentity:
        orchestrator = create_orchestrator(test_config)

    assert isinstance(orchestrator, RequestOrchestrator)
    MockGenAI.assert_called_once_with(test_config)
    MockIdentity.assert_called_once_with(test_config)
    assert orchestrator.config is test_config
