"""Shared pytest fixtures for AetherLens tests."""

import random
import shutil
import tempfile
from collections.abc import Generator
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from aetherlens.core.config import AetherLensConfig
from aetherlens.core.genai_client import GenAIService
from aetherlens.core.identity_client import IdentityClient
from aetherlens.core.models import EditableImage, Persona, to_data_url
from aetherlens.core.orchestrator import RequestOrchestrator
from aetherlens.ui.models import UIState


def make_image_bytes(color: str = "red", fmt: str = "PNG", size: tuple[int, int] = (8, 8)) -> bytes:
    """Encode a tiny solid-colour image."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> AetherLensConfig:
    """Create a test configuration that ignores the environment's .env file.

    Returns:
        AetherLensConfig instance for testing
    """
    return AetherLensConfig(
        _env_file=None,
        api_key="test-key",
        image_model="imagen-test",
        text_model="gemini-test",
        identity_endpoint="http://identity.test/api/generate-identity",
        max_identity_images=5,
    )


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def jpeg_data_url() -> str:
    """A generated result as the image service would return it."""
    return to_data_url(make_image_bytes("blue", "JPEG"), "image/jpeg")


@pytest.fixture
def sample_image(png_bytes: bytes) -> EditableImage:
    return EditableImage.from_bytes(png_bytes, "image/png", "face.png")


@pytest.fixture
def sample_images() -> list[EditableImage]:
    """Three distinct base images in upload order."""
    return [
        EditableImage.from_bytes(make_image_bytes(color), "image/png", f"{color}.png")
        for color in ("red", "green", "blue")
    ]


@pytest.fixture
def sample_image_file(temp_dir: Path, png_bytes: bytes) -> Path:
    path = temp_dir / "upload.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def sample_persona() -> Persona:
    return Persona(
        hair="short black hair",
        eyes="brown",
        beard="none",
        face_shape="oval",
        unique_features=["freckles", "scar over left eyebrow"],
        gender="female",
        age=29,
    )


@pytest.fixture
def mock_genai(jpeg_data_url: str) -> MagicMock:
    """GenAIService stand-in; async methods become AsyncMocks.

    By default every call succeeds.
    """
    genai = MagicMock(spec=GenAIService)
    genai.generate_images.side_effect = lambda prompt, n, ratio: [jpeg_data_url] * n
    genai.enhance_prompt.return_value = "an enhanced prompt"
    genai.random_prompt.return_value = "a random prompt"
    genai.describe_image.return_value = "a described prompt"
    genai.reimagine_prompt.return_value = "a reimagined prompt"
    genai.upscale_prompt.return_value = "an upscale prompt"
    return genai


@pytest.fixture
def mock_identity(sample_persona: Persona, jpeg_data_url: str) -> MagicMock:
    identity = MagicMock(spec=IdentityClient)
    identity.generate_identity.return_value = (sample_persona, jpeg_data_url)
    return identity


@pytest.fixture
def orchestrator(
    mock_genai: MagicMock, mock_identity: MagicMock, test_config: AetherLensConfig
) -> RequestOrchestrator:
    return RequestOrchestrator(mock_genai, mock_identity, test_config, rng=random.Random(7))


@pytest.fixture
def ui_state(orchestrator: RequestOrchestrator) -> UIState:
    """UI state with an orchestrator over mocked services.

    Returns:
        UIState instance
    """
    return UIState(orchestrator=orchestrator)


@pytest.fixture
def image_bytes_factory():
    """Factory for encoded test images: ``image_bytes_factory(color, fmt)``."""
    return make_image_bytes


@pytest.fixture
def test_client(orchestrator: RequestOrchestrator):
    """FastAPI TestClient whose orchestrator uses the mocked services.

    The lifespan handler runs on entry; its orchestrator is swapped for the
    test one so no client is ever created.
    """
    from fastapi.testclient import TestClient

    from aetherlens.api.main import app

    with TestClient(app) as client:
        app.state.orchestrator = orchestrator
        yield client
