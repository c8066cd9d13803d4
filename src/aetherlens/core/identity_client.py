"""Client for the identity-preserving generation backend.

The backend receives up to five face images together with a scenario, an
aspect ratio and a style tag, and answers with a persona sheet plus one
generated image::

    POST <identity_endpoint>   (multipart/form-data)
        images       one file part per base image
        scenario     free text
        aspectRatio  "1:1", "16:9", ...
        style        realistic | anime | sketch | cyberpunk | fantasy

    200 {"persona": {...}, "generatedImage": "<base64 or data URL>"}
    4xx/5xx {"error": "..."}

Only the request assembly and response parsing live here; what the backend
does with the faces is its own business.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from aetherlens.core.config import AetherLensConfig
from aetherlens.core.exceptions import IdentityBackendError
from aetherlens.core.models import EditableImage, Persona, split_data_url

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
}


class IdentityClient:
    """Async HTTP client for the identity backend.

    Args:
        config: Supplies ``identity_endpoint`` and ``identity_timeout``.
        transport: Optional ``httpx`` transport; tests inject a
            ``httpx.MockTransport`` here.
    """

    def __init__(
        self,
        config: AetherLensConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.identity_timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def generate_identity(
        self,
        images: list[EditableImage],
        scenario: str,
        aspect_ratio: str,
        style: str,
    ) -> tuple[Persona, str]:
        """Send one identity request.

        Args:
            images: Base images, already validated.
            scenario: Scenario description.
            aspect_ratio: Output aspect ratio.
            style: Identity style tag.

        Returns:
            Tuple of (persona, generated image as data URL)

        Raises:
            IdentityBackendError: On network failure, a non-2xx status or a
                malformed response body.
        """
        files = []
        for index, image in enumerate(images):
            try:
                payload = image.to_bytes()
            except ValueError as e:
                raise IdentityBackendError(str(e)) from e
            files.append(("images", (_filename(image, index), payload, image.mime_type)))

        data = {"scenario": scenario, "aspectRatio": aspect_ratio, "style": style}
        endpoint = self._config.identity_endpoint
        logger.info(f"Posting {len(files)} image(s) to identity backend at {endpoint}")

        try:
            response = await self._get_client().post(endpoint, data=data, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Identity backend request failed: {e}", exc_info=True)
            raise IdentityBackendError(
                str(e) or "An unknown error occurred during identity generation."
            ) from e

        body = _json_or_none(response)

        if not response.is_success:
            message = None
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            if message is None:
                message = f"Server error: {response.status_code} {response.reason_phrase}"
            logger.error(f"Identity backend returned {response.status_code}: {message}")
            raise IdentityBackendError(message, status_code=response.status_code)

        if not isinstance(body, dict):
            raise IdentityBackendError(
                "Identity backend returned an invalid response.",
                status_code=response.status_code,
            )

        if body.get("error"):
            raise IdentityBackendError(str(body["error"]), status_code=response.status_code)

        generated = body.get("generatedImage")
        if not generated or not isinstance(generated, str):
            raise IdentityBackendError(
                "Identity backend response is missing the generated image.",
                status_code=response.status_code,
            )

        try:
            persona = Persona.model_validate(body.get("persona") or {})
        except PydanticValidationError as e:
            logger.error(f"Invalid persona in identity response: {e}")
            raise IdentityBackendError(
                "Identity backend returned an invalid persona.",
                status_code=response.status_code,
            ) from e

        if not generated.startswith("data:"):
            mime_type, b64 = split_data_url(generated)
            generated = f"data:{mime_type};base64,{b64}"

        logger.info("Identity generation succeeded")
        return persona, generated


def _filename(image: EditableImage, index: int) -> str:
    if image.name:
        return image.name
    return f"image-{index + 1}.{_EXTENSIONS.get(image.mime_type, 'jpg')}"


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
