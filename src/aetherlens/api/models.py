"""Pydantic request models for the AetherLens API.

These models define the JSON schema for every POST endpoint.  FastAPI uses
them for body parsing and OpenAPI documentation; a body that does not match
its model is answered with 422.

Field values are deliberately loose (plain ``str`` / ``int``).  The domain
checks (empty prompt, unsupported aspect ratio, image limits) run in the
orchestrator so the API and the UI report the same messages.

Models
------
ComposeRequest
    Payload for ``POST /api/prompt/compose``.
GenerateRequest
    Payload for ``POST /api/generate``: a composition plus count and ratio.
NegativePresetRequest
    Payload for ``POST /api/prompt/negative-preset``.
EnhanceRequest
    Payload for ``POST /api/prompt/enhance``.
ImagePayload
    One encoded image as sent by the browser.
DescribeRequest, ReimagineRequest, UpscaleRequest, IdentityRequest
    Payloads for the image-based endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from aetherlens.core.models import EditableImage, split_data_url


class ComposeRequest(BaseModel):
    """Prompt composition inputs.

    Attributes:
        prompt: Base prompt text.
        style_id: Selected Style Core id, or ``None``.
        negative_prompt: Comma-separated terms to avoid.
    """

    prompt: str = Field(default="", description="Base prompt text.")
    style_id: str | None = Field(
        default=None,
        description="Style Core id (e.g. 'hyperrealism'); unknown ids are ignored.",
    )
    negative_prompt: str = Field(
        default="",
        description="Comma-separated terms the generator should avoid.",
    )


class GenerateRequest(ComposeRequest):
    """Request body for ``POST /api/generate``.

    Attributes:
        number_of_images: 1, 2 or 4.
        aspect_ratio: One of ``1:1``, ``16:9``, ``9:16``, ``4:3``, ``3:4``.
    """

    number_of_images: int = Field(default=1, description="Number of images (1, 2 or 4).")
    aspect_ratio: str = Field(default="1:1", description="Aspect ratio value.")


class NegativePresetRequest(BaseModel):
    negative_prompt: str = Field(default="", description="Current negative prompt.")
    preset: str = Field(..., description="Preset name: 'Realism', 'Anime' or 'Text'.")


class EnhanceRequest(BaseModel):
    prompt: str = Field(default="", description="Prompt to enhance.")


class ImagePayload(BaseModel):
    """One encoded image.

    Attributes:
        data: A ``data:<mime>;base64,...`` URL, or bare base64.
        mime_type: Mime type used when ``data`` is bare base64.
        name: Display name.
    """

    data: str = Field(..., description="Data URL or bare base64 payload.")
    mime_type: str | None = Field(
        default=None,
        description="Mime type for bare base64 payloads (default image/jpeg).",
    )
    name: str = Field(default="image", description="Display name.")

    def to_editable(self) -> EditableImage:
        if self.data.startswith("data:"):
            return EditableImage(src=self.data, name=self.name)
        _, payload = split_data_url(self.data)
        mime_type = self.mime_type or "image/jpeg"
        return EditableImage(src=f"data:{mime_type};base64,{payload}", name=self.name)


class DescribeRequest(BaseModel):
    image: ImagePayload


class ReimagineRequest(BaseModel):
    images: list[ImagePayload] = Field(default_factory=list, description="Base images.")
    prompt: str = Field(default="", description="Transformation instruction.")
    aspect_ratio: str = Field(default="1:1", description="Aspect ratio value.")


class UpscaleRequest(BaseModel):
    images: list[ImagePayload] = Field(
        default_factory=list,
        description="Base images; only the first one is upscaled.",
    )
    aspect_ratio: str = Field(default="1:1", description="Aspect ratio value.")


class IdentityRequest(BaseModel):
    """Request body for ``POST /api/identity``.

    Attributes:
        images: Up to five face images.
        scenario: Scene the person should appear in.
        aspect_ratio: Output aspect ratio.
        style: One of ``realistic``, ``anime``, ``sketch``, ``cyberpunk``,
            ``fantasy``.
    """

    images: list[ImagePayload] = Field(default_factory=list, description="Face images (max 5).")
    scenario: str = Field(default="", description="Scenario description.")
    aspect_ratio: str = Field(default="1:1", description="Aspect ratio value.")
    style: str = Field(default="realistic", description="Identity style tag.")
