"""Domain models shared by the API and the UI.

Plain dataclasses describe the values the application builds itself (style
presets, editable images, prompt compositions, results).  The persona sheet
returned by the identity backend is parsed from JSON, so it is a Pydantic
model.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

AspectRatioValue = Literal["1:1", "16:9", "9:16", "4:3", "3:4"]
ImageCount = Literal[1, 2, 4]

ASPECT_RATIO_VALUES: tuple[str, ...] = get_args(AspectRatioValue)
IMAGE_COUNTS: tuple[int, ...] = get_args(ImageCount)

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]*);base64,(?P<data>.*)$", re.DOTALL)


def to_data_url(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Encode raw image bytes as a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def split_data_url(src: str) -> tuple[str, str]:
    """Split a data URL into ``(mime_type, base64_payload)``.

    Anything that is not a data URL is treated as a bare base64 payload with
    the default JPEG mime type.
    """
    match = _DATA_URL_RE.match(src)
    if match is None:
        return DEFAULT_MIME_TYPE, src
    return match.group("mime") or DEFAULT_MIME_TYPE, match.group("data")


@dataclass(frozen=True)
class StyleCore:
    """A named bundle of positive and negative keywords."""

    id: str
    name: str
    description: str
    keywords: str
    negative_keywords: str = ""
    thumbnail: str = ""


@dataclass(frozen=True)
class AspectRatio:
    """An aspect ratio choice as shown in the selector."""

    id: str
    label: str
    value: AspectRatioValue


@dataclass(frozen=True)
class InspirationPrompt:
    """A ready-made prompt from the inspiration gallery."""

    title: str
    prompt: str


@dataclass(frozen=True)
class NegativePreset:
    """A reusable list of negative keywords."""

    name: str
    value: str


@dataclass
class EditableImage:
    """An encoded image plus its display name.

    ``src`` is always a base64 data URL, which is what both the text/vision
    calls and the browser need.
    """

    src: str
    name: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, name: str) -> "EditableImage":
        return cls(src=to_data_url(data, mime_type), name=name)

    @property
    def mime_type(self) -> str:
        return split_data_url(self.src)[0]

    @property
    def data(self) -> str:
        """Base64 payload without the data-URL header."""
        return split_data_url(self.src)[1]

    def to_bytes(self) -> bytes:
        """Decode the payload.

        Raises:
            ValueError: If the payload is not valid base64
        """
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Image '{self.name}' is not valid base64 data") from e


class Persona(BaseModel):
    """Persona sheet describing the facial identity found in the base images."""

    model_config = ConfigDict(populate_by_name=True)

    hair: str = ""
    eyes: str = ""
    beard: str = ""
    face_shape: str = Field(default="", alias="faceShape")
    unique_features: list[str] = Field(default_factory=list, alias="uniqueFeatures")
    gender: str = ""
    age: int | None = None


@dataclass
class PromptComposition:
    """Everything the user chose for one generation request."""

    base_prompt: str
    style: StyleCore | None = None
    negative_prompt: str = ""
    number_of_images: int = 1
    aspect_ratio: str = "1:1"

    def validate(self) -> None:
        """Validate the composition.

        Raises:
            ValueError: If any field is invalid, with descriptive message
        """
        if not self.base_prompt or not self.base_prompt.strip():
            raise ValueError("Please enter a prompt to generate images.")

        if self.number_of_images not in IMAGE_COUNTS:
            raise ValueError(
                f"Number of images must be one of {', '.join(map(str, IMAGE_COUNTS))}, "
                f"got {self.number_of_images}"
            )

        if self.aspect_ratio not in ASPECT_RATIO_VALUES:
            raise ValueError(
                f"Aspect ratio must be one of {', '.join(ASPECT_RATIO_VALUES)}, "
                f"got {self.aspect_ratio}"
            )

    def compose(self) -> str:
        """Build the final request prompt."""
        from aetherlens.core.prompt_builder import build_prompt

        return build_prompt(
            self.base_prompt, style=self.style, negative_prompt=self.negative_prompt
        )


class ErrorKind(str, Enum):
    """Where an error came from; decides how it is reported."""

    VALIDATION = "validation"
    REMOTE = "remote"
    FILE = "file"


@dataclass
class GenerationResult:
    """Outcome of an image request: a list of images or one error."""

    images: list[str] = field(default_factory=list)
    error: str | None = None
    error_kind: ErrorKind | None = None
    prompt: str = ""
    loading_tip: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error}
        return {"images": list(self.images)}


@dataclass
class TextResult:
    """Outcome of a text transform: a replacement prompt or one error."""

    text: str = ""
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error}
        return {"prompt": self.text}


@dataclass
class IdentityResult:
    """Outcome of an identity request."""

    persona: Persona | None = None
    generated_image: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error}
        return {
            "persona": self.persona.model_dump(by_alias=True) if self.persona else None,
            "generatedImage": self.generated_image,
        }
