"""Data models for AetherLens UI session state."""

import logging
from dataclasses import dataclass, field
from typing import Any

from aetherlens.core.catalog import ASPECT_RATIOS, IDENTITY_STYLES, get_style
from aetherlens.core.images import editable_from_generated
from aetherlens.core.models import EditableImage, Persona, PromptComposition
from aetherlens.core.orchestrator import RequestSequencer
from aetherlens.core.validation import ValidationError

logger = logging.getLogger(__name__)


def grid_columns(image_count: int) -> int:
    """Number of gallery columns for a result set: one image fills the row."""
    return 1 if image_count <= 1 else 2


@dataclass
class CreateState:
    """State of the Create tab.

    Results are replaced wholesale on every request; ``error`` and
    ``images`` are never both set.
    """

    prompt: str = ""
    negative_prompt: str = ""
    selected_style_id: str | None = None
    number_of_images: int = 1
    aspect_ratio: str = "1:1"

    images: list[str] = field(default_factory=list)
    selected_index: int | None = None
    error: str | None = None
    loading: bool = False
    loading_tip: str = ""

    # Generate and the prompt transforms update different fields, so they
    # are sequenced independently.
    generation_sequencer: RequestSequencer = field(default_factory=RequestSequencer)
    prompt_sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    def to_composition(self) -> PromptComposition:
        return PromptComposition(
            base_prompt=self.prompt,
            style=get_style(self.selected_style_id),
            negative_prompt=self.negative_prompt,
            number_of_images=self.number_of_images,
            aspect_ratio=self.aspect_ratio,
        )

    @property
    def columns(self) -> int:
        return grid_columns(len(self.images))

    def start_loading(self, tip: str) -> None:
        self.loading = True
        self.loading_tip = tip
        self.error = None
        self.images = []
        self.selected_index = None

    def selected_image(self) -> str | None:
        if self.selected_index is None or not 0 <= self.selected_index < len(self.images):
            return None
        return self.images[self.selected_index]


@dataclass
class EditState:
    """State of the Edit & Reimagine tab."""

    images: list[EditableImage] = field(default_factory=list)
    selected_index: int | None = None
    instruction: str = ""
    aspect_ratio: str = "1:1"

    result: list[str] = field(default_factory=list)
    error: str | None = None
    loading: bool = False
    loading_tip: str = ""

    sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    def add_images(self, new_images: list[EditableImage]) -> None:
        self.images.extend(new_images)

    def remove_image(self, index: int) -> None:
        if 0 <= index < len(self.images):
            removed = self.images.pop(index)
            logger.debug(f"Removed base image {removed.name}")
        self.selected_index = None

    def replace_with_generated(self, src: str, timestamp_ms: int | None = None) -> EditableImage:
        """Make a generated image the only base image ("Refine & Upscale")."""
        image = editable_from_generated(src, timestamp_ms)
        self.images = [image]
        self.selected_index = None
        self.result = []
        self.error = None
        return image

    def start_loading(self, tip: str) -> None:
        self.loading = True
        self.loading_tip = tip
        self.error = None
        self.result = []


@dataclass
class IdentityState:
    """State of the Identity Studio tab.

    Any change to the upload set invalidates the previous persona, image
    and error, and drops the result of an identity request still in flight.
    """

    images: list[EditableImage] = field(default_factory=list)
    max_images: int = 5
    selected_index: int | None = None
    scenario: str = ""
    aspect_ratio: str = "1:1"
    style: str = IDENTITY_STYLES[0]

    persona: Persona | None = None
    generated_image: str | None = None
    error: str | None = None
    loading: bool = False

    sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    @property
    def slots_remaining(self) -> int:
        return max(self.max_images - len(self.images), 0)

    @property
    def can_add(self) -> bool:
        return self.slots_remaining > 0

    def clear_results(self) -> None:
        self.persona = None
        self.generated_image = None
        self.error = None

    def _upload_set_changed(self) -> None:
        # A pending identity request was built from the old set
        self.sequencer.next_token()
        self.loading = False
        self.clear_results()

    def add_images(self, new_images: list[EditableImage]) -> None:
        """Append uploads, all or nothing.

        Raises:
            ValidationError: If the set would exceed ``max_images``; the set
                is left unchanged.
        """
        if len(self.images) + len(new_images) > self.max_images:
            raise ValidationError(f"You can upload a maximum of {self.max_images} images.")
        self.images.extend(new_images)
        self._upload_set_changed()

    def remove_image(self, index: int) -> None:
        if 0 <= index < len(self.images):
            self.images.pop(index)
        self.selected_index = None
        self._upload_set_changed()

    def clear_images(self) -> None:
        self.images = []
        self.selected_index = None
        self._upload_set_changed()


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own copy, so the three surfaces and their
    sequencers are isolated between users.

    Attributes
    ----------
    orchestrator : Any | None
        RequestOrchestrator instance, created lazily on first use
    create, edit, identity
        Per-tab state
    """

    orchestrator: Any | None = None  # RequestOrchestrator instance
    create: CreateState = field(default_factory=CreateState)
    edit: EditState = field(default_factory=EditState)
    identity: IdentityState = field(default_factory=IdentityState)

    def is_initialized(self) -> bool:
        return self.orchestrator is not None

    def __repr__(self) -> str:
        return (
            f"UIState(initialized={self.is_initialized()}, "
            f"create_images={len(self.create.images)}, "
            f"edit_images={len(self.edit.images)}, "
            f"identity_images={len(self.identity.images)})"
        )


# Choices for the UI
IMAGE_COUNT_CHOICES = [1, 2, 4]
ASPECT_RATIO_CHOICES = [(f"{r.label} ({r.value})", r.value) for r in ASPECT_RATIOS]
IDENTITY_STYLE_CHOICES = [(s.capitalize(), s) for s in IDENTITY_STYLES]
