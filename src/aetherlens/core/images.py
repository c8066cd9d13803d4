"""Image file reading and decoding.

Uploaded files arrive as paths (Gradio) or data URLs (REST API).  Both are
normalised into :class:`~aetherlens.core.models.EditableImage` so that the
rest of the application only ever sees base64 data URLs.
"""

import logging
import time
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .exceptions import ImageReadError
from .models import EditableImage

logger = logging.getLogger(__name__)

# Pillow format name -> mime type for the formats the vision model accepts.
SUPPORTED_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
}


def sniff_mime_type(data: bytes) -> str | None:
    """Return the mime type of encoded image bytes, or None if not an image."""
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            return SUPPORTED_FORMATS.get(img.format or "")
    except (UnidentifiedImageError, OSError, SyntaxError):
        return None


def load_editable_image(path: str | Path, name: str | None = None) -> EditableImage:
    """Read an image file from disk.

    Args:
        path: Path of the uploaded file
        name: Display name (defaults to the file name)

    Returns:
        EditableImage holding the file as a data URL

    Raises:
        ImageReadError: If the file cannot be read or is not a supported image
    """
    path = Path(path)
    display_name = name or path.name

    try:
        data = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise ImageReadError(f"Failed to read file: {display_name}.") from e

    mime_type = sniff_mime_type(data)
    if mime_type is None:
        logger.warning(f"Rejected non-image upload: {display_name}")
        raise ImageReadError(f"'{display_name}' is not a supported image file.")

    return EditableImage.from_bytes(data, mime_type, display_name)


def load_editable_images(paths: list[str | Path]) -> list[EditableImage]:
    """Read several files; the first failure aborts the whole batch."""
    return [load_editable_image(p) for p in paths]


def decode_image(src: str) -> Image.Image:
    """Decode a data URL into a PIL image for display.

    Raises:
        ImageReadError: If the payload is not a decodable image
    """
    image = EditableImage(src=src, name="image")
    try:
        img = Image.open(BytesIO(image.to_bytes()))
        img.load()
        return img
    except (ValueError, UnidentifiedImageError, OSError) as e:
        raise ImageReadError("Failed to decode image data.") from e


def editable_from_generated(src: str, timestamp_ms: int | None = None) -> EditableImage:
    """Wrap a generated result so it can be sent to the edit surface.

    The image is named ``generated-<unix ms>.jpeg``.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return EditableImage(src=src, name=f"generated-{timestamp_ms}.jpeg")


def check_payloads(images: list[EditableImage]) -> None:
    """Make sure every image payload is decodable base64.

    Raises:
        ImageReadError: Naming the first image that cannot be decoded
    """
    for image in images:
        try:
            image.to_bytes()
        except ValueError as e:
            logger.warning(f"Undecodable image payload: {image.name}")
            raise ImageReadError(f"Failed to read file: {image.name}.") from e
