"""Image payload helpers.

Every image in Wallgen travels as a base64 string: reference images picked by
the user, wallpapers returned by the model, and remixed replacements. This
module converts between those strings, raw bytes, PIL images and files on disk.
"""

import base64
import binascii
import hashlib
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

MIME_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


class ImageDecodeError(ValueError):
    """Raised when a payload cannot be decoded as an image."""

    pass


@dataclass(frozen=True)
class ReferenceImage:
    """An optional input image supplied to steer generation.

    Attributes:
        base64: Base64-encoded image bytes (no data-URL prefix)
        mime_type: MIME type of the image, e.g. "image/jpeg"
        name: Display name, usually the uploaded file's name
    """

    base64: str
    mime_type: str
    name: str

    @classmethod
    def from_bytes(cls, data: bytes, name: str) -> "ReferenceImage":
        """Build a reference image from raw bytes, detecting the MIME type.

        Raises:
            ImageDecodeError: If the bytes are not a readable image
        """
        mime_type = mime_type_from_bytes(data)
        if mime_type is None:
            raise ImageDecodeError(f"{name} is not a supported image file")
        return cls(base64=encode_image_bytes(data), mime_type=mime_type, name=name)

    @classmethod
    def from_file(cls, path: str | Path) -> "ReferenceImage":
        """Build a reference image from a file on disk."""
        path = Path(path)
        return cls.from_bytes(path.read_bytes(), path.name)

    def __repr__(self) -> str:
        return f"ReferenceImage(name={self.name!r}, mime_type={self.mime_type!r}, size={len(self.base64)})"


def encode_image_bytes(data: bytes) -> str:
    """Encode raw image bytes as a base64 string."""
    return base64.b64encode(data).decode("ascii")


def decode_image_data(payload: str) -> bytes:
    """Decode a base64 image payload, accepting an optional data-URL prefix.

    Raises:
        ImageDecodeError: If the payload is not valid base64
    """
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image payload: {e}") from e


def mime_type_from_bytes(data: bytes) -> str | None:
    """Detect the MIME type of raw image bytes with Pillow.

    Returns:
        The MIME type, or None if Pillow cannot identify the image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def detect_mime_type(payload: str, default: str = DEFAULT_MIME_TYPE) -> str:
    """Detect the MIME type of a base64 image payload.

    Args:
        payload: Base64-encoded image
        default: Value returned when detection fails

    Returns:
        Detected MIME type or ``default``
    """
    try:
        mime_type = mime_type_from_bytes(decode_image_data(payload))
    except ImageDecodeError:
        mime_type = None

    if mime_type is None:
        logger.debug(f"Could not detect image type, assuming {default}")
        return default
    return mime_type


def to_pil_image(payload: str) -> Image.Image:
    """Decode a base64 payload into a fully loaded PIL image.

    Raises:
        ImageDecodeError: If the payload is not a readable image
    """
    try:
        img = Image.open(io.BytesIO(decode_image_data(payload)))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return img


def save_for_download(payload: str, directory: Path, stem: str = "wallpaper") -> Path:
    """Write an image payload to disk so the browser can download it.

    Files are written to a content-addressed subfolder so the download keeps
    a friendly name (``wallpaper.png``) while different images never collide.

    Args:
        payload: Base64-encoded image
        directory: Base downloads directory
        stem: File name without extension

    Returns:
        Path of the written file
    """
    data = decode_image_data(payload)
    digest = hashlib.sha256(data).hexdigest()[:16]
    extension = MIME_EXTENSIONS.get(mime_type_from_bytes(data) or "", ".png")

    target_dir = directory / digest
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{stem}{extension}"

    if not target.exists():
        target.write_bytes(data)
        logger.info(f"Saved download file: {target}")

    return target


def remove_download(path: Path) -> None:
    """Delete a file written by :func:`save_for_download` and its folder if now empty."""
    path.unlink(missing_ok=True)
    folder = path.parent
    if folder.is_dir() and not any(folder.iterdir()):
        folder.rmdir()
    logger.debug(f"Removed download file: {path}")
