"""Image validation and rendition generation (Pillow).

Every accepted upload becomes five renditions, each fitted inside its
bounding box without ever being enlarged:

    original   JPEG, source dimensions
    thumbnail  JPEG, 150x150 box
    medium     JPEG, 500x500 box
    large      JPEG, 1000x1000 box
    webp       WebP, large box

Box sizes and JPEG quality come from settings.
"""

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError
from protean.exceptions import ValidationError

from storefront.config import Settings

ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"})
ALLOWED_FORMATS = frozenset({"JPEG", "PNG", "WEBP", "GIF"})


@dataclass(frozen=True)
class IncomingImage:
    """Raw bytes of one uploaded file, as received from the client."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Rendition:
    variant: str
    data: bytes
    content_type: str
    width: int
    height: int


@dataclass(frozen=True)
class RenderedImage:
    width: int
    height: int
    renditions: list[Rendition]


def validate_image(image: IncomingImage, max_size: int) -> None:
    """Reject files that are not a supported, decodable image within the size limit."""
    if (image.content_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            {"images": [f"{image.filename}: invalid file type. Only JPEG, PNG, WebP, and GIF are allowed"]}
        )

    if image.size > max_size:
        raise ValidationError(
            {"images": [f"{image.filename}: file size exceeds maximum of {max_size // (1024 * 1024)}MB"]}
        )

    try:
        with Image.open(io.BytesIO(image.data)) as opened:
            image_format = opened.format
            opened.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError({"images": [f"{image.filename}: file is not a valid image"]}) from exc

    if image_format not in ALLOWED_FORMATS:
        raise ValidationError({"images": [f"{image.filename}: unsupported image format {image_format}"]})


def _to_rgb(source: Image.Image) -> Image.Image:
    """Flatten transparency onto white so the image can be written as JPEG."""
    if source.mode in ("RGBA", "LA") or (source.mode == "P" and "transparency" in source.info):
        rgba = source.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return source.convert("RGB")


def _fit_inside(source: Image.Image, box: tuple[int, int]) -> Image.Image:
    # thumbnail() keeps aspect ratio and never enlarges
    resized = source.copy()
    resized.thumbnail(box, Image.Resampling.LANCZOS)
    return resized


def _encode(img: Image.Image, image_format: str, quality: int) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=image_format, quality=quality)
    return buffer.getvalue()


def render_variants(data: bytes, settings: Settings) -> RenderedImage:
    """Decode ``data`` and produce the five renditions."""
    quality = settings.image_quality
    large_box = (settings.large_width, settings.large_height)
    boxes = {
        "thumbnail": (settings.thumbnail_width, settings.thumbnail_height),
        "medium": (settings.medium_width, settings.medium_height),
        "large": large_box,
    }

    with Image.open(io.BytesIO(data)) as decoded:
        # Animated GIFs contribute their first frame
        decoded.seek(0)
        source = _to_rgb(decoded)

    width, height = source.size
    renditions = [Rendition("original", _encode(source, "JPEG", quality), "image/jpeg", width, height)]

    for variant, box in boxes.items():
        resized = _fit_inside(source, box)
        renditions.append(Rendition(variant, _encode(resized, "JPEG", quality), "image/jpeg", *resized.size))

    webp = _fit_inside(source, large_box)
    renditions.append(Rendition("webp", _encode(webp, "WEBP", quality), "image/webp", *webp.size))

    return RenderedImage(width=width, height=height, renditions=renditions)
