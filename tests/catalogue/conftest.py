"""Image fixtures shared by the Catalogue tests."""

import io

import pytest
from PIL import Image

from storefront.catalogue.media.renditions import IncomingImage


def image_bytes(width=1200, height=800, image_format="JPEG", mode="RGB", color=(200, 80, 40)):
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture()
def make_image():
    def _make(filename="photo.jpg", content_type="image/jpeg", width=1200, height=800, image_format="JPEG"):
        return IncomingImage(
            filename=filename,
            content_type=content_type,
            data=image_bytes(width, height, image_format),
        )

    return _make


@pytest.fixture()
def image_data():
    """Builder returning encoded bytes of a solid-colour image."""
    return image_bytes
