"""Tests for upload validation and rendition generation."""

import io

import pytest
from PIL import Image
from protean.exceptions import ValidationError

from storefront.catalogue.media.port import VARIANTS, rendition_file_name
from storefront.catalogue.media.renditions import IncomingImage, render_variants, validate_image
from storefront.config import Settings

MAX_SIZE = 5 * 1024 * 1024


def _open(rendition):
    return Image.open(io.BytesIO(rendition.data))


class TestValidateImage:
    def test_accepts_jpeg(self, make_image):
        validate_image(make_image(), MAX_SIZE)

    def test_accepts_png_and_gif(self, make_image):
        validate_image(make_image("a.png", "image/png", image_format="PNG"), MAX_SIZE)
        validate_image(make_image("a.gif", "image/gif", image_format="GIF"), MAX_SIZE)

    def test_rejects_disallowed_type(self, make_image):
        upload = make_image("notes.pdf", "application/pdf")
        with pytest.raises(ValidationError) as exc:
            validate_image(upload, MAX_SIZE)
        assert "invalid file type" in exc.value.messages["images"][0]

    def test_rejects_oversized_file(self, make_image):
        upload = make_image()
        with pytest.raises(ValidationError) as exc:
            validate_image(upload, upload.size - 1)
        assert "file size exceeds" in exc.value.messages["images"][0]

    def test_rejects_corrupt_bytes(self):
        upload = IncomingImage(filename="broken.jpg", content_type="image/jpeg", data=b"\xff\xd8not really a jpeg")
        with pytest.raises(ValidationError) as exc:
            validate_image(upload, MAX_SIZE)
        assert "not a valid image" in exc.value.messages["images"][0]

    def test_rejects_unsupported_format_behind_allowed_type(self, image_data):
        upload = IncomingImage(filename="a.jpg", content_type="image/jpeg", data=image_data(image_format="BMP"))
        with pytest.raises(ValidationError):
            validate_image(upload, MAX_SIZE)


class TestRenderVariants:
    def test_produces_five_renditions(self, image_data):
        rendered = render_variants(image_data(1200, 800), Settings())
        assert [r.variant for r in rendered.renditions] == list(VARIANTS)

    def test_original_keeps_source_dimensions(self, image_data):
        rendered = render_variants(image_data(1200, 800), Settings())
        assert (rendered.width, rendered.height) == (1200, 800)
        assert _open(rendered.renditions[0]).size == (1200, 800)

    def test_resized_renditions_fit_their_boxes(self, image_data):
        rendered = render_variants(image_data(1200, 800), Settings())
        sizes = {r.variant: (r.width, r.height) for r in rendered.renditions}
        assert sizes["thumbnail"] == (150, 100)
        assert sizes["medium"] == (500, 333)
        assert sizes["large"] == (1000, 667)
        assert sizes["webp"] == (1000, 667)

    def test_small_images_are_never_enlarged(self, image_data):
        rendered = render_variants(image_data(120, 90), Settings())
        for rendition in rendered.renditions:
            assert (rendition.width, rendition.height) == (120, 90)

    def test_encodings(self, image_data):
        rendered = render_variants(image_data(600, 600, image_format="PNG", mode="RGBA"), Settings())
        formats = {r.variant: _open(r).format for r in rendered.renditions}
        assert formats == {
            "original": "JPEG",
            "thumbnail": "JPEG",
            "medium": "JPEG",
            "large": "JPEG",
            "webp": "WEBP",
        }
        assert rendered.renditions[-1].content_type == "image/webp"

    def test_box_sizes_come_from_settings(self, image_data):
        settings = Settings(thumbnail_width=64, thumbnail_height=64)
        rendered = render_variants(image_data(640, 320), settings)
        thumbnail = next(r for r in rendered.renditions if r.variant == "thumbnail")
        assert (thumbnail.width, thumbnail.height) == (64, 32)


class TestRenditionFileName:
    def test_webp_swaps_extension(self):
        assert rendition_file_name("abc.jpg", "webp") == "abc.webp"

    def test_other_variants_keep_name(self):
        assert rendition_file_name("abc.jpg", "thumbnail") == "abc.jpg"
