"""Image storage port (abstract interface).

Every uploaded image is persisted as five renditions. Adapters decide
where the bytes live (local filesystem or S3) and which public URL
serves them; the rest of the catalogue only sees ``StoredRendition``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

VARIANTS = ("original", "thumbnail", "medium", "large", "webp")


def rendition_file_name(file_name: str, variant: str) -> str:
    """The WebP rendition swaps the ``.jpg`` extension for ``.webp``."""
    if variant == "webp":
        stem = file_name.rsplit(".", 1)[0]
        return f"{stem}.webp"
    return file_name


@dataclass(frozen=True)
class StoredRendition:
    """Location of one persisted rendition."""

    variant: str
    key: str
    url: str


class ImageStorage(ABC):
    """Abstract image storage interface."""

    storage_type: str = ""

    @abstractmethod
    def save(
        self,
        product_id: str,
        variant: str,
        file_name: str,
        data: bytes,
        content_type: str,
    ) -> StoredRendition:
        """Persist one rendition and return where it can be fetched from."""
        ...

    @abstractmethod
    def delete(self, product_id: str, variant: str, file_name: str) -> None:
        """Remove one rendition. Missing objects are not an error."""
        ...

    def delete_renditions(self, product_id: str, file_name: str) -> int:
        """Best-effort removal of all five renditions of an image.

        Failures are logged and skipped. Returns how many renditions were
        removed without error.
        """
        removed = 0
        for variant in VARIANTS:
            name = rendition_file_name(file_name, variant)
            try:
                self.delete(product_id, variant, name)
                removed += 1
            except Exception as exc:
                logger.warning(
                    "rendition_delete_failed",
                    product_id=product_id,
                    variant=variant,
                    file_name=name,
                    error=str(exc),
                )
        return removed
