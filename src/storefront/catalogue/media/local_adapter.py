"""Local filesystem image storage for development and single-node deployments."""

from pathlib import Path

from storefront.catalogue.media.port import ImageStorage, StoredRendition
from storefront.shared.errors import StorageError


class LocalImageStorage(ImageStorage):
    """Writes renditions under ``<root>/<product_id>/<variant>/<file>``."""

    storage_type = "local"

    def __init__(self, root_path: str, url_prefix: str = "/uploads/products") -> None:
        self.root_path = Path(root_path)
        self.url_prefix = url_prefix.rstrip("/")

    def _path(self, product_id: str, variant: str, file_name: str) -> Path:
        return self.root_path / product_id / variant / file_name

    def save(
        self,
        product_id: str,
        variant: str,
        file_name: str,
        data: bytes,
        content_type: str,  # noqa: ARG002
    ) -> StoredRendition:
        path = self._path(product_id, variant, file_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {variant} rendition: {exc}") from exc

        return StoredRendition(
            variant=variant,
            key=str(path),
            url=f"{self.url_prefix}/{product_id}/{variant}/{file_name}",
        )

    def delete(self, product_id: str, variant: str, file_name: str) -> None:
        self._path(product_id, variant, file_name).unlink(missing_ok=True)
