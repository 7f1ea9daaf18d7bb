"""Image storage registry.

``get_storage()`` returns the backend new uploads are written to, chosen by
``IMAGE_STORAGE_TYPE`` (``local`` by default, or ``s3``). Existing images
remember which backend holds their renditions; ``storage_for()`` resolves
that backend so deletes reach the right place after the setting changes.
"""

from storefront.catalogue.media.port import ImageStorage
from storefront.config import get_settings

_storages: dict[str, ImageStorage] = {}
_active_type: str | None = None


def _build_storage(storage_type: str) -> ImageStorage:
    settings = get_settings()
    if storage_type == "s3":
        from storefront.catalogue.media.s3_adapter import S3ImageStorage

        if not settings.aws_s3_bucket:
            raise ValueError("AWS_S3_BUCKET must be set to use S3 image storage")

        return S3ImageStorage(
            bucket=settings.aws_s3_bucket,
            region=settings.aws_s3_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            cdn_url=settings.aws_s3_cdn_url,
        )

    if storage_type == "local":
        from storefront.catalogue.media.local_adapter import LocalImageStorage

        return LocalImageStorage(root_path=settings.upload_dir, url_prefix=settings.upload_url_prefix)

    raise ValueError(f"Unknown image storage type: {storage_type}")


def storage_for(storage_type: str) -> ImageStorage:
    """Return the backend for ``storage_type``, building it from settings on first use."""
    if storage_type not in _storages:
        _storages[storage_type] = _build_storage(storage_type)
    return _storages[storage_type]


def get_storage() -> ImageStorage:
    """Return the backend new uploads go to."""
    return storage_for(_active_type or get_settings().image_storage_type)


def set_storage(storage: ImageStorage) -> None:
    """Make ``storage`` the upload backend and the handler for its storage type (useful for tests)."""
    global _active_type
    _storages[storage.storage_type] = storage
    _active_type = storage.storage_type


def reset_storage() -> None:
    """Forget overrides and cached backends."""
    global _active_type
    _storages.clear()
    _active_type = None
