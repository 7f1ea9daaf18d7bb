"""S3 image storage (AWS S3 or any S3-compatible endpoint)."""

from botocore.exceptions import BotoCoreError, ClientError

from storefront.catalogue.media.port import ImageStorage, StoredRendition
from storefront.shared.errors import StorageError


class S3ImageStorage(ImageStorage):
    """Stores renditions under ``products/<product_id>/<variant>/<file>``.

    Objects are written with AES256 server-side encryption. Public URLs
    point at the CDN when one is configured, else at the bucket's regional
    endpoint.
    """

    storage_type = "s3"

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        cdn_url: str | None = None,
        client=None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.cdn_url = cdn_url.rstrip("/") if cdn_url else None
        if client is None:
            import boto3

            client = boto3.client(
                "s3",
                region_name=region or None,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
            )
        self._client = client

    @staticmethod
    def object_key(product_id: str, variant: str, file_name: str) -> str:
        return f"products/{product_id}/{variant}/{file_name}"

    def public_url(self, key: str) -> str:
        if self.cdn_url:
            return f"{self.cdn_url}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def save(
        self,
        product_id: str,
        variant: str,
        file_name: str,
        data: bytes,
        content_type: str,
    ) -> StoredRendition:
        key = self.object_key(product_id, variant, file_name)
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to upload {variant} rendition to S3: {exc}") from exc

        return StoredRendition(variant=variant, key=key, url=self.public_url(key))

    def delete(self, product_id: str, variant: str, file_name: str) -> None:
        key = self.object_key(product_id, variant, file_name)
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to delete {key} from S3: {exc}") from exc
