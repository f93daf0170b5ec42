"""
Object store access (MinIO / any S3-compatible endpoint).

One ObjectStorage is built at process start (see main.lifespan) and handed to handlers through
dependencies.get_storage. Large video files never pass through this process: the server only
issues a presigned PUT and later resolves the public URL. Cover images are the exception and are
forwarded from memory with upload_bytes().
"""
import io
import json
import logging
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import quote, urlparse

from minio import Minio
from minio.error import MinioException, S3Error

from cinexnema.config import Settings
from cinexnema.errors import UpstreamFailure

logger = logging.getLogger(__name__)

# S3 error codes -> reason exposed to API clients
_S3_REASONS = {
    "NoSuchBucket": "BUCKET_NOT_FOUND",
    "NoSuchKey": "OBJECT_NOT_FOUND",
    "AccessDenied": "PERMISSION_DENIED",
    "BucketAlreadyOwnedByYou": "ALREADY_EXISTS",
    "BucketAlreadyExists": "ALREADY_EXISTS",
}


def storage_error(exc: MinioException) -> UpstreamFailure:
    """Translate a MinIO SDK error, keeping the provider's message."""
    if isinstance(exc, S3Error):
        reason = _S3_REASONS.get(exc.code, "STORAGE_ERROR")
        return UpstreamFailure(exc.message or str(exc), reason=reason)
    return UpstreamFailure(str(exc), reason="STORAGE_ERROR")


def public_read_policy(bucket: str) -> str:
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"AWS": ["*"]},
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{bucket}/*"],
                }
            ],
        }
    )


@dataclass
class SignedUpload:
    bucket: str
    path: str
    upload_url: str
    public_url: str
    expires_in: int
    created_bucket: bool = False


@dataclass
class BucketResult:
    bucket: str
    status: str  # "created" | "exists" | "error"
    public: bool
    error: str | None = None


class ObjectStorage:
    def __init__(
        self,
        client: Minio,
        *,
        public_base_url: str,
        public_buckets: list[str],
        upload_expiry_seconds: int,
        download_expiry_seconds: int,
    ):
        self._client = client
        self._public_base_url = public_base_url.rstrip("/")
        self._public_buckets = set(public_buckets)
        self._upload_expiry = upload_expiry_seconds
        self._download_expiry = download_expiry_seconds

    def is_public(self, bucket: str) -> bool:
        return bucket in self._public_buckets

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._public_base_url}/{bucket}/{quote(path)}"

    def create_bucket(self, bucket: str) -> bool:
        """Create bucket (public-read policy for public buckets). False if it already existed."""
        try:
            if self._client.bucket_exists(bucket_name=bucket):
                return False
            self._client.make_bucket(bucket_name=bucket)
            if self.is_public(bucket):
                self._client.set_bucket_policy(bucket_name=bucket, policy=public_read_policy(bucket))
        except S3Error as e:
            if _S3_REASONS.get(e.code) == "ALREADY_EXISTS":
                return False
            raise storage_error(e) from e
        except MinioException as e:
            raise storage_error(e) from e
        logger.info("Created bucket %s (public=%s)", bucket, self.is_public(bucket))
        return True

    def create_signed_upload(self, bucket: str, path: str) -> SignedUpload:
        """Time-limited PUT URL for a direct client write. Missing bucket is created first."""
        created = self.create_bucket(bucket)
        try:
            url = self._client.presigned_put_object(
                bucket_name=bucket,
                object_name=path,
                expires=timedelta(seconds=self._upload_expiry),
            )
        except MinioException as e:
            raise storage_error(e) from e
        return SignedUpload(
            bucket=bucket,
            path=path,
            upload_url=url,
            public_url=self.public_url(bucket, path),
            expires_in=self._upload_expiry,
            created_bucket=created,
        )

    def create_signed_url(self, bucket: str, path: str, expires_in: int | None = None) -> str:
        """Time-limited GET URL (for objects in private buckets)."""
        try:
            return self._client.presigned_get_object(
                bucket_name=bucket,
                object_name=path,
                expires=timedelta(seconds=expires_in or self._download_expiry),
            )
        except MinioException as e:
            raise storage_error(e) from e

    def upload_bytes(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store a small in-memory payload and return its public URL."""
        try:
            self._client.put_object(
                bucket_name=bucket,
                object_name=path,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except MinioException as e:
            raise storage_error(e) from e
        return self.public_url(bucket, path)

    def remove(self, bucket: str, paths: list[str]) -> None:
        for path in paths:
            try:
                self._client.remove_object(bucket_name=bucket, object_name=path)
            except MinioException as e:
                raise storage_error(e) from e

    def ensure_buckets(self, buckets: list[str]) -> list[BucketResult]:
        """Create every bucket that is missing. One failing bucket does not stop the others."""
        results = []
        for bucket in buckets:
            try:
                created = self.create_bucket(bucket)
            except UpstreamFailure as e:
                logger.error("Bucket %s could not be created: %s", bucket, e.message)
                results.append(BucketResult(bucket=bucket, status="error", public=self.is_public(bucket), error=e.message))
                continue
            results.append(
                BucketResult(bucket=bucket, status="created" if created else "exists", public=self.is_public(bucket))
            )
        return results

    def list_buckets(self) -> list[str]:
        try:
            return [b.name for b in self._client.list_buckets()]
        except MinioException as e:
            raise storage_error(e) from e


def build_object_storage(settings: Settings) -> ObjectStorage | None:
    """ObjectStorage from settings, or None when endpoint/credentials are not set."""
    if not settings.storage_configured:
        return None
    parsed = urlparse(settings.storage_endpoint)
    endpoint = parsed.netloc or parsed.path
    secure = settings.storage_secure if settings.storage_secure is not None else parsed.scheme == "https"
    client = Minio(
        endpoint,
        access_key=settings.storage_access_key,
        secret_key=settings.storage_secret_key,
        secure=secure,
        region=settings.storage_region,
    )
    base_url = settings.storage_public_base_url or f"{'https' if secure else 'http'}://{endpoint}"
    return ObjectStorage(
        client,
        public_base_url=base_url,
        public_buckets=settings.public_buckets,
        upload_expiry_seconds=settings.signed_upload_expire_seconds,
        download_expiry_seconds=settings.signed_url_expire_seconds,
    )
