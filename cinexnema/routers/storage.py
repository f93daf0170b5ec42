"""
Direct storage helpers: presigned GET/PUT for arbitrary keys, and admin bucket provisioning.
"""
from urllib.parse import quote
from fastapi import APIRouter, Depends
from cinexnema.auth import get_current_user, get_current_user_admin
from cinexnema.config import Settings, get_settings
from cinexnema.dependencies import get_storage
from cinexnema.errors import ValidationFailed
from cinexnema.models.user import User
from cinexnema.schemas.storage import (
    BucketStatus,
    CheckBucketsResponse,
    CreateBucketsResponse,
    SignedUploadRequest,
    SignedUploadResponse,
    SignedUrlRequest,
    SignedUrlResponse,
)
from cinexnema.services.storage import ObjectStorage

router = APIRouter(prefix="/api/storage", tags=["storage"])


def _allowed_bucket(bucket: str | None, settings: Settings) -> str:
    bucket = bucket or settings.videos_bucket
    if bucket not in settings.required_buckets:
        raise ValidationFailed(f"Unknown bucket: {bucket}")
    return bucket


@router.post("/signed-url", response_model=SignedUrlResponse)
def create_signed_url(
    body: SignedUrlRequest,
    _user: User = Depends(get_current_user),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Time-limited download URL for an object (needed for the private videos bucket)."""
    if not body.path:
        raise ValidationFailed("path is required")
    bucket = _allowed_bucket(body.bucket, settings)
    expires_in = body.expires_in or settings.signed_url_expire_seconds
    url = storage.create_signed_url(bucket, body.path, expires_in)
    return SignedUrlResponse(signed_url=url, bucket=bucket, path=body.path, expires_in=expires_in)


@router.post("/signed-upload", response_model=SignedUploadResponse)
def create_signed_upload(
    body: SignedUploadRequest,
    _user: User = Depends(get_current_user),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Presigned PUT for <prefix>/<filename>. Creates the bucket if it does not exist yet."""
    if not body.filename:
        raise ValidationFailed("filename is required")
    bucket = _allowed_bucket(body.bucket, settings)
    prefix = body.prefix.strip("/") or "uploads"
    key = f"{prefix}/{quote(body.filename, safe='')}"
    signed = storage.create_signed_upload(bucket, key)
    return SignedUploadResponse(
        bucket=signed.bucket,
        path=signed.path,
        upload_url=signed.upload_url,
        public_url=signed.public_url,
        expires_in=signed.expires_in,
        created_bucket=signed.created_bucket,
    )


@router.post("/create-buckets", response_model=CreateBucketsResponse)
def create_buckets(
    _admin: User = Depends(get_current_user_admin),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Admin: create every required bucket (videos private, image buckets public-read)."""
    results = storage.ensure_buckets(settings.required_buckets)
    return CreateBucketsResponse(
        success=all(r.status != "error" for r in results),
        results=[BucketStatus(bucket=r.bucket, status=r.status, public=r.public, error=r.error) for r in results],
    )


@router.get("/check-buckets", response_model=CheckBucketsResponse)
def check_buckets(
    _admin: User = Depends(get_current_user_admin),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    existing = storage.list_buckets()
    missing = [b for b in settings.required_buckets if b not in existing]
    return CheckBucketsResponse(existing=existing, missing=missing, all_configured=not missing)
