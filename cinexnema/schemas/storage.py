from pydantic import BaseModel


class SignedUrlRequest(BaseModel):
    bucket: str | None = None  # default: videos bucket
    path: str | None = None
    expires_in: int | None = None


class SignedUrlResponse(BaseModel):
    signed_url: str
    bucket: str
    path: str
    expires_in: int


class SignedUploadRequest(BaseModel):
    bucket: str | None = None  # default: videos bucket
    filename: str | None = None
    prefix: str = "uploads"


class SignedUploadResponse(BaseModel):
    bucket: str
    path: str
    upload_url: str
    public_url: str
    expires_in: int
    created_bucket: bool = False


class BucketStatus(BaseModel):
    bucket: str
    status: str
    public: bool
    error: str | None = None


class CreateBucketsResponse(BaseModel):
    success: bool
    results: list[BucketStatus]


class CheckBucketsResponse(BaseModel):
    existing: list[str]
    missing: list[str]
    all_configured: bool
