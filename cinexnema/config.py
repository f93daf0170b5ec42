from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./cinexnema.db"

    # JWT
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:8080"

    # Object storage (MinIO / S3). Empty endpoint or keys = storage endpoints answer CONFIGURATION_MISSING
    storage_endpoint: str = ""  # e.g. http://localhost:9000
    storage_access_key: str = ""
    storage_secret_key: str = ""
    storage_region: str | None = None
    storage_secure: bool | None = None  # None = derive from endpoint scheme
    storage_public_base_url: str = ""  # empty = endpoint URL

    # Buckets
    videos_bucket: str = "videos"
    covers_bucket: str = "covers"
    banners_bucket: str = "banners"
    thumbnails_bucket: str = "thumbnails"
    screenshots_bucket: str = "screenshots"

    # Signed upload (PUT) and signed download (GET) expiry, seconds
    signed_upload_expire_seconds: int = 2 * 60 * 60
    signed_url_expire_seconds: int = 60 * 60

    # Cover images are buffered in memory before forwarding; hard cap in bytes
    cover_max_bytes: int = 50 * 1024 * 1024

    # Monthly pricing: first N minutes free, then each started block costs block_fee
    pricing_free_minutes: int = 70
    pricing_block_minutes: int = 70
    pricing_block_fee: int = 1000

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def storage_configured(self) -> bool:
        return bool(self.storage_endpoint and self.storage_access_key and self.storage_secret_key)

    @property
    def public_buckets(self) -> list[str]:
        return [self.covers_bucket, self.banners_bucket, self.thumbnails_bucket, self.screenshots_bucket]

    @property
    def required_buckets(self) -> list[str]:
        return [self.videos_bucket, *self.public_buckets]


@lru_cache
def get_settings() -> Settings:
    return Settings()
