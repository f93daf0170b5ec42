from datetime import date, datetime
from pydantic import BaseModel
from cinexnema.models.video import AccessType, VideoFormat


class CreateUploadRequest(BaseModel):
    """Metadata sent before the client writes the video bytes to storage."""
    title: str | None = None
    description: str | None = None
    format: VideoFormat | None = None
    genres: list[str] = []
    project_id: str | None = None
    cover_url: str | None = None
    cover_path: str | None = None
    duration_minutes: int | None = None


class UploadTicket(BaseModel):
    video_id: str
    upload_url: str
    bucket: str
    video_path: str
    expires_in: int
    monthly_cost: int


class CompleteUploadRequest(BaseModel):
    video_id: str


class FullUploadForm(BaseModel):
    """Full catalogue form: video and images were already written to storage by the client."""
    title: str
    alternative_title: str | None = None
    short_synopsis: str | None = None
    long_description: str | None = None
    format: VideoFormat | None = None
    genres: list[str] = []
    release_year: int | None = None
    duration_minutes: int | None = None
    original_language: str | None = None
    age_rating: str | None = None
    tags: list[str] = []
    project_id: str | None = None
    cover_url: str | None = None
    banner_url: str | None = None
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    screenshot_urls: list[str] = []
    directors: str | None = None
    producers: str | None = None
    cast: str | None = None
    subtitle_languages: str | None = None
    video_codec: str | None = None
    framerate: str | None = None
    bitrate: str | None = None
    resolution: str | None = None
    copyright_holder: str | None = None
    access_type: AccessType | None = None
    release_date: date | None = None
    geo_restriction: str | None = None
    bonus_content: str | None = None
    video_url: str | None = None
    bucket: str | None = None
    video_path: str | None = None


class PublicSubmitRequest(BaseModel):
    """Anonymous submission (no owner). public_url is required; bucket/path go together."""
    title: str | None = None
    description: str | None = None
    format: VideoFormat | None = None
    genres: list[str] = []
    duration_minutes: int | None = None
    public_url: str | None = None
    bucket: str | None = None
    path: str | None = None


class VideoResponse(BaseModel):
    id: str
    creator_id: str | None
    project_id: str | None
    title: str
    description: str | None
    format: str | None
    genres: list[str]
    duration_minutes: int
    monthly_cost: int
    alternative_title: str | None = None
    long_description: str | None = None
    release_year: int | None = None
    original_language: str | None = None
    age_rating: str | None = None
    tags: list[str] = []
    cover_url: str | None
    banner_url: str | None = None
    thumbnail_url: str | None = None
    trailer_url: str | None = None
    screenshot_urls: list[str] = []
    directors: str | None = None
    producers: str | None = None
    cast: str | None = None
    subtitle_languages: str | None = None
    video_codec: str | None = None
    framerate: str | None = None
    bitrate: str | None = None
    resolution: str | None = None
    copyright_holder: str | None = None
    access_type: str | None = None
    release_date: date | None = None
    geo_restriction: str | None = None
    bonus_content: str | None = None
    bucket: str | None
    video_path: str | None
    video_url: str | None
    status: str
    approved: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicVideoResponse(BaseModel):
    """Public listing: no owner or storage internals."""
    id: str
    title: str
    description: str | None
    format: str | None
    genres: list[str]
    duration_minutes: int
    cover_url: str | None
    video_url: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class PricingResponse(BaseModel):
    duration_minutes: int
    free_minutes: int
    block_minutes: int
    block_fee: int
    extra_blocks: int
    monthly_cost: int

    class Config:
        from_attributes = True


class CoverUploadResponse(BaseModel):
    url: str
    path: str
    bucket: str


class EarningRow(BaseModel):
    reference_month: date
    total_revenue: float
    creator_commission: float
    platform_commission: float

    class Config:
        from_attributes = True


class EarningTotals(BaseModel):
    total_revenue: float = 0
    creator_commission: float = 0
    platform_commission: float = 0


class DashboardStats(BaseModel):
    total_videos: int
    approved_videos: int
    monthly_cost_total: int


class DashboardResponse(BaseModel):
    totals: EarningTotals
    rows: list[EarningRow]
    stats: DashboardStats
