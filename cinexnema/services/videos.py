"""
Video record lifecycle: create upload target -> complete upload -> approve/revoke -> delete.

Routers stay thin; everything that touches the row store or object store for videos lives here.
The database row is the source of truth for existence: storage cleanup on delete is best-effort.
"""
import logging
import time
import uuid
from pathlib import Path
from typing import BinaryIO

from sqlalchemy import func
from sqlalchemy.orm import Session

from cinexnema.config import Settings
from cinexnema.database import commit
from cinexnema.errors import NotFound, PayloadTooLarge, ValidationFailed
from cinexnema.models.earning import Earning
from cinexnema.models.project import Project
from cinexnema.models.user import User
from cinexnema.models.video import Video, VideoStatus
from cinexnema.schemas.video import (
    CreateUploadRequest,
    DashboardResponse,
    DashboardStats,
    EarningRow,
    EarningTotals,
    FullUploadForm,
    PublicSubmitRequest,
)
from cinexnema.services.pricing import monthly_cost_from_settings
from cinexnema.services.storage import ObjectStorage

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
COVER_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
READ_CHUNK_SIZE = 1024 * 1024  # 1 MB


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


def _owned_video(db: Session, owner: User, video_id: str) -> Video:
    video = db.query(Video).filter(Video.id == video_id, Video.creator_id == owner.id).first()
    if not video:
        raise NotFound("Video not found.")
    return video


def _get_video(db: Session, video_id: str) -> Video:
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise NotFound("Video not found.")
    return video


def _check_project(db: Session, owner: User, project_id: str | None) -> str | None:
    if not project_id:
        return None
    exists = db.query(Project.id).filter(Project.id == project_id, Project.owner_id == owner.id).first()
    if not exists:
        raise NotFound("Project not found.")
    return project_id


def _check_owned_key(owner: User, key: str | None, field: str) -> str | None:
    """Object keys a creator hands us must live under their own <owner id>/ prefix."""
    if not key:
        return None
    if not key.startswith(f"{owner.id}/") or ".." in key.split("/"):
        raise ValidationFailed(f"{field} must be under your own storage folder.")
    return key


# ---------- Creator: upload handoff ----------


def create_upload(
    db: Session,
    storage: ObjectStorage,
    settings: Settings,
    owner: User,
    body: CreateUploadRequest,
):
    """
    Issue a signed upload for videos/<owner>/<ts>-video.mp4 and persist the pending record.
    Returns (video, signed_upload). Cost is computed here once and never recomputed.
    """
    project_id = _check_project(db, owner, body.project_id)
    cover_path = _check_owned_key(owner, body.cover_path, "cover_path")
    duration = max(0, body.duration_minutes or 0)
    bucket = settings.videos_bucket
    video_path = f"{owner.id}/{_timestamp_ms()}-video.mp4"

    signed = storage.create_signed_upload(bucket, video_path)

    video = Video(
        creator_id=owner.id,
        project_id=project_id,
        title=_clean(body.title) or UNTITLED,
        description=_clean(body.description),
        format=body.format.value if body.format else None,
        genres=list(body.genres),
        duration_minutes=duration,
        monthly_cost=monthly_cost_from_settings(duration, settings),
        cover_url=body.cover_url,
        cover_path=cover_path,
        bucket=bucket,
        video_path=video_path,
        status=VideoStatus.UPLOADING.value,
        approved=False,
    )
    db.add(video)
    commit(db)
    db.refresh(video)
    logger.info("Upload target created: video=%s owner=%s path=%s cost=%s", video.id, owner.id, video_path, video.monthly_cost)
    return video, signed


def complete_upload(db: Session, storage: ObjectStorage, owner: User, video_id: str) -> Video:
    """Mark the caller's record uploaded and set its public URL in the same commit."""
    video = _owned_video(db, owner, video_id)
    if not video.bucket or not video.video_path:
        raise ValidationFailed("Video has no storage path to complete.")
    video.video_url = storage.public_url(video.bucket, video.video_path)
    if video.status == VideoStatus.UPLOADING.value:
        video.status = VideoStatus.UPLOADED.value
    commit(db)
    db.refresh(video)
    logger.info("Upload completed: video=%s owner=%s", video.id, owner.id)
    return video


def submit_full_form(
    db: Session,
    storage: ObjectStorage | None,
    settings: Settings,
    owner: User,
    form: FullUploadForm,
) -> Video:
    """
    Store the full catalogue record for files the client already wrote to storage.

    bucket/video_path must point inside the caller's own folder of a provisioned bucket; the public
    URL is resolved from them when the client did not send one, so the three are set together.
    """
    if bool(form.bucket) != bool(form.video_path):
        raise ValidationFailed("bucket and video_path must be given together.")
    video_url = _clean(form.video_url)
    if form.bucket:
        if form.bucket not in settings.required_buckets:
            raise ValidationFailed(f"Unknown bucket: {form.bucket}")
        _check_owned_key(owner, form.video_path, "video_path")
        if not video_url:
            if storage is None:
                raise ValidationFailed("video_url is required when object storage is not configured.")
            video_url = storage.public_url(form.bucket, form.video_path)
    project_id = _check_project(db, owner, form.project_id)
    duration = max(0, form.duration_minutes or 0)
    title = _clean(form.title)
    if not title:
        raise ValidationFailed("title is required.")
    video = Video(
        creator_id=owner.id,
        project_id=project_id,
        title=title,
        alternative_title=_clean(form.alternative_title),
        description=_clean(form.short_synopsis),
        long_description=_clean(form.long_description),
        format=form.format.value if form.format else None,
        genres=list(form.genres),
        release_year=form.release_year,
        duration_minutes=duration,
        monthly_cost=monthly_cost_from_settings(duration, settings),
        original_language=_clean(form.original_language),
        age_rating=_clean(form.age_rating),
        tags=list(form.tags),
        cover_url=form.cover_url,
        banner_url=form.banner_url,
        thumbnail_url=form.thumbnail_url,
        trailer_url=form.trailer_url,
        screenshot_urls=list(form.screenshot_urls),
        directors=_clean(form.directors),
        producers=_clean(form.producers),
        cast=_clean(form.cast),
        subtitle_languages=_clean(form.subtitle_languages),
        video_codec=_clean(form.video_codec),
        framerate=_clean(form.framerate),
        bitrate=_clean(form.bitrate),
        resolution=_clean(form.resolution),
        copyright_holder=_clean(form.copyright_holder),
        access_type=form.access_type.value if form.access_type else None,
        release_date=form.release_date,
        geo_restriction=_clean(form.geo_restriction),
        bonus_content=_clean(form.bonus_content),
        bucket=form.bucket or None,
        video_path=form.video_path or None,
        video_url=video_url,
        status=VideoStatus.UPLOADED.value,
        approved=False,
    )
    db.add(video)
    commit(db)
    db.refresh(video)
    logger.info("Full form saved: video=%s owner=%s", video.id, owner.id)
    return video


def upload_cover(
    storage: ObjectStorage,
    settings: Settings,
    owner: User,
    filename: str | None,
    content_type: str | None,
    fileobj: BinaryIO,
) -> tuple[str, str]:
    """Buffer a cover image (bounded by cover_max_bytes) and store it in the covers bucket. Returns (url, path)."""
    ct = (content_type or "").split(";")[0].strip().lower()
    if ct not in COVER_CONTENT_TYPES:
        raise ValidationFailed("Cover must be an image (jpeg, png, webp, gif).")
    limit = settings.cover_max_bytes
    buf = bytearray()
    while chunk := fileobj.read(READ_CHUNK_SIZE):
        buf.extend(chunk)
        if len(buf) > limit:
            raise PayloadTooLarge(f"Cover exceeds the {limit} byte limit.")
    if not buf:
        raise ValidationFailed("No file uploaded.")
    ext = Path(filename or "").suffix.lower() or ".jpg"
    if len(ext) > 10:
        ext = ".jpg"
    path = f"{owner.id}/{_timestamp_ms()}-{uuid.uuid4().hex[:10]}{ext}"
    url = storage.upload_bytes(settings.covers_bucket, path, bytes(buf), ct)
    return url, path


def delete_video(db: Session, storage: ObjectStorage | None, settings: Settings, owner: User, video_id: str) -> None:
    """Delete the caller's record, then try to remove its objects. Storage failures are only logged."""
    video = _owned_video(db, owner, video_id)
    bucket, video_path, cover_path = video.bucket, video.video_path, video.cover_path
    db.delete(video)
    commit(db)
    logger.info("Video deleted: video=%s owner=%s", video_id, owner.id)

    if storage is None:
        if video_path or cover_path:
            logger.warning("Storage not configured; objects for video %s were not removed", video_id)
        return
    targets = []
    if video_path:
        targets.append((bucket or settings.videos_bucket, video_path))
    if cover_path:
        targets.append((settings.covers_bucket, cover_path))
    for target_bucket, path in targets:
        try:
            storage.remove(target_bucket, [path])
        except Exception as e:
            logger.warning("Storage cleanup failed for video %s (%s/%s): %s", video_id, target_bucket, path, e)


def list_own(db: Session, owner: User) -> list[Video]:
    return db.query(Video).filter(Video.creator_id == owner.id).order_by(Video.created_at.desc()).all()


# ---------- Admin / public ----------


def list_all(db: Session) -> list[Video]:
    return db.query(Video).order_by(Video.created_at.desc()).all()


def list_public(db: Session) -> list[Video]:
    """Approved records with a resolvable URL, newest first."""
    return (
        db.query(Video)
        .filter(Video.approved.is_(True), Video.video_url.isnot(None))
        .order_by(Video.created_at.desc())
        .all()
    )


def set_approved(db: Session, video_id: str, approved: bool) -> Video:
    """Approve or revoke. Idempotent; status is never touched."""
    video = _get_video(db, video_id)
    if video.approved != approved:
        video.approved = approved
        commit(db)
        db.refresh(video)
        logger.info("Video %s %s", video_id, "approved" if approved else "revoked")
    return video


def approve(db: Session, video_id: str) -> Video:
    return set_approved(db, video_id, True)


def revoke(db: Session, video_id: str) -> Video:
    return set_approved(db, video_id, False)


def submit_public(db: Session, settings: Settings, body: PublicSubmitRequest) -> Video:
    """Record with no owner, pointing at an already-public URL. Starts unapproved."""
    public_url = _clean(body.public_url)
    if not public_url:
        raise ValidationFailed("public_url is required.")
    if bool(body.bucket) != bool(body.path):
        raise ValidationFailed("bucket and path must be given together.")
    duration = max(0, body.duration_minutes or 0)
    video = Video(
        creator_id=None,
        title=_clean(body.title) or UNTITLED,
        description=_clean(body.description),
        format=body.format.value if body.format else None,
        genres=list(body.genres),
        duration_minutes=duration,
        monthly_cost=monthly_cost_from_settings(duration, settings),
        bucket=body.bucket or None,
        video_path=body.path or None,
        video_url=public_url,
        status=VideoStatus.READY.value,
        approved=False,
    )
    db.add(video)
    commit(db)
    db.refresh(video)
    logger.info("Public submission stored: video=%s", video.id)
    return video


# ---------- Creator dashboard ----------


def dashboard(db: Session, owner: User) -> DashboardResponse:
    own = db.query(Video).filter(Video.creator_id == owner.id)
    total = own.count()
    approved_count = own.filter(Video.approved.is_(True)).count()
    cost_total = (
        db.query(func.coalesce(func.sum(Video.monthly_cost), 0))
        .filter(Video.creator_id == owner.id)
        .scalar()
    )
    earnings = (
        db.query(Earning)
        .filter(Earning.creator_id == owner.id)
        .order_by(Earning.reference_month.desc())
        .all()
    )
    rows = [EarningRow.model_validate(e) for e in earnings]
    totals = EarningTotals(
        total_revenue=sum(r.total_revenue for r in rows),
        creator_commission=sum(r.creator_commission for r in rows),
        platform_commission=sum(r.platform_commission for r in rows),
    )
    return DashboardResponse(
        totals=totals,
        rows=rows,
        stats=DashboardStats(
            total_videos=total,
            approved_videos=approved_count,
            monthly_cost_total=int(cost_total),
        ),
    )
