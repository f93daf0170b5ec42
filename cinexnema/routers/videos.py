"""
Public listing, pricing preview and anonymous submission; admin moderation (list all, approve, revoke).
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from cinexnema.auth import get_current_user_admin
from cinexnema.config import Settings, get_settings
from cinexnema.database import get_db
from cinexnema.models.user import User
from cinexnema.schemas.video import PricingResponse, PublicSubmitRequest, PublicVideoResponse, VideoResponse
from cinexnema.services import videos as video_service
from cinexnema.services.pricing import quote_from_settings

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("/public", response_model=list[PublicVideoResponse])
def list_public(db: Session = Depends(get_db)):
    """Approved videos with a playable URL, newest first."""
    return video_service.list_public(db)


@router.get("/pricing", response_model=PricingResponse)
def pricing_preview(
    duration_minutes: int = Query(0),
    settings: Settings = Depends(get_settings),
):
    """Monthly cost preview for a duration (same rule used when the record is created)."""
    return quote_from_settings(duration_minutes, settings)


@router.post("/submit", response_model=VideoResponse)
def submit(
    body: PublicSubmitRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Anonymous submission of an already-hosted video. Needs admin approval before it is public."""
    return video_service.submit_public(db, settings, body)


# ---------- Admin ----------


@router.get("", response_model=list[VideoResponse])
def list_all(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Admin: every record, approved or not."""
    return video_service.list_all(db)


@router.post("/{video_id}/approve", response_model=VideoResponse)
def approve_video(
    video_id: str,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    return video_service.approve(db, video_id)


@router.post("/{video_id}/revoke", response_model=VideoResponse)
def revoke_video(
    video_id: str,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    return video_service.revoke(db, video_id)
