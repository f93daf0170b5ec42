"""
Creator area (Bearer token required): upload handoff, cover upload, own videos, dashboard, projects.

Upload flow:
  1. POST /upload            -> record in "uploading" + presigned PUT URL
  2. client PUTs the file straight to object storage
  3. POST /upload-complete   -> status "uploaded", public URL set
"""
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from cinexnema.auth import get_current_user
from cinexnema.config import Settings, get_settings
from cinexnema.database import commit, get_db
from cinexnema.dependencies import get_optional_storage, get_storage
from cinexnema.errors import ValidationFailed
from cinexnema.models.project import Project
from cinexnema.models.user import User
from cinexnema.schemas.project import ProjectCreate, ProjectResponse
from cinexnema.schemas.video import (
    CompleteUploadRequest,
    CoverUploadResponse,
    CreateUploadRequest,
    DashboardResponse,
    FullUploadForm,
    UploadTicket,
    VideoResponse,
)
from cinexnema.services import videos as video_service
from cinexnema.services.storage import ObjectStorage

router = APIRouter(prefix="/api/creators", tags=["creators"])


@router.post("/upload", response_model=UploadTicket)
def create_upload(
    body: CreateUploadRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    video, signed = video_service.create_upload(db, storage, settings, user, body)
    return UploadTicket(
        video_id=video.id,
        upload_url=signed.upload_url,
        bucket=signed.bucket,
        video_path=signed.path,
        expires_in=signed.expires_in,
        monthly_cost=video.monthly_cost,
    )


@router.post("/upload-complete", response_model=VideoResponse)
def complete_upload(
    body: CompleteUploadRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    return video_service.complete_upload(db, storage, user, body.video_id)


@router.post("/upload-complete-form", response_model=VideoResponse)
def upload_complete_form(
    body: FullUploadForm,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: ObjectStorage | None = Depends(get_optional_storage),
    settings: Settings = Depends(get_settings),
):
    """Full catalogue form for a video (and images) the client already stored."""
    return video_service.submit_full_form(db, storage, settings, user, body)


@router.post("/cover", response_model=CoverUploadResponse)
def upload_cover(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Cover image, proxied through the server (size-capped). Stored in the public covers bucket."""
    url, path = video_service.upload_cover(storage, settings, user, file.filename, file.content_type, file.file)
    return CoverUploadResponse(url=url, path=path, bucket=settings.covers_bucket)


@router.get("/videos", response_model=list[VideoResponse])
def list_my_videos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return video_service.list_own(db, user)


@router.delete("/video/{video_id}")
def delete_video(
    video_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: ObjectStorage | None = Depends(get_optional_storage),
    settings: Settings = Depends(get_settings),
):
    """Delete own video. Row deletion is what counts; storage cleanup failures are only logged."""
    video_service.delete_video(db, storage, settings, user, video_id)
    return {"ok": True}


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return video_service.dashboard(db, user)


# ---------- Projects ----------


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return db.query(Project).filter(Project.owner_id == user.id).order_by(Project.created_at.desc()).all()


@router.post("/projects", response_model=ProjectResponse)
def create_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    name = body.name.strip()
    if not name:
        raise ValidationFailed("name is required.")
    project = Project(owner_id=user.id, name=name[:255])
    db.add(project)
    commit(db)
    db.refresh(project)
    return project
