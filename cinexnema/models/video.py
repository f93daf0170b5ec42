"""
Uploaded content. Bytes live in the object store; the row keeps bucket/path/url references only.
status: uploading -> uploaded -> processing/ready. approved is independent of status and only
changes through admin approve/revoke.
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, Boolean, Date, DateTime, ForeignKey, JSON
from cinexnema.database import Base


class VideoFormat(str, enum.Enum):
    MOVIE = "Movie"
    SERIES = "Series"
    SERIAL = "Season/Serial"


class VideoStatus(str, enum.Enum):
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    READY = "ready"


class AccessType(str, enum.Enum):
    FREE = "Free"
    SUBSCRIBER = "Subscriber"
    PAID = "Paid"
    RENTAL = "Rental"


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    creator_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    format = Column(String(20), nullable=True)
    genres = Column(JSON, nullable=False, default=list)
    duration_minutes = Column(Integer, nullable=False, default=0)
    monthly_cost = Column(Integer, nullable=False, default=0)  # fixed at creation

    # Catalogue metadata from the full upload form
    alternative_title = Column(String(255), nullable=True)
    long_description = Column(Text, nullable=True)
    release_year = Column(Integer, nullable=True)
    original_language = Column(String(50), nullable=True)
    age_rating = Column(String(20), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    banner_url = Column(String(1024), nullable=True)
    thumbnail_url = Column(String(1024), nullable=True)
    trailer_url = Column(String(1024), nullable=True)
    screenshot_urls = Column(JSON, nullable=False, default=list)

    # Credits, free text as typed in the form
    directors = Column(Text, nullable=True)
    producers = Column(Text, nullable=True)
    cast = Column(Text, nullable=True)
    subtitle_languages = Column(String(255), nullable=True)

    # Technical
    video_codec = Column(String(50), nullable=True)
    framerate = Column(String(20), nullable=True)
    bitrate = Column(String(50), nullable=True)
    resolution = Column(String(50), nullable=True)

    # Rights and distribution
    copyright_holder = Column(String(255), nullable=True)
    access_type = Column(String(20), nullable=True)
    release_date = Column(Date, nullable=True)
    geo_restriction = Column(String(255), nullable=True)
    bonus_content = Column(Text, nullable=True)

    cover_url = Column(String(1024), nullable=True)
    cover_path = Column(String(512), nullable=True)  # key in covers bucket

    bucket = Column(String(100), nullable=True)
    video_path = Column(String(512), nullable=True)
    video_url = Column(String(1024), nullable=True)

    status = Column(String(20), nullable=False, default=VideoStatus.UPLOADING.value)
    approved = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
