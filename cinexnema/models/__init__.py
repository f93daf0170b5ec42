from cinexnema.models.user import User, UserRole
from cinexnema.models.project import Project
from cinexnema.models.video import AccessType, Video, VideoFormat, VideoStatus
from cinexnema.models.earning import Earning

__all__ = [
    "User", "UserRole", "Project", "Video", "VideoFormat", "VideoStatus", "AccessType", "Earning",
]
