"""Named grouping a creator can attach a series (or any upload) to."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from cinexnema.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
