"""Per-month creator earnings. Written by billing jobs outside this service; read by the creator dashboard."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Numeric, ForeignKey
from cinexnema.database import Base


class Earning(Base):
    __tablename__ = "earnings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    creator_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(String(36), nullable=True)
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    creator_commission = Column(Numeric(12, 2), nullable=False, default=0)
    platform_commission = Column(Numeric(12, 2), nullable=False, default=0)
    reference_month = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
