import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from cinexnema.config import get_settings
from cinexnema.errors import UpstreamFailure

logger = logging.getLogger(__name__)
settings = get_settings()

# SQLite needs check_same_thread=False for FastAPI
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=False,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit(db):
    """Commit or roll back and raise UpstreamFailure(DATABASE_ERROR) with the driver message."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database commit failed: %s", e)
        raise UpstreamFailure(str(getattr(e, "orig", None) or e), reason="DATABASE_ERROR") from e
