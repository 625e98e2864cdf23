from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from leavedash.core.config import settings

# SQLite needs the same connection usable from FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the dashboard's own tables (UI preferences only)."""
    import leavedash.models  # noqa: F401  register models on Base.metadata
    Base.metadata.create_all(bind=engine)
