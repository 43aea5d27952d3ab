from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from intouch.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet"""
    # Import models so they register on Base.metadata
    from intouch.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
