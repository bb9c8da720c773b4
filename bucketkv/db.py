import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

logger = logging.getLogger(__name__)

def create_db_engine(db_path: str) -> Engine:
    # requests are served from a thread pool, so connections cross threads
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

def init_db(engine: Engine) -> None:
    """Create both tables if they are missing. Safe to run on every start."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized and tables created at %s", engine.url.database)

def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.sessionmaker()
    try:
        yield db
    finally:
        db.close()
