# korelium/db/session.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from korelium.core.config import settings
from korelium.core.logging import get_logger

logger = get_logger(__name__)


def _connect_args(database_url: str) -> dict:
    # sqlite connections are shared across the threadpool FastAPI runs sync routes in
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

logger.info("database engine created", backend=engine.url.get_backend_name())

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
