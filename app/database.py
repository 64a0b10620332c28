from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .config import settings

def _normalize_db_url(url: str) -> str:
    # Use psycopg v3 driver with SQLAlchemy
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://"):]
    return url

_engine: Optional[Engine] = None  # lazy-init, the memory backend never touches it
_SessionLocal: Optional[sessionmaker] = None

def make_engine(url: str) -> Engine:
    url = _normalize_db_url(url)
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
        future=True,  # explicit 2.0-style
    )

def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = make_engine(settings.DATABASE_URL)
    return _engine

def get_sessionmaker() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=False,
            future=True,
        )
    return _SessionLocal

class Base(DeclarativeBase):
    pass
