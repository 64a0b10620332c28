# app/storage.py
from __future__ import annotations
from functools import lru_cache
from threading import Lock
from typing import Dict, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from .config import settings
from .database import Base, get_engine, get_sessionmaker
from .errors import DuplicateReceiptId, PointsOutOfRange
from .models import ReceiptScore
from .utils.logging import logger


class ScoreStore(Protocol):
    def put(self, receipt_id: str, points: int) -> None: ...
    def get(self, receipt_id: str) -> Optional[int]: ...


class InMemoryScoreStore:
    """Process-local id -> points map. Lost on restart."""

    def __init__(self) -> None:
        self._points: Dict[str, int] = {}
        self._lock = Lock()

    def put(self, receipt_id: str, points: int) -> None:
        with self._lock:
            if receipt_id in self._points:
                raise DuplicateReceiptId(receipt_id)
            self._points[receipt_id] = points

    def get(self, receipt_id: str) -> Optional[int]:
        return self._points.get(receipt_id)

    def __len__(self) -> int:
        return len(self._points)


class SqlScoreStore:
    """id -> points rows in the receipt_scores table."""

    # signed 64-bit BIGINT
    MAX_POINTS = 2**63 - 1

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def put(self, receipt_id: str, points: int) -> None:
        if points > self.MAX_POINTS:
            raise PointsOutOfRange(points)
        with self._session_factory() as db:
            db.add(ReceiptScore(receipt_id=receipt_id, points=points))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise DuplicateReceiptId(receipt_id) from e

    def get(self, receipt_id: str) -> Optional[int]:
        with self._session_factory() as db:
            row = db.execute(
                select(ReceiptScore).where(ReceiptScore.receipt_id == receipt_id)
            ).scalar_one_or_none()
            return row.points if row else None


def build_store(backend: str) -> ScoreStore:
    if backend == "memory":
        return InMemoryScoreStore()
    if backend == "sql":
        Base.metadata.create_all(bind=get_engine())
        return SqlScoreStore(get_sessionmaker())
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


@lru_cache(maxsize=None)
def get_store() -> ScoreStore:
    logger.info("Using %s score store", settings.STORE_BACKEND)
    return build_store(settings.STORE_BACKEND)
