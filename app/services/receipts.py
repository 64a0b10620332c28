# app/services/receipts.py
from __future__ import annotations
import uuid
from typing import Any, Optional

from app.errors import DuplicateReceiptId
from app.services.scoring import score
from app.storage import ScoreStore
from app.schemas import ValidationResult
from app.utils.logging import logger
from app.validation import validate_receipt

MAX_ID_ATTEMPTS = 3


def submit(payload: Any) -> ValidationResult:
    return validate_receipt(payload)


def process_receipt(payload: Any, store: ScoreStore) -> tuple[Optional[str], ValidationResult]:
    """
    Validate, score and store a receipt payload.
    Returns (receipt_id, result); receipt_id is None when validation failed
    and nothing was stored.
    """
    result = submit(payload)
    if not result.ok:
        logger.info("Rejected receipt with %d validation error(s)", len(result.errors))
        return None, result

    # points are final before the id is published
    points = score(result.receipt)
    for attempt in range(MAX_ID_ATTEMPTS):
        receipt_id = str(uuid.uuid4())
        try:
            store.put(receipt_id, points)
        except DuplicateReceiptId:
            if attempt == MAX_ID_ATTEMPTS - 1:
                raise
            logger.warning("Receipt id collision on %s, regenerating", receipt_id)
            continue
        break

    logger.info("Processed receipt %s for %r: %s points", receipt_id, result.receipt.retailer, points)
    return receipt_id, result


def lookup(receipt_id: str, store: ScoreStore) -> Optional[int]:
    points = store.get(receipt_id)
    if points is None:
        logger.info("No receipt found for id %s", receipt_id)
    return points
