# app/validation.py
"""
Receipt payload validation.

The constraints live on the `Receipt` and `Item` models; this module runs
them and flattens pydantic's errors into `FieldError`s, one per field path,
in field order. Nothing here raises on malformed input.
"""
from __future__ import annotations

from typing import Any, List, Sequence, Union

from pydantic import ValidationError

from .schemas import FieldError, Receipt, ValidationResult


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """('items', 1, 'price') -> 'items[1].price'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _value_at(payload: Any, loc: Sequence[Union[str, int]]) -> Any:
    # the raw submitted value, not pydantic's coerced one
    value = payload
    for part in loc:
        if isinstance(part, int) and isinstance(value, list) and 0 <= part < len(value):
            value = value[part]
        elif isinstance(part, str) and isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


def field_errors(exc: ValidationError, payload: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    seen = set()
    for err in exc.errors(include_url=False):
        path = format_path(err["loc"])
        if path in seen:
            continue
        seen.add(path)
        errors.append(FieldError(path=path, msg=err["msg"], value=_value_at(payload, err["loc"])))
    return errors


def validate_receipt(payload: Any) -> ValidationResult:
    """Validate `payload` against `Receipt`; return the receipt or every field error."""
    try:
        receipt = Receipt.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(errors=field_errors(e, payload))
    return ValidationResult(receipt=receipt)
