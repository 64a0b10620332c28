
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, List, Optional, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# optional sign, digits with optional fraction (or a bare fraction), optional exponent
NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?", re.ASCII)
DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
TIME_PATTERN = r"^([01][0-9]|2[0-3]):([0-5][0-9])$"


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a JSON string or number as a finite Decimal; None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # str() gives the shortest repr, i.e. the literal that was in the JSON
        return Decimal(str(value)) if math.isfinite(value) else None
    if not isinstance(value, str) or not NUMBER_RE.fullmatch(value):
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        return None
    if not math.isfinite(float(amount)):
        return None
    return amount


def _coerce_amount(value: Any) -> Decimal:
    amount = parse_amount(value)
    if amount is None:
        raise ValueError("must be a decimal number, as a string or a JSON number")
    return amount


Amount = Annotated[Decimal, BeforeValidator(_coerce_amount), Field(ge=0)]


class _ReportFieldByField(BaseModel):
    """A non-object payload is checked as an empty one, so each field reports."""

    @model_validator(mode="before")
    @classmethod
    def _as_mapping(cls, data: Any) -> Any:
        return data if isinstance(data, (dict, BaseModel)) else {}


# Normalized receipt handed to the scoring engine.
# Field order is the order errors are reported in.
class Item(_ReportFieldByField):
    model_config = ConfigDict(frozen=True)

    shortDescription: str = Field(min_length=1, description="The Short Product Description for the item.")
    price: Amount = Field(description="The total price paid for this item.")

class Receipt(_ReportFieldByField):
    model_config = ConfigDict(frozen=True)

    retailer: str = Field(min_length=1, description="The name of the retailer or store the receipt is from.")
    total: Amount = Field(description="The total amount paid on the receipt.")
    items: Tuple[Item, ...] = Field(min_length=1)
    # shape only, "2021-02-30" is accepted
    purchaseDate: str = Field(pattern=DATE_PATTERN, description="YYYY-MM-DD")
    purchaseTime: str = Field(pattern=TIME_PATTERN, description="24-hour HH:MM")

class FieldError(BaseModel):
    path: str
    msg: str
    value: Optional[Any] = None
    location: str = "body"

class ValidationResult(BaseModel):
    receipt: Optional[Receipt] = None
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.receipt is not None and not self.errors

# Response bodies
class ReceiptIdResponse(BaseModel):
    id: str

class PointsResponse(BaseModel):
    points: int = Field(ge=0)

class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]

class NotFoundResponse(BaseModel):
    error: str
