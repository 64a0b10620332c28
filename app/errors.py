# app/errors.py

class DuplicateReceiptId(KeyError):
    """Raised when a store is asked to publish an id it already holds."""

    def __init__(self, receipt_id: str):
        super().__init__(receipt_id)
        self.receipt_id = receipt_id

    def __str__(self) -> str:
        return f"Receipt id already stored: {self.receipt_id}"


class PointsOutOfRange(ValueError):
    """Raised when a store cannot hold a points value."""

    def __init__(self, points: int):
        super().__init__(points)
        self.points = points

    def __str__(self) -> str:
        return f"Points value has {len(str(self.points))} digits, too large to store"
