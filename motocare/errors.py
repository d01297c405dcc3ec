"""Error types raised by the maintenance core."""


class MotoCareError(Exception):
    """Base class for maintenance tracker errors."""


class NotFoundError(MotoCareError, LookupError):
    """No maintenance item matches the requested id."""

    def __init__(self, item_id: str):
        super().__init__(f"Unknown maintenance item '{item_id}'")
        self.item_id = item_id


class InvalidInputError(MotoCareError, ValueError):
    """Input rejected at the update boundary (odometer, ids, documents)."""
