class InvariantViolation(Exception):
    """A domain rule was broken. Surfaced to API clients as HTTP 400."""


class IllegalTransition(InvariantViolation):
    pass


class SchemaViolation(InvariantViolation):
    """Payload failed shape validation; ``details`` lists the failing fields."""

    def __init__(self, message: str, details: list | None = None):
        super().__init__(message)
        self.details = details or []
