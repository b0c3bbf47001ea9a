"""Exceptions raised by resource operations before any engine call is made."""


class InvalidInputError(ValueError):
    """Raised when a caller-supplied identifier conflicts with the operation.

    Args:
        message: Human-readable reason.
        operation: Name of the rejected operation (``create`` or ``update``).
    """

    kind = "invalid_input"

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation
