"""Typed exceptions for key validation and identifier derivation."""


class PseudonymError(ValueError):
    """Base class for derivation related errors."""


class InvalidKeyError(PseudonymError):
    """Raised when the secret key is missing, not a string or too short."""


class FieldError(PseudonymError):
    """Base class for errors tied to a single identifier argument."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class MissingFieldError(FieldError, TypeError):
    """Raised when an identifier is ``None`` or not a string."""


class EmptyFieldError(FieldError):
    """Raised when an identifier is empty or whitespace only."""


class InvalidBulkInputError(PseudonymError, TypeError):
    """Raised when bulk derivation receives something other than a list or tuple."""
