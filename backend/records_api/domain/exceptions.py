"""Domain-specific exceptions — framework-independent."""

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Why an external input was rejected."""

    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    OUT_OF_RANGE = "out_of_range"


class ConstraintViolation(str, Enum):
    """Storage-enforced rules that can fail on write."""

    DUPLICATE_EMAIL = "duplicate_email"


class ValidationError(Exception):
    """Raised when an input payload fails shape or range checks.

    Always raised before any storage access is attempted.
    """

    def __init__(self, kind: ValidationErrorKind, field: str, message: str):
        self.kind = kind
        self.field = field
        self.message = message
        super().__init__(message)


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ConstraintError(Exception):
    """Raised when a write would break a uniqueness rule enforced by storage."""

    def __init__(self, kind: ConstraintViolation, field: str, value: str):
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(f"User with {field}='{value}' already exists")


class StorageError(Exception):
    """Raised for any other storage failure (I/O, connectivity, corruption).

    The underlying driver error is chained as ``__cause__``.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")
