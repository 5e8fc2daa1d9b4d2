from .user import (
    AGE_MAX,
    AGE_MIN,
    EMAIL_PATTERN,
    MessageEnvelope,
    PaginationResponse,
    UserCreate,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AGE_MAX",
    "AGE_MIN",
    "EMAIL_PATTERN",
    "MessageEnvelope",
    "PaginationResponse",
    "UserCreate",
    "UserEnvelope",
    "UserListEnvelope",
    "UserResponse",
    "UserUpdate",
]
