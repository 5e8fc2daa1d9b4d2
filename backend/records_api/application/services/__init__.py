from .user_normalizer import (
    normalize_create,
    normalize_filters,
    normalize_update,
    normalize_user_id,
)
from .user_service import UserService

__all__ = [
    "UserService",
    "normalize_create",
    "normalize_filters",
    "normalize_update",
    "normalize_user_id",
]
