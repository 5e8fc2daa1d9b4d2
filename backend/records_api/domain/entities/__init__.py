from .user import UNSET, NewUser, User, UserChanges, UserStatus
from .user_filters import (
    FilterPredicate,
    Pagination,
    UserFilters,
    UserPage,
    build_predicates,
)

__all__ = [
    "UNSET",
    "NewUser",
    "User",
    "UserChanges",
    "UserStatus",
    "FilterPredicate",
    "Pagination",
    "UserFilters",
    "UserPage",
    "build_predicates",
]
