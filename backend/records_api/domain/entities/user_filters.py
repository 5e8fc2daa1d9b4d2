"""Domain entities for filtered user listings — criteria, predicates and pagination."""

from dataclasses import dataclass

from .user import User, UserStatus


@dataclass(frozen=True)
class UserFilters:
    """Ephemeral description of a read query.

    Every field left as ``None`` imposes no constraint, so an all-``None``
    instance matches every record.
    """

    name: str | None = None
    email: str | None = None
    status: UserStatus | None = None
    age_min: int | None = None
    age_max: int | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass(frozen=True)
class FilterPredicate:
    """A single typed filter clause, independent of any storage engine."""

    field_name: str
    value: object
    operator: str = "equals"  # "contains" | "equals" | "gte" | "lte"


def build_predicates(filters: UserFilters) -> list[FilterPredicate]:
    """Turn the set fields of ``filters`` into predicates.

    The order is fixed: name, email, status, age_min, age_max.
    Pagination fields never produce predicates.
    """
    predicates: list[FilterPredicate] = []

    if filters.name:
        predicates.append(FilterPredicate("name", filters.name, "contains"))
    if filters.email:
        predicates.append(FilterPredicate("email", filters.email, "contains"))
    if filters.status is not None:
        predicates.append(FilterPredicate("status", filters.status.value, "equals"))
    if filters.age_min is not None:
        predicates.append(FilterPredicate("age", filters.age_min, "gte"))
    if filters.age_max is not None:
        predicates.append(FilterPredicate("age", filters.age_max, "lte"))

    return predicates


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata computed independently of the fetched page."""

    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


@dataclass
class UserPage:
    """One page of users plus the metadata describing the full result."""

    users: list[User]
    pagination: Pagination
