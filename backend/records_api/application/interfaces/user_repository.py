"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod

from records_api.domain.entities import NewUser, User, UserChanges, UserFilters


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer.

    Absence is never an error here: lookups return ``None`` and deletes
    return ``False`` when nothing matches.
    """

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a single user by id."""
        ...

    @abstractmethod
    async def get_all(self, filters: UserFilters) -> list[User]:
        """Retrieve the users matching ``filters``, newest first, paginated."""
        ...

    @abstractmethod
    async def count(self, filters: UserFilters) -> int:
        """Count the users matching ``filters``, ignoring limit and offset."""
        ...

    @abstractmethod
    async def create(self, new_user: NewUser) -> User:
        """Persist a new user and return it as stored.

        Raises ConstraintError if the email is already taken.
        """
        ...

    @abstractmethod
    async def update(self, user_id: int, changes: UserChanges) -> User | None:
        """Apply a partial update. Returns None if the user does not exist."""
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...
