from .user import UserModel

__all__ = [
    "UserModel",
]
