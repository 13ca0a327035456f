"""Repository layer: data access abstractions and implementations."""

from userapi.repositories.protocols import UserRepository
from userapi.repositories.user_repository import MySQLUserRepository

__all__ = [
    "UserRepository",
    "MySQLUserRepository",
]
