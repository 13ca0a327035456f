"""FastAPI dependency injection: database handle, repositories."""
from typing import Annotated

from fastapi import Depends, Request

from userapi.db import Database
from userapi.repositories import MySQLUserRepository
from userapi.repositories.protocols import UserRepository


def get_database(request: Request) -> Database:
    """Database handle built in the app lifespan."""
    return request.app.state.database


def get_user_repository(
    database: Annotated[Database, Depends(get_database)],
) -> UserRepository:
    return MySQLUserRepository(database)
