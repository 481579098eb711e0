"""Translation of database failures into domain errors."""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import SQLAlchemyError

from forum.domain.error import StorageError

P = ParamSpec("P")
R = TypeVar("R")


def storage_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Re-raise SQLAlchemy failures of a repository method as StorageError.

    Args:
        operation: Name reported in logs and in the error message

    Returns:
        Decorator for async repository methods
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logfire.error(
                    "Database operation failed", operation=operation, error=str(e)
                )
                raise StorageError(f"{operation} failed") from e

        return wrapper

    return decorator
