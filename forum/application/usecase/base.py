"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar
from uuid import UUID

from forum.domain.error import ValidationError

IdT = TypeVar("IdT")


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(value: str, id_type: Callable[[UUID], IdT], field: str) -> IdT:
    """Parse a UUID string into a typed identifier.

    Args:
        value: Raw identifier from the request
        id_type: Identifier NewType to wrap the UUID in
        field: Field name used in the error message

    Returns:
        Typed identifier

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return id_type(UUID(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value}")
