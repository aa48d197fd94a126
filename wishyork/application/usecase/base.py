"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case: parses a request, calls domain services, shapes a response."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
