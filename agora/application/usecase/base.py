"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ResponseModel(BaseModel):
    """Base for use case responses.

    Fields serialize to camelCase for API clients and can still be set by
    their Python names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
