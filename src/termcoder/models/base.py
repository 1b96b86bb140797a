"""Shared pydantic base for tool-facing models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys.

    Python code uses the snake_case attribute names; tool payloads produced by
    ``model_dump(by_alias=True)`` use camelCase. Both spellings are accepted
    on input.
    """

    model_config = ConfigDict(
        frozen=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Dump to the tool-facing dict, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
