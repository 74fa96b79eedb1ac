"""Shared schema base.

Wire payloads use camelCase (``originalText``, ``roomId``); Python code uses
snake_case. Either spelling is accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """JSON-safe dict with camelCase keys, for WebSocket frames."""
        return self.model_dump(mode="json", by_alias=True)
