"""
Base model shared by every REST resource representation.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """
    Field names are snake_case in Python and camelCase on the wire.

    Unknown fields returned by the server are kept so that a fetched
    resource can be sent back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    def to_body(self) -> Dict[str, Any]:
        """JSON-ready request body, ``None`` fields omitted."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
