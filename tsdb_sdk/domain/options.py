"""
Paging and sorting options for list endpoints
"""

from typing import Optional

from pydantic import BaseModel, Field


class FindOptions(BaseModel):
    """Paging and sorting options for list endpoints"""
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of items per page")
    offset: Optional[int] = Field(None, ge=0, description="Number of items to skip")
    sort_by: Optional[str] = Field(None, description="Field to sort by")
    descending: Optional[bool] = Field(None, description="Sort in descending order")
