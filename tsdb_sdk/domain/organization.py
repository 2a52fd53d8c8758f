from typing import Any, Dict, Optional

from .base import ApiModel


class Organization(ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    links: Optional[Dict[str, Any]] = None
