"""
Operation log models (audit trail of a resource)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ApiModel


class OperationLog(ApiModel):
    description: Optional[str] = None
    time: Optional[datetime] = None
    user_id: Optional[str] = Field(None, alias='userID')
    links: Optional[Dict[str, Any]] = None


class OperationLogs(ApiModel):
    logs: List[OperationLog] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None
