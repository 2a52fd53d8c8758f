"""
Server health and readiness models
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import ApiModel


class HealthCheck(ApiModel):
    name: Optional[str] = None
    message: Optional[str] = None
    checks: List['HealthCheck'] = Field(default_factory=list)
    status: Optional[str] = Field(None, description="pass or fail")
    version: Optional[str] = None
    commit: Optional[str] = None


class Ready(ApiModel):
    status: Optional[str] = None
    started: Optional[datetime] = None
    up: Optional[str] = None


HealthCheck.model_rebuild()
