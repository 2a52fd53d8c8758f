"""
Dashboard models
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ApiModel
from .label import Label
from .view import Cell


class DashboardMeta(ApiModel):
    created_at: Optional[datetime] = Field(None, alias='createdAt')
    updated_at: Optional[datetime] = Field(None, alias='updatedAt')


class Dashboard(ApiModel):
    """Dashboard resource"""
    id: Optional[str] = Field(None, description="Dashboard ID")
    org_id: Optional[str] = Field(None, alias='orgID', description="Owning organization ID")
    name: Optional[str] = None
    description: Optional[str] = None
    meta: Optional[DashboardMeta] = None
    cells: List[Cell] = Field(default_factory=list)
    labels: List[Label] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None


class Dashboards(ApiModel):
    dashboards: List[Dashboard] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None


class CreateDashboardRequest(ApiModel):
    """Request to create a dashboard"""
    org_id: str = Field(..., alias='orgID', description="Organization the dashboard belongs to")
    name: str = Field(..., description="Dashboard name")
    description: Optional[str] = Field(None, description="Dashboard description")
