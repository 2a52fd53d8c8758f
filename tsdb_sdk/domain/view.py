"""
Cell and View models for the dashboards API
"""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import ApiModel


class View(ApiModel):
    """Visualization attached to a dashboard cell"""
    id: Optional[str] = Field(None, description="View ID")
    name: Optional[str] = Field(None, description="View name")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Visualization properties (type, queries, axes, ...)")
    links: Optional[Dict[str, Any]] = None


class Cell(ApiModel):
    """Position of a view on a dashboard"""
    id: Optional[str] = Field(None, description="Cell ID")
    x: Optional[int] = None
    y: Optional[int] = None
    w: Optional[int] = None
    h: Optional[int] = None
    view_id: Optional[str] = Field(None, alias='viewID', description="ID of the view shown by the cell")
    links: Optional[Dict[str, Any]] = None


class CreateCell(ApiModel):
    """Request to add a cell to a dashboard"""
    name: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    w: Optional[int] = None
    h: Optional[int] = None
    using_view: Optional[str] = Field(None, alias='usingView', description="Copy the view with this ID into the new cell")


class CellUpdate(ApiModel):
    """Request to move or resize a cell"""
    x: Optional[int] = None
    y: Optional[int] = None
    w: Optional[int] = None
    h: Optional[int] = None
