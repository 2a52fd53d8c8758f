"""
Label models
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ApiModel


class Label(ApiModel):
    id: Optional[str] = None
    org_id: Optional[str] = Field(None, alias='orgID')
    name: Optional[str] = None
    properties: Dict[str, str] = Field(default_factory=dict, description="Key/value pairs such as color or description")


class LabelMapping(ApiModel):
    """Body used to attach an existing label to a resource"""
    label_id: str = Field(..., alias='labelID')


class LabelResponse(ApiModel):
    label: Optional[Label] = None
    links: Optional[Dict[str, Any]] = None


class LabelsResponse(ApiModel):
    labels: List[Label] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None


class LabelCreateRequest(ApiModel):
    org_id: str = Field(..., alias='orgID')
    name: str
    properties: Optional[Dict[str, str]] = None


class LabelUpdate(ApiModel):
    name: Optional[str] = None
    properties: Optional[Dict[str, str]] = None
