"""
User, member and owner models
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ApiModel


class User(ApiModel):
    id: Optional[str] = None
    oauth_id: Optional[str] = Field(None, alias='oauthID')
    name: Optional[str] = None
    status: Optional[str] = Field(None, description="active or inactive")
    links: Optional[Dict[str, Any]] = None


class ResourceMember(User):
    role: Optional[str] = 'member'


class ResourceOwner(User):
    role: Optional[str] = 'owner'


class ResourceMembers(ApiModel):
    users: List[ResourceMember] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None


class ResourceOwners(ApiModel):
    users: List[ResourceOwner] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None


class AddResourceMemberRequestBody(ApiModel):
    id: str
    name: Optional[str] = None
