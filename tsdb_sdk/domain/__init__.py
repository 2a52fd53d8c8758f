"""
Domain Module

Contains the Pydantic models of the REST resources.
"""

from .base import ApiModel
from .dashboard import CreateDashboardRequest, Dashboard, DashboardMeta, Dashboards
from .health import HealthCheck, Ready
from .label import Label, LabelCreateRequest, LabelMapping, LabelResponse, LabelsResponse, LabelUpdate
from .logs import OperationLog, OperationLogs
from .member import (
    AddResourceMemberRequestBody,
    ResourceMember,
    ResourceMembers,
    ResourceOwner,
    ResourceOwners,
    User,
)
from .options import FindOptions
from .organization import Organization
from .view import Cell, CellUpdate, CreateCell, View

__all__ = [
    'AddResourceMemberRequestBody',
    'ApiModel',
    'Cell',
    'CellUpdate',
    'CreateCell',
    'CreateDashboardRequest',
    'Dashboard',
    'DashboardMeta',
    'Dashboards',
    'FindOptions',
    'HealthCheck',
    'Label',
    'LabelCreateRequest',
    'LabelMapping',
    'LabelResponse',
    'LabelsResponse',
    'LabelUpdate',
    'OperationLog',
    'OperationLogs',
    'Organization',
    'Ready',
    'ResourceMember',
    'ResourceMembers',
    'ResourceOwner',
    'ResourceOwners',
    'User',
    'View',
]
