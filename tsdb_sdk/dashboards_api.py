"""
Dashboards API

Create, find, update and delete dashboards together with their cells, cell
views, members, owners and labels.

Methods that operate on an existing resource accept either the domain
object or its ID:

    >>> api = client.get_dashboards_api()
    >>> dashboard = api.create_dashboard("Servers", "CPU and memory", org_id)
    >>> api.add_label(label, dashboard)
    >>> api.add_label(label.id, dashboard.id)
"""

import logging
from typing import List, Optional, Union

from tsdb_sdk.arguments import check_non_empty, check_not_none
from tsdb_sdk.domain import (
    AddResourceMemberRequestBody,
    Cell,
    CellUpdate,
    CreateCell,
    CreateDashboardRequest,
    Dashboard,
    Dashboards,
    FindOptions,
    Label,
    LabelMapping,
    LabelResponse,
    OperationLog,
    OperationLogs,
    Organization,
    ResourceMember,
    ResourceOwner,
    User,
    View,
)
from tsdb_sdk.exceptions import ValidationError
from tsdb_sdk.service import DashboardsService

logger = logging.getLogger(__name__)

DashboardRef = Union[Dashboard, str]
CellRef = Union[Cell, str]
UserRef = Union[User, str]
LabelRef = Union[Label, str]


def _id_of(value, name: str) -> str:
    """Resolve a domain object or an ID string to a non-empty ID."""
    check_not_none(value, name)
    resource_id = value if isinstance(value, str) else getattr(value, 'id', None)
    return check_non_empty(resource_id, f"{name}.id" if not isinstance(value, str) else name)


class DashboardsApi:
    """Typed wrapper over :class:`DashboardsService`."""

    def __init__(self, service: DashboardsService):
        check_not_none(service, "service")
        self.service = service

    # Dashboards

    def create_dashboard(self, name: str, description: Optional[str], org_id: str) -> Dashboard:
        """
        Create a dashboard.

        Args:
            name: Dashboard name
            description: Optional description
            org_id: ID of the owning organization

        Returns:
            The created dashboard
        """
        check_non_empty(name, "name")
        check_non_empty(org_id, "org_id")

        return self.create_dashboard_request(
            CreateDashboardRequest(name=name, description=description, org_id=org_id)
        )

    def create_dashboard_request(self, request: CreateDashboardRequest) -> Dashboard:
        check_not_none(request, "request")

        dashboard = self.service.post_dashboards(request)
        logger.debug(f"Created dashboard {dashboard.id} '{dashboard.name}'")
        return dashboard

    def update_dashboard(self, dashboard: Dashboard) -> Dashboard:
        check_not_none(dashboard, "dashboard")
        if not isinstance(dashboard, Dashboard):
            raise ValidationError("dashboard", dashboard, "a Dashboard instance")
        return self.service.patch_dashboards_id(_id_of(dashboard, "dashboard"), dashboard)

    def delete_dashboard(self, dashboard: DashboardRef) -> None:
        dashboard_id = _id_of(dashboard, "dashboard")

        self.service.delete_dashboards_id(dashboard_id)
        logger.debug(f"Deleted dashboard {dashboard_id}")

    def find_dashboard_by_id(self, dashboard_id: str) -> Dashboard:
        check_non_empty(dashboard_id, "dashboard_id")

        return self.service.get_dashboards_id(dashboard_id)

    def find_dashboards(self) -> List[Dashboard]:
        """List all dashboards visible to the current user."""
        return self.find_dashboards_by_org_name(None)

    def find_dashboards_by_organization(self, organization: Organization) -> List[Dashboard]:
        check_not_none(organization, "organization")

        return self.find_dashboards_by_org_name(organization.name)

    def find_dashboards_by_org_name(self, org_name: Optional[str]) -> List[Dashboard]:
        return self.service.get_dashboards(org=org_name).dashboards

    def find_dashboards_page(self, find_options: FindOptions, org_name: Optional[str] = None) -> Dashboards:
        """One page of dashboards, sorted and paged by ``find_options``."""
        check_not_none(find_options, "find_options")

        return self.service.get_dashboards(
            offset=find_options.offset,
            limit=find_options.limit,
            descending=find_options.descending,
            sort_by=find_options.sort_by,
            org=org_name,
        )

    # Operation logs

    def find_dashboard_logs(self, dashboard: DashboardRef) -> List[OperationLog]:
        """Retrieve the first page of the dashboard's operation log."""
        return self.find_dashboard_logs_page(dashboard, FindOptions()).logs

    def find_dashboard_logs_page(self, dashboard: DashboardRef, find_options: FindOptions) -> OperationLogs:
        """
        Retrieve one page of the dashboard's operation log.

        Args:
            dashboard: Dashboard or its ID
            find_options: Paging options (``offset`` and ``limit`` are used)

        Returns:
            The page of logs with links to the neighbouring pages
        """
        dashboard_id = _id_of(dashboard, "dashboard")
        check_not_none(find_options, "find_options")

        return self.service.get_dashboards_id_logs(dashboard_id, offset=find_options.offset,
                                                   limit=find_options.limit)

    # Members

    def get_members(self, dashboard: DashboardRef) -> List[ResourceMember]:
        return self.service.get_dashboards_id_members(_id_of(dashboard, "dashboard")).users

    def add_member(self, member: UserRef, dashboard: DashboardRef) -> ResourceMember:
        member_id = _id_of(member, "member")
        dashboard_id = _id_of(dashboard, "dashboard")

        body = AddResourceMemberRequestBody(id=member_id)
        return self.service.post_dashboards_id_members(dashboard_id, body)

    def delete_member(self, member: UserRef, dashboard: DashboardRef) -> None:
        member_id = _id_of(member, "member")
        dashboard_id = _id_of(dashboard, "dashboard")

        self.service.delete_dashboards_id_members_id(member_id, dashboard_id)

    # Owners

    def get_owners(self, dashboard: DashboardRef) -> List[ResourceOwner]:
        return self.service.get_dashboards_id_owners(_id_of(dashboard, "dashboard")).users

    def add_owner(self, owner: UserRef, dashboard: DashboardRef) -> ResourceOwner:
        owner_id = _id_of(owner, "owner")
        dashboard_id = _id_of(dashboard, "dashboard")

        body = AddResourceMemberRequestBody(id=owner_id)
        return self.service.post_dashboards_id_owners(dashboard_id, body)

    def delete_owner(self, owner: UserRef, dashboard: DashboardRef) -> None:
        owner_id = _id_of(owner, "owner")
        dashboard_id = _id_of(dashboard, "dashboard")

        self.service.delete_dashboards_id_owners_id(owner_id, dashboard_id)

    # Labels

    def get_labels(self, dashboard: DashboardRef) -> List[Label]:
        return self.service.get_dashboards_id_labels(_id_of(dashboard, "dashboard")).labels

    def add_label(self, label: LabelRef, dashboard: DashboardRef) -> LabelResponse:
        label_id = _id_of(label, "label")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.post_dashboards_id_labels(dashboard_id, LabelMapping(label_id=label_id))

    def delete_label(self, label: LabelRef, dashboard: DashboardRef) -> None:
        label_id = _id_of(label, "label")
        dashboard_id = _id_of(dashboard, "dashboard")

        self.service.delete_dashboards_id_labels_id(dashboard_id, label_id)

    # Cells

    def add_cell(self, create_cell: CreateCell, dashboard: DashboardRef) -> Cell:
        check_not_none(create_cell, "create_cell")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.post_dashboards_id_cells(dashboard_id, create_cell)

    def replace_cells(self, cells: List[Cell], dashboard: DashboardRef) -> Dashboard:
        """Replace every cell of the dashboard, returns the updated dashboard."""
        check_not_none(cells, "cells")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.put_dashboards_id_cells(dashboard_id, list(cells))

    def update_cell(self, cell_update: CellUpdate, cell: CellRef, dashboard: DashboardRef) -> Cell:
        check_not_none(cell_update, "cell_update")
        cell_id = _id_of(cell, "cell")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.patch_dashboards_id_cells_id(dashboard_id, cell_id, cell_update)

    def delete_cell(self, cell: CellRef, dashboard: DashboardRef) -> None:
        cell_id = _id_of(cell, "cell")
        dashboard_id = _id_of(dashboard, "dashboard")

        self.service.delete_dashboards_id_cells_id(dashboard_id, cell_id)

    # Cell views

    def add_cell_view(self, view: View, cell: CellRef, dashboard: DashboardRef) -> View:
        """Attach a view to a cell. The server models this as an update of the cell's view."""
        return self.update_cell_view(view, cell, dashboard)

    def update_cell_view(self, view: View, cell: CellRef, dashboard: DashboardRef) -> View:
        check_not_none(view, "view")
        cell_id = _id_of(cell, "cell")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.patch_dashboards_id_cells_id_view(dashboard_id, cell_id, view)

    def get_cell_view(self, cell: CellRef, dashboard: DashboardRef) -> View:
        cell_id = _id_of(cell, "cell")
        dashboard_id = _id_of(dashboard, "dashboard")

        return self.service.get_dashboards_id_cells_id_view(dashboard_id, cell_id)
