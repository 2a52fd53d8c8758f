"""REST definition of the ``/api/v2/dashboards`` resource."""

from typing import List, Optional

from tsdb_sdk.domain import (
    AddResourceMemberRequestBody,
    Cell,
    CellUpdate,
    CreateCell,
    CreateDashboardRequest,
    Dashboard,
    Dashboards,
    LabelMapping,
    LabelResponse,
    LabelsResponse,
    OperationLogs,
    ResourceMember,
    ResourceMembers,
    ResourceOwner,
    ResourceOwners,
    View,
)
from tsdb_sdk.internal.rest import RestClient

_BASE = 'api/v2/dashboards'


class DashboardsService:
    """One method per endpoint, arguments forwarded as-is."""

    def __init__(self, rest: RestClient):
        self.rest = rest

    # Dashboards

    def get_dashboards(self, offset: Optional[int] = None, limit: Optional[int] = None,
                       descending: Optional[bool] = None, owner: Optional[str] = None,
                       sort_by: Optional[str] = None, id: Optional[List[str]] = None,
                       org_id: Optional[str] = None, org: Optional[str] = None) -> Dashboards:
        params = {
            'offset': offset,
            'limit': limit,
            'descending': descending,
            'owner': owner,
            'sortBy': sort_by,
            'id': id,
            'orgID': org_id,
            'org': org,
        }
        return self.rest.execute('GET', _BASE, Dashboards, params=params)

    def post_dashboards(self, body: CreateDashboardRequest) -> Dashboard:
        return self.rest.execute('POST', _BASE, Dashboard, json=body.to_body())

    def get_dashboards_id(self, dashboard_id: str) -> Dashboard:
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}', Dashboard)

    def patch_dashboards_id(self, dashboard_id: str, body: Dashboard) -> Dashboard:
        return self.rest.execute('PATCH', f'{_BASE}/{dashboard_id}', Dashboard, json=body.to_body())

    def delete_dashboards_id(self, dashboard_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{dashboard_id}')

    def get_dashboards_id_logs(self, dashboard_id: str, offset: Optional[int] = None,
                               limit: Optional[int] = None) -> OperationLogs:
        params = {'offset': offset, 'limit': limit}
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}/logs', OperationLogs, params=params)

    # Members and owners

    def get_dashboards_id_members(self, dashboard_id: str) -> ResourceMembers:
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}/members', ResourceMembers)

    def post_dashboards_id_members(self, dashboard_id: str, body: AddResourceMemberRequestBody) -> ResourceMember:
        return self.rest.execute('POST', f'{_BASE}/{dashboard_id}/members', ResourceMember, json=body.to_body())

    def delete_dashboards_id_members_id(self, user_id: str, dashboard_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{dashboard_id}/members/{user_id}')

    def get_dashboards_id_owners(self, dashboard_id: str) -> ResourceOwners:
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}/owners', ResourceOwners)

    def post_dashboards_id_owners(self, dashboard_id: str, body: AddResourceMemberRequestBody) -> ResourceOwner:
        return self.rest.execute('POST', f'{_BASE}/{dashboard_id}/owners', ResourceOwner, json=body.to_body())

    def delete_dashboards_id_owners_id(self, user_id: str, dashboard_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{dashboard_id}/owners/{user_id}')

    # Labels

    def get_dashboards_id_labels(self, dashboard_id: str) -> LabelsResponse:
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}/labels', LabelsResponse)

    def post_dashboards_id_labels(self, dashboard_id: str, body: LabelMapping) -> LabelResponse:
        return self.rest.execute('POST', f'{_BASE}/{dashboard_id}/labels', LabelResponse, json=body.to_body())

    def delete_dashboards_id_labels_id(self, dashboard_id: str, label_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{dashboard_id}/labels/{label_id}')

    # Cells and views

    def post_dashboards_id_cells(self, dashboard_id: str, body: CreateCell) -> Cell:
        return self.rest.execute('POST', f'{_BASE}/{dashboard_id}/cells', Cell, json=body.to_body())

    def put_dashboards_id_cells(self, dashboard_id: str, body: List[Cell]) -> Dashboard:
        cells = [cell.to_body() for cell in body]
        return self.rest.execute('PUT', f'{_BASE}/{dashboard_id}/cells', Dashboard, json=cells)

    def patch_dashboards_id_cells_id(self, dashboard_id: str, cell_id: str, body: CellUpdate) -> Cell:
        return self.rest.execute('PATCH', f'{_BASE}/{dashboard_id}/cells/{cell_id}', Cell, json=body.to_body())

    def delete_dashboards_id_cells_id(self, dashboard_id: str, cell_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{dashboard_id}/cells/{cell_id}')

    def get_dashboards_id_cells_id_view(self, dashboard_id: str, cell_id: str) -> View:
        return self.rest.execute('GET', f'{_BASE}/{dashboard_id}/cells/{cell_id}/view', View)

    def patch_dashboards_id_cells_id_view(self, dashboard_id: str, cell_id: str, body: View) -> View:
        return self.rest.execute('PATCH', f'{_BASE}/{dashboard_id}/cells/{cell_id}/view', View,
                                 json=body.to_body())
