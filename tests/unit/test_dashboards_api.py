"""
Test the dashboards API against a fake server
"""

import pytest

from tsdb_sdk.domain import (
    Cell,
    CellUpdate,
    CreateCell,
    CreateDashboardRequest,
    Dashboard,
    FindOptions,
    Label,
    Organization,
    ResourceMember,
    ResourceOwner,
    User,
    View,
)
from tsdb_sdk.exceptions import NotFoundException, ValidationError

DASHBOARD = {
    'id': '060d8f6ec6db3000',
    'orgID': '02d5e0ffba1d3000',
    'name': 'Servers',
    'description': 'CPU and memory',
    'meta': {'createdAt': '2020-06-01T10:00:00Z', 'updatedAt': '2020-06-01T10:05:00Z'},
    'cells': [{'id': '060d8f6ec6db3001', 'x': 0, 'y': 0, 'w': 4, 'h': 4, 'viewID': '060d8f6ec6db3002'}],
    'labels': [],
    'links': {'self': '/api/v2/dashboards/060d8f6ec6db3000'},
}

DASHBOARD_ID = DASHBOARD['id']


@pytest.fixture
def api(platform_client):
    return platform_client.get_dashboards_api()


@pytest.fixture
def dashboard():
    return Dashboard.model_validate(DASHBOARD)


class TestDashboards:
    """Test create, find, update and delete"""

    def test_create_dashboard(self, api, platform_server):
        platform_server.respond(201, json_body=DASHBOARD)

        created = api.create_dashboard('Servers', 'CPU and memory', '02d5e0ffba1d3000')

        request = platform_server.last
        assert request.method == 'POST'
        assert request.path == '/api/v2/dashboards'
        assert request.json == {'orgID': '02d5e0ffba1d3000', 'name': 'Servers', 'description': 'CPU and memory'}
        assert created.id == DASHBOARD_ID
        assert created.org_id == '02d5e0ffba1d3000'
        assert created.meta.created_at.year == 2020
        assert created.cells[0].view_id == '060d8f6ec6db3002'

    def test_create_dashboard_without_description(self, api, platform_server):
        platform_server.respond(201, json_body=DASHBOARD)

        api.create_dashboard('Servers', None, '02d5e0ffba1d3000')

        assert 'description' not in platform_server.last.json

    @pytest.mark.parametrize("name,org_id", [('', 'org'), (None, 'org'), ('Servers', ''), ('Servers', None)])
    def test_create_dashboard_validation(self, api, platform_server, name, org_id):
        with pytest.raises(ValidationError):
            api.create_dashboard(name, 'description', org_id)

        assert platform_server.requests == []

    def test_create_dashboard_request(self, api, platform_server):
        platform_server.respond(201, json_body=DASHBOARD)

        api.create_dashboard_request(CreateDashboardRequest(org_id='o1', name='Servers'))

        assert platform_server.last.json == {'orgID': 'o1', 'name': 'Servers'}

    def test_update_dashboard(self, api, platform_server, dashboard):
        dashboard.name = 'Servers v2'
        platform_server.respond(200, json_body={**DASHBOARD, 'name': 'Servers v2'})

        updated = api.update_dashboard(dashboard)

        request = platform_server.last
        assert request.method == 'PATCH'
        assert request.path == f'/api/v2/dashboards/{DASHBOARD_ID}'
        assert request.json['name'] == 'Servers v2'
        assert updated.name == 'Servers v2'

    def test_update_dashboard_without_id(self, api):
        with pytest.raises(ValidationError):
            api.update_dashboard(Dashboard(name='no id'))

    def test_update_dashboard_by_id_is_rejected(self, api, platform_server):
        with pytest.raises(ValidationError) as exc_info:
            api.update_dashboard(DASHBOARD_ID)

        assert exc_info.value.field_name == 'dashboard'
        assert platform_server.requests == []

    def test_delete_dashboard(self, api, platform_server, dashboard):
        api.delete_dashboard(dashboard)
        api.delete_dashboard(DASHBOARD_ID)

        assert [(r.method, r.path) for r in platform_server.requests] == [
            ('DELETE', f'/api/v2/dashboards/{DASHBOARD_ID}'),
            ('DELETE', f'/api/v2/dashboards/{DASHBOARD_ID}'),
        ]

    def test_delete_missing_dashboard(self, api, platform_server):
        platform_server.respond(404, json_body={'code': 'not found', 'message': 'dashboard not found'})

        with pytest.raises(NotFoundException):
            api.delete_dashboard('020f755c3c082000')

    def test_find_dashboard_by_id(self, api, platform_server):
        platform_server.respond(200, json_body=DASHBOARD)

        found = api.find_dashboard_by_id(DASHBOARD_ID)

        assert platform_server.last.method == 'GET'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}'
        assert found.name == 'Servers'

    def test_find_dashboards(self, api, platform_server):
        platform_server.respond(200, json_body={'dashboards': [DASHBOARD, {**DASHBOARD, 'id': '2'}]})

        dashboards = api.find_dashboards()

        assert [d.id for d in dashboards] == [DASHBOARD_ID, '2']
        assert platform_server.last.params is None

    def test_find_dashboards_by_organization(self, api, platform_server):
        platform_server.respond(200, json_body={'dashboards': []})

        result = api.find_dashboards_by_organization(Organization(id='o1', name='my-org'))

        assert result == []
        assert platform_server.last.params == {'org': 'my-org'}

    def test_find_dashboards_by_org_name(self, api, platform_server):
        platform_server.respond(200, json_body={'dashboards': [DASHBOARD]})

        api.find_dashboards_by_org_name('my-org')

        assert platform_server.last.params == {'org': 'my-org'}

    def test_find_dashboards_page(self, api, platform_server):
        platform_server.respond(200, json_body={'dashboards': [DASHBOARD], 'links': {'next': '/api/v2/dashboards?offset=20'}})

        page = api.find_dashboards_page(FindOptions(offset=10, limit=10, sort_by='name', descending=True), 'my-org')

        assert platform_server.last.params == {
            'offset': 10, 'limit': 10, 'descending': 'true', 'sortBy': 'name', 'org': 'my-org'
        }
        assert page.dashboards[0].id == DASHBOARD_ID
        assert page.links['next'].endswith('offset=20')

    def test_unknown_fields_survive_update(self, api, platform_server):
        platform_server.respond(200, json_body={**DASHBOARD, 'extension': {'pinned': True}})
        dashboard = api.find_dashboard_by_id(DASHBOARD_ID)

        platform_server.respond(200, json_body=DASHBOARD)
        api.update_dashboard(dashboard)

        assert platform_server.last.json['extension'] == {'pinned': True}


class TestLogs:
    """Test operation log paging"""

    LOGS = {
        'logs': [
            {'description': 'Dashboard Created', 'time': '2020-06-01T10:00:00Z', 'userID': '0123'},
        ],
        'links': {'next': '/api/v2/dashboards/1/logs?offset=1&limit=1'},
    }

    def test_find_dashboard_logs(self, api, platform_server, dashboard):
        platform_server.respond(200, json_body=self.LOGS)

        logs = api.find_dashboard_logs(dashboard)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/logs'
        assert platform_server.last.params is None
        assert logs[0].description == 'Dashboard Created'
        assert logs[0].user_id == '0123'

    def test_find_dashboard_logs_page(self, api, platform_server):
        platform_server.respond(200, json_body=self.LOGS)

        page = api.find_dashboard_logs_page(DASHBOARD_ID, FindOptions(offset=1, limit=1))

        assert platform_server.last.params == {'offset': 1, 'limit': 1}
        assert page.links['next'].endswith('limit=1')
        assert len(page.logs) == 1

    def test_find_options_limit(self):
        with pytest.raises(ValueError):
            FindOptions(limit=101)


class TestMembersAndOwners:
    """Test user membership of a dashboard"""

    USER = {'id': '0547d6e5f6a4e000', 'name': 'my-user', 'status': 'active'}

    def test_get_members(self, api, platform_server, dashboard):
        platform_server.respond(200, json_body={'users': [{**self.USER, 'role': 'member'}]})

        members = api.get_members(dashboard)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/members'
        assert isinstance(members[0], ResourceMember)
        assert members[0].role == 'member'

    def test_add_member(self, api, platform_server, dashboard):
        platform_server.respond(201, json_body={**self.USER, 'role': 'member'})

        member = api.add_member(User.model_validate(self.USER), dashboard)

        assert platform_server.last.method == 'POST'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/members'
        assert platform_server.last.json == {'id': '0547d6e5f6a4e000'}
        assert member.name == 'my-user'

    def test_delete_member(self, api, platform_server):
        api.delete_member('0547d6e5f6a4e000', DASHBOARD_ID)

        assert platform_server.last.method == 'DELETE'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/members/0547d6e5f6a4e000'

    def test_get_owners(self, api, platform_server):
        platform_server.respond(200, json_body={'users': [{**self.USER, 'role': 'owner'}]})

        owners = api.get_owners(DASHBOARD_ID)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/owners'
        assert isinstance(owners[0], ResourceOwner)
        assert owners[0].role == 'owner'

    def test_add_owner(self, api, platform_server, dashboard):
        platform_server.respond(201, json_body={**self.USER, 'role': 'owner'})

        owner = api.add_owner('0547d6e5f6a4e000', dashboard)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/owners'
        assert platform_server.last.json == {'id': '0547d6e5f6a4e000'}
        assert owner.role == 'owner'

    def test_delete_owner(self, api, platform_server, dashboard):
        api.delete_owner(User(id='0547d6e5f6a4e000'), dashboard)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/owners/0547d6e5f6a4e000'

    def test_member_without_id(self, api, platform_server, dashboard):
        with pytest.raises(ValidationError):
            api.add_member(User(name='nobody'), dashboard)

        assert platform_server.requests == []


class TestLabels:
    """Test labels attached to a dashboard"""

    LABEL = {'id': '060d8f6ec6db4000', 'orgID': '02d5e0ffba1d3000', 'name': 'red',
             'properties': {'color': '#ff0000'}}

    def test_get_labels(self, api, platform_server, dashboard):
        platform_server.respond(200, json_body={'labels': [self.LABEL]})

        labels = api.get_labels(dashboard)

        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/labels'
        assert labels[0].properties == {'color': '#ff0000'}

    def test_add_label(self, api, platform_server, dashboard):
        platform_server.respond(201, json_body={'label': self.LABEL})

        response = api.add_label(Label.model_validate(self.LABEL), dashboard)

        assert platform_server.last.method == 'POST'
        assert platform_server.last.json == {'labelID': '060d8f6ec6db4000'}
        assert response.label.name == 'red'

    def test_delete_label(self, api, platform_server):
        api.delete_label('060d8f6ec6db4000', DASHBOARD_ID)

        assert platform_server.last.method == 'DELETE'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/labels/060d8f6ec6db4000'


class TestCells:
    """Test cells and their views"""

    CELL = {'id': '060d8f6ec6db3001', 'x': 0, 'y': 0, 'w': 4, 'h': 4, 'viewID': '060d8f6ec6db3002'}
    VIEW = {
        'id': '060d8f6ec6db3002',
        'name': 'CPU',
        'properties': {'type': 'xy', 'shape': 'chronograf-v2', 'queries': []},
    }

    def test_add_cell(self, api, platform_server, dashboard):
        platform_server.respond(201, json_body=self.CELL)

        cell = api.add_cell(CreateCell(name='CPU', x=0, y=0, w=4, h=4), dashboard)

        assert platform_server.last.method == 'POST'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells'
        assert platform_server.last.json == {'name': 'CPU', 'x': 0, 'y': 0, 'w': 4, 'h': 4}
        assert cell.view_id == '060d8f6ec6db3002'

    def test_add_cell_using_view(self, api, platform_server):
        platform_server.respond(201, json_body=self.CELL)

        api.add_cell(CreateCell(using_view='060d8f6ec6db3002'), DASHBOARD_ID)

        assert platform_server.last.json == {'usingView': '060d8f6ec6db3002'}

    def test_add_cell_requires_body(self, api):
        with pytest.raises(ValidationError):
            api.add_cell(None, DASHBOARD_ID)

    def test_replace_cells(self, api, platform_server, dashboard):
        platform_server.respond(201, json_body=DASHBOARD)

        updated = api.replace_cells([Cell.model_validate(self.CELL)], dashboard)

        assert platform_server.last.method == 'PUT'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells'
        assert platform_server.last.json == [self.CELL]
        assert updated.id == DASHBOARD_ID

    def test_update_cell(self, api, platform_server, dashboard):
        platform_server.respond(200, json_body={**self.CELL, 'w': 8})

        cell = api.update_cell(CellUpdate(w=8), Cell.model_validate(self.CELL), dashboard)

        assert platform_server.last.method == 'PATCH'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells/060d8f6ec6db3001'
        assert platform_server.last.json == {'w': 8}
        assert cell.w == 8

    def test_delete_cell(self, api, platform_server):
        api.delete_cell('060d8f6ec6db3001', DASHBOARD_ID)

        assert platform_server.last.method == 'DELETE'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells/060d8f6ec6db3001'

    def test_get_cell_view(self, api, platform_server):
        platform_server.respond(200, json_body=self.VIEW)

        view = api.get_cell_view('060d8f6ec6db3001', DASHBOARD_ID)

        assert platform_server.last.method == 'GET'
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells/060d8f6ec6db3001/view'
        assert view.properties['type'] == 'xy'

    def test_add_and_update_cell_view(self, api, platform_server, dashboard):
        view = View.model_validate(self.VIEW)
        platform_server.respond(200, json_body=self.VIEW).respond(200, json_body={**self.VIEW, 'name': 'Load'})

        added = api.add_cell_view(view, '060d8f6ec6db3001', dashboard)
        view.name = 'Load'
        updated = api.update_cell_view(view, '060d8f6ec6db3001', dashboard)

        assert [r.method for r in platform_server.requests] == ['PATCH', 'PATCH']
        assert platform_server.last.path == f'/api/v2/dashboards/{DASHBOARD_ID}/cells/060d8f6ec6db3001/view'
        assert platform_server.last.json['name'] == 'Load'
        assert added.name == 'CPU'
        assert updated.name == 'Load'

    def test_cell_view_validation(self, api):
        with pytest.raises(ValidationError):
            api.get_cell_view('', DASHBOARD_ID)
        with pytest.raises(ValidationError):
            api.update_cell_view(None, '060d8f6ec6db3001', DASHBOARD_ID)
