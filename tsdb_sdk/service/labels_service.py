"""REST definition of the ``/api/v2/labels`` resource."""

from typing import Optional

from tsdb_sdk.domain import LabelCreateRequest, LabelResponse, LabelsResponse, LabelUpdate
from tsdb_sdk.internal.rest import RestClient

_BASE = 'api/v2/labels'


class LabelsService:

    def __init__(self, rest: RestClient):
        self.rest = rest

    def get_labels(self, org_id: Optional[str] = None) -> LabelsResponse:
        return self.rest.execute('GET', _BASE, LabelsResponse, params={'orgID': org_id})

    def post_labels(self, body: LabelCreateRequest) -> LabelResponse:
        return self.rest.execute('POST', _BASE, LabelResponse, json=body.to_body())

    def get_labels_id(self, label_id: str) -> LabelResponse:
        return self.rest.execute('GET', f'{_BASE}/{label_id}', LabelResponse)

    def patch_labels_id(self, label_id: str, body: LabelUpdate) -> LabelResponse:
        return self.rest.execute('PATCH', f'{_BASE}/{label_id}', LabelResponse, json=body.to_body())

    def delete_labels_id(self, label_id: str) -> None:
        self.rest.execute('DELETE', f'{_BASE}/{label_id}')
