"""Labels API: CRUD for labels that can be attached to dashboards and other resources."""

import logging
from typing import Dict, List, Optional, Union

from tsdb_sdk.arguments import check_non_empty, check_not_none
from tsdb_sdk.domain import Label, LabelCreateRequest, LabelUpdate, Organization
from tsdb_sdk.service import LabelsService

logger = logging.getLogger(__name__)


class LabelsApi:

    def __init__(self, service: LabelsService):
        check_not_none(service, "service")
        self.service = service

    def create_label(self, name: str, properties: Optional[Dict[str, str]], org_id: str) -> Label:
        """
        Create a label.

        Args:
            name: Label name
            properties: Key/value properties such as ``color``
            org_id: ID of the owning organization
        """
        check_non_empty(name, "name")
        check_non_empty(org_id, "org_id")

        return self.create_label_request(
            LabelCreateRequest(name=name, properties=properties or {}, org_id=org_id)
        )

    def create_label_request(self, request: LabelCreateRequest) -> Label:
        check_not_none(request, "request")

        return self.service.post_labels(request).label

    def update_label(self, label: Label) -> Label:
        """Send the label's name and properties to the server."""
        check_not_none(label, "label")
        label_id = check_non_empty(label.id, "label.id")

        body = LabelUpdate(name=label.name, properties=label.properties)
        return self.service.patch_labels_id(label_id, body).label

    def delete_label(self, label: Union[Label, str]) -> None:
        check_not_none(label, "label")
        label_id = label if isinstance(label, str) else label.id
        check_non_empty(label_id, "label_id")

        self.service.delete_labels_id(label_id)
        logger.debug(f"Deleted label {label_id}")

    def clone_label(self, clone_name: str, label: Union[Label, str]) -> Label:
        """Create a new label with the name ``clone_name`` and the properties of ``label``."""
        check_non_empty(clone_name, "clone_name")
        check_not_none(label, "label")

        if isinstance(label, str):
            label = self.find_label_by_id(label)

        return self.create_label(clone_name, dict(label.properties), label.org_id)

    def find_label_by_id(self, label_id: str) -> Label:
        check_non_empty(label_id, "label_id")

        return self.service.get_labels_id(label_id).label

    def find_labels(self) -> List[Label]:
        return self.find_labels_by_org_id(None)

    def find_labels_by_org(self, organization: Organization) -> List[Label]:
        check_not_none(organization, "organization")

        return self.find_labels_by_org_id(organization.id)

    def find_labels_by_org_id(self, org_id: Optional[str]) -> List[Label]:
        return self.service.get_labels(org_id=org_id).labels
