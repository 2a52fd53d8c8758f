"""Query submission and server status endpoints."""

from typing import Any, Dict, Optional

import requests

from tsdb_sdk.domain import HealthCheck, Ready
from tsdb_sdk.internal.rest import RestClient


class QueryService:

    def __init__(self, rest: RestClient):
        self.rest = rest

    def post_query(self, body: Dict[str, Any], org: Optional[str] = None, stream: bool = False) -> requests.Response:
        """Submit a query; the caller reads (and closes) the response."""
        headers = {'Accept': 'application/csv', 'Content-Type': 'application/json'}
        return self.rest.request('POST', 'api/v2/query', params={'org': org}, json=body,
                                 headers=headers, stream=stream)

    def get_ping(self) -> requests.Response:
        return self.rest.request('GET', 'ping')

    def get_health(self) -> HealthCheck:
        return self.rest.execute('GET', 'health', HealthCheck)

    def get_ready(self) -> Ready:
        return self.rest.execute('GET', 'ready', Ready)
