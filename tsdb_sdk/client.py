"""
Entry point of the SDK.

    >>> with PlatformClient("http://localhost:8086", token="my-token", org="my-org") as client:
    ...     dashboards = client.get_dashboards_api().find_dashboards()
    ...     tables = client.get_flux_client().query('buckets()')

Connection parameters can also come from the environment or a config file:

    >>> client = PlatformClient.from_settings()
    >>> client = PlatformClient.from_config_file("tsdb.yml")
"""

import logging
from typing import Optional

from tsdb_sdk.arguments import check_non_empty, check_not_none, check_positive_number
from tsdb_sdk.config.logging_config import LogLevel
from tsdb_sdk.config.settings import Settings, get_settings
from tsdb_sdk.dashboards_api import DashboardsApi
from tsdb_sdk.domain import HealthCheck, Ready
from tsdb_sdk.exceptions import ApiException, ConnectionException
from tsdb_sdk.flux.client import FluxClient
from tsdb_sdk.flux.options import FluxConnectionOptions
from tsdb_sdk.internal.rest import RestClient
from tsdb_sdk.labels_api import LabelsApi
from tsdb_sdk.service import DashboardsService, LabelsService, QueryService

logger = logging.getLogger(__name__)


class PlatformClient:
    """Holds the HTTP session and hands out the resource APIs."""

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        org: Optional[str] = None,
        connect_timeout: float = 10.0,
        read_timeout: float = 60.0,
        verify_ssl: bool = True,
        log_level: LogLevel = LogLevel.NONE
    ):
        """
        Initialize the client.

        Args:
            url: Base URL of the server, e.g. http://localhost:8086
            token: API token; takes precedence over username/password
            username: User for session authentication
            password: Password for session authentication
            org: Default organization for queries
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            verify_ssl: Verify the server TLS certificate
            log_level: HTTP wire logging level
        """
        check_non_empty(url, "url")
        check_positive_number(connect_timeout, "connect_timeout")
        check_positive_number(read_timeout, "read_timeout")

        self.flux_options = FluxConnectionOptions(
            url=url,
            org=org,
            token=token,
            username=username,
            password=password,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            verify_ssl=verify_ssl,
            log_level=log_level,
        )
        self.url = self.flux_options.url
        self.org = org
        self.rest = RestClient(
            self.url,
            token=token,
            username=username,
            password=password,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            verify_ssl=verify_ssl,
            log_level=log_level,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'PlatformClient':
        """Build a client from :class:`Settings` (environment variables by default)."""
        if settings is None:
            settings = get_settings()
        else:
            for warning in settings.validate_configuration():
                logger.warning(f"Configuration warning: {warning}")

        config = settings.connection
        return cls(
            config.url,
            token=config.token,
            username=config.username,
            password=config.password,
            org=config.org,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            verify_ssl=config.verify_ssl,
            log_level=config.http_log_level,
        )

    @classmethod
    def from_config_file(cls, config_file: str) -> 'PlatformClient':
        """Build a client from a YAML or JSON file; environment variables still win."""
        check_non_empty(config_file, "config_file")
        return cls.from_settings(Settings(config_file=config_file))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.rest.close()

    # APIs

    def get_dashboards_api(self) -> DashboardsApi:
        return DashboardsApi(DashboardsService(self.rest))

    def get_labels_api(self) -> LabelsApi:
        return LabelsApi(LabelsService(self.rest))

    def get_flux_client(self) -> FluxClient:
        """Flux client sharing this client's HTTP session."""
        return FluxClient(self.flux_options, rest=self.rest)

    # Server status

    def health(self) -> HealthCheck:
        """
        Get the health of the server.

        A failing or unreachable server is reported as a ``fail`` status
        rather than raised.
        """
        try:
            return QueryService(self.rest).get_health()
        except ApiException as e:
            if e.response is not None:
                try:
                    return HealthCheck.model_validate(e.response.json())
                except ValueError:
                    logger.debug("Health error response is not a health check document")
            return HealthCheck(name='server', status='fail', message=e.message)
        except ConnectionException as e:
            return HealthCheck(name='server', status='fail', message=e.message)

    def ready(self) -> Ready:
        return QueryService(self.rest).get_ready()

    def ping(self) -> bool:
        return self.get_flux_client().ping()

    def version(self) -> str:
        return self.get_flux_client().version()

    def get_log_level(self) -> LogLevel:
        return self.rest.log_level

    def set_log_level(self, log_level: LogLevel) -> 'PlatformClient':
        """Set the HTTP wire logging level, returns the client for chaining."""
        check_not_none(log_level, "log_level")
        self.rest.log_level = LogLevel.parse(log_level)
        return self
