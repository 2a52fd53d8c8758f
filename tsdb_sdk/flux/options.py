"""
Connection options of the Flux client.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from tsdb_sdk.config.logging_config import LogLevel
from tsdb_sdk.config.settings import ConnectionConfig


def default_dialect() -> Dict[str, Any]:
    """Annotated CSV with a header row and RFC3339 timestamps."""
    return {
        'header': True,
        'delimiter': ',',
        'commentPrefix': '#',
        'annotations': ['datatype', 'group', 'default'],
        'dateTimeFormat': 'RFC3339',
    }


class FluxConnectionOptions(BaseModel):
    """Where and how the Flux client connects"""
    url: str = Field(..., description="Base URL of the server")
    org: Optional[str] = Field(None, description="Organization name or ID the queries run in")
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    connect_timeout: float = Field(10.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(60.0, gt=0, description="Read timeout in seconds")
    verify_ssl: bool = True
    log_level: LogLevel = LogLevel.NONE
    dialect: Dict[str, Any] = Field(default_factory=default_dialect)

    @field_validator('url')
    @classmethod
    def check_url(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('log_level', mode='before')
    @classmethod
    def parse_log_level(cls, v):
        return LogLevel.parse(v)

    @classmethod
    def from_connection_config(cls, config: ConnectionConfig) -> 'FluxConnectionOptions':
        return cls(
            url=config.url,
            org=config.org,
            token=config.token,
            username=config.username,
            password=config.password,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            verify_ssl=config.verify_ssl,
            log_level=config.http_log_level,
        )
