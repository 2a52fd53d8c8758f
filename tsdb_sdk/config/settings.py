"""
Centralized Configuration Management for the SDK

This module provides a unified configuration system using Pydantic for validation
and type safety. Connection parameters can come from environment variables or
from a YAML/JSON file named by ``TSDB_CONFIG_FILE``; environment variables win.
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from tsdb_sdk.config.logging_config import LogLevel, configure_logging
from tsdb_sdk.exceptions import ConfigurationError


class ConnectionConfig(BaseSettings):
    """Server location, credentials and HTTP behaviour."""

    url: str = Field(
        'http://localhost:8086',
        description="Base URL of the server"
    )
    token: Optional[str] = Field(
        None,
        description="API token sent as 'Authorization: Token ...'"
    )
    username: Optional[str] = Field(
        None,
        description="Username for session (signin) authentication"
    )
    password: Optional[str] = Field(
        None,
        description="Password for session (signin) authentication"
    )
    org: Optional[str] = Field(
        None,
        description="Default organization name or ID for queries"
    )
    connect_timeout: float = Field(
        10.0,
        gt=0,
        description="Connect timeout in seconds"
    )
    read_timeout: float = Field(
        60.0,
        gt=0,
        description="Read timeout in seconds"
    )
    verify_ssl: bool = Field(
        True,
        description="Verify the server TLS certificate"
    )
    http_log_level: LogLevel = Field(
        LogLevel.NONE,
        description="HTTP wire logging (NONE, BASIC, HEADERS, BODY)"
    )

    @field_validator('url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('http_log_level', mode='before')
    @classmethod
    def parse_log_level(cls, v):
        return LogLevel.parse(v)

    model_config = ConfigDict(env_prefix='TSDB_')


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        'INFO',
        description="Logging level"
    )
    log_format: Literal['json', 'human'] = Field(
        'human',
        description="Log output format"
    )
    log_output: str = Field(
        'stdout',
        description="Log output destination (stdout, stderr, or file path)"
    )

    model_config = ConfigDict(env_prefix='')


class Settings(BaseSettings):
    """Main settings class that aggregates all configuration sections."""

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    config_file: Optional[Path] = Field(
        None,
        description="Path to configuration file (YAML or JSON)"
    )

    @model_validator(mode='before')
    @classmethod
    def load_from_file(cls, values):
        """Load configuration from file if specified."""
        if isinstance(values, dict):
            config_file = values.get('config_file') or os.getenv('TSDB_CONFIG_FILE')

            if config_file:
                file_config = load_config_file(config_file)

                # Environment variables take precedence over file values
                if 'connection' not in values:
                    section = file_config.get('connection') or {}
                    values['connection'] = ConnectionConfig(**{
                        key: value for key, value in section.items()
                        if os.getenv(f"TSDB_{key.upper()}") is None
                    })

                if 'logging' not in values:
                    section = file_config.get('logging') or {}
                    values['logging'] = LoggingConfig(**{
                        key: value for key, value in section.items()
                        if os.getenv(key.upper()) is None
                    })

        return values

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode='json', exclude={'config_file'})

    def to_yaml(self) -> str:
        """Export settings to YAML format."""
        import yaml
        return yaml.safe_dump(self.to_dict(), default_flow_style=False)

    def apply_logging(self) -> None:
        """Configure the ``tsdb_sdk`` loggers from the logging section."""
        configure_logging(
            level=self.logging.log_level,
            format_type=self.logging.log_format,
            output=self.logging.log_output
        )

    def validate_configuration(self) -> list[str]:
        """Validate configuration and return any warnings."""
        warnings = []
        connection = self.connection

        if connection.token and (connection.username or connection.password):
            warnings.append("Both token and username/password configured, the token is used")

        if not connection.token and not (connection.username and connection.password):
            warnings.append("No credentials configured, requests will be unauthenticated")

        if connection.url.startswith('http://') and (connection.token or connection.password):
            if not connection.url.startswith(('http://localhost', 'http://127.0.0.1')):
                warnings.append(f"Credentials are sent over plain HTTP to {connection.url}")

        if connection.http_log_level in (LogLevel.HEADERS, LogLevel.BODY):
            warnings.append(f"HTTP log level {connection.http_log_level.value} may log sensitive data")

        return warnings

    model_config = ConfigDict(
        env_prefix='',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


def load_config_file(config_file) -> dict[str, Any]:
    """Read a YAML or JSON configuration file into a dictionary."""
    config_file = str(config_file)

    if not os.path.exists(config_file):
        raise ConfigurationError('config_file', config_file, message=f"Configuration file not found: {config_file}")

    import json

    import yaml

    with open(config_file) as f:
        if config_file.endswith('.json'):
            file_config = json.load(f)
        elif config_file.endswith(('.yml', '.yaml')):
            file_config = yaml.safe_load(f)
        else:
            raise ConfigurationError('config_file', config_file,
                                     message=f"Unsupported config file format: {config_file}")

    return file_config or {}


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern)."""
    global _settings

    if _settings is None:
        _settings = Settings()

        warnings = _settings.validate_configuration()
        if warnings:
            logger = logging.getLogger(__name__)
            for warning in warnings:
                logger.warning(f"Configuration warning: {warning}")

    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = None
    return get_settings()
