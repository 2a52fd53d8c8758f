"""
Test configuration loading from environment variables and config files
"""

import json
import logging

import pytest
import yaml

from tsdb_sdk.config import LogLevel, Settings, get_settings, reload_settings
from tsdb_sdk.config.settings import ConnectionConfig, load_config_file
from tsdb_sdk.exceptions import ConfigurationError


class TestConnectionConfig:
    """Test connection defaults and environment overrides"""

    def test_defaults(self):
        config = ConnectionConfig()

        assert config.url == 'http://localhost:8086'
        assert config.token is None
        assert config.connect_timeout == 10.0
        assert config.read_timeout == 60.0
        assert config.verify_ssl is True
        assert config.http_log_level == LogLevel.NONE

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv('TSDB_URL', 'https://tsdb.example.com/')
        monkeypatch.setenv('TSDB_TOKEN', 'env-token')
        monkeypatch.setenv('TSDB_ORG', 'my-org')
        monkeypatch.setenv('TSDB_READ_TIMEOUT', '5')
        monkeypatch.setenv('TSDB_HTTP_LOG_LEVEL', 'body')

        config = ConnectionConfig()

        assert config.url == 'https://tsdb.example.com'
        assert config.token == 'env-token'
        assert config.org == 'my-org'
        assert config.read_timeout == 5.0
        assert config.http_log_level == LogLevel.BODY

    def test_invalid_url(self):
        with pytest.raises(ValueError):
            ConnectionConfig(url='localhost:8086')

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ConnectionConfig(read_timeout=0)


class TestConfigFile:
    """Test YAML and JSON configuration files"""

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / 'tsdb.yml'
        config_file.write_text(yaml.safe_dump({
            'connection': {'url': 'http://tsdb:8086', 'token': 'file-token', 'org': 'file-org'},
            'logging': {'log_level': 'DEBUG', 'log_format': 'json'},
        }))

        settings = Settings(config_file=config_file)

        assert settings.connection.url == 'http://tsdb:8086'
        assert settings.connection.token == 'file-token'
        assert settings.connection.org == 'file-org'
        assert settings.logging.log_level == 'DEBUG'
        assert settings.logging.log_format == 'json'

    def test_json_file(self, tmp_path):
        config_file = tmp_path / 'tsdb.json'
        config_file.write_text(json.dumps({'connection': {'username': 'my-user', 'password': 'my-password'}}))

        settings = Settings(config_file=str(config_file))

        assert settings.connection.username == 'my-user'
        assert settings.connection.password == 'my-password'
        assert settings.logging.log_level == 'INFO'

    def test_environment_wins_over_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / 'tsdb.yml'
        config_file.write_text(yaml.safe_dump({'connection': {'token': 'file-token', 'org': 'file-org'}}))
        monkeypatch.setenv('TSDB_TOKEN', 'env-token')

        settings = Settings(config_file=config_file)

        assert settings.connection.token == 'env-token'
        assert settings.connection.org == 'file-org'

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / 'tsdb.yaml'
        config_file.write_text(yaml.safe_dump({'connection': {'org': 'file-org'}}))
        monkeypatch.setenv('TSDB_CONFIG_FILE', str(config_file))

        assert Settings().connection.org == 'file-org'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(tmp_path / 'missing.yml')

        assert exc_info.value.config_key == 'config_file'

    def test_unsupported_format(self, tmp_path):
        config_file = tmp_path / 'tsdb.ini'
        config_file.write_text('[connection]\n')

        with pytest.raises(ConfigurationError):
            load_config_file(config_file)

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / 'empty.yml'
        config_file.write_text('')

        assert load_config_file(config_file) == {}


class TestSettings:
    """Test export and validation helpers"""

    def test_to_dict_and_yaml(self):
        settings = Settings(connection=ConnectionConfig(token='my-token'))

        result = settings.to_dict()
        assert result['connection']['token'] == 'my-token'
        assert result['connection']['http_log_level'] == 'NONE'
        assert 'config_file' not in result

        assert yaml.safe_load(settings.to_yaml()) == result

    def test_warnings_without_credentials(self):
        warnings = Settings().validate_configuration()

        assert any('No credentials' in warning for warning in warnings)

    def test_warnings_token_and_password(self):
        settings = Settings(connection=ConnectionConfig(token='t', username='u', password='p'))

        warnings = settings.validate_configuration()
        assert any('token is used' in warning for warning in warnings)

    def test_warnings_plain_http(self):
        settings = Settings(connection=ConnectionConfig(url='http://tsdb.example.com', token='t'))

        warnings = settings.validate_configuration()
        assert any('plain HTTP' in warning for warning in warnings)

    def test_no_plain_http_warning_for_localhost(self):
        settings = Settings(connection=ConnectionConfig(token='t'))

        assert settings.validate_configuration() == []

    def test_warnings_verbose_http_logging(self):
        settings = Settings(connection=ConnectionConfig(token='t', http_log_level='HEADERS'))

        warnings = settings.validate_configuration()
        assert any('HEADERS' in warning for warning in warnings)

    def test_apply_logging(self, tmp_path):
        log_file = tmp_path / 'sdk.log'
        settings = Settings()
        settings.logging.log_level = 'DEBUG'
        settings.logging.log_output = str(log_file)

        try:
            settings.apply_logging()
            sdk_logger = logging.getLogger('tsdb_sdk')
            assert sdk_logger.level == logging.DEBUG
            assert isinstance(sdk_logger.handlers[0], logging.FileHandler)
        finally:
            for handler in logging.getLogger('tsdb_sdk').handlers:
                handler.close()
            logging.getLogger('tsdb_sdk').handlers = []

    def test_get_settings_is_singleton(self, monkeypatch):
        monkeypatch.setenv('TSDB_ORG', 'first')
        first = reload_settings()
        monkeypatch.setenv('TSDB_ORG', 'second')

        assert get_settings() is first
        assert reload_settings().connection.org == 'second'
