"""Tests for configuration loading."""

from pathlib import Path
from typing import Dict
from unittest.mock import MagicMock

import pytest
import requests

from authnet_cim import create_gateway_client
from authnet_cim.core.config import (
    ENDPOINTS,
    ApiEnvironment,
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from authnet_cim.core.enums import ValidationMode
from authnet_cim.core.environment import build_environment, load_env_file

CREDENTIALS = {
    "AUTHNET_LOGIN_ID": "login_id",
    "AUTHNET_TRANSACTION_KEY": "transaction_key",
}


def _mapping(**extra: str) -> Dict[str, str]:
    values = dict(CREDENTIALS)
    values.update(extra)
    return values


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text(
        "# gateway credentials\n"
        'export AUTHNET_LOGIN_ID="file_login"\n'
        "AUTHNET_TRANSACTION_KEY='file_key'\n"
        "\n"
        "AUTHNET_ENVIRONMENT = production\n"
        "not a setting\n",
        encoding="utf-8",
    )
    return path


class TestGatewayConfig:
    """Tests for building configuration from a mapping."""

    def test_defaults(self) -> None:
        config = GatewayConfig.from_mapping(CREDENTIALS)
        assert config.environment is ApiEnvironment.SANDBOX
        assert config.endpoint == "https://apitest.authorize.net/xml/v1/request.api"
        assert config.validation_mode is ValidationMode.TEST
        assert config.timeout_seconds == 30
        assert config.credentials.login_id == "login_id"
        assert config.credentials.transaction_key == "transaction_key"

    def test_production(self) -> None:
        config = GatewayConfig.from_mapping(_mapping(AUTHNET_ENVIRONMENT="Production"))
        assert config.environment is ApiEnvironment.PRODUCTION
        assert config.endpoint == ENDPOINTS[ApiEnvironment.PRODUCTION]

    def test_test_environment_uses_configured_uri(self) -> None:
        config = GatewayConfig.from_mapping(
            _mapping(
                AUTHNET_ENVIRONMENT="test",
                AUTHNET_TEST_SERVER_URI="http://localhost:9000/api",
            )
        )
        assert config.endpoint == "http://localhost:9000/api"

    def test_test_environment_requires_uri(self) -> None:
        with pytest.raises(ConfigError, match="AUTHNET_TEST_SERVER_URI"):
            GatewayConfig.from_mapping(_mapping(AUTHNET_ENVIRONMENT="test"))

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("live", ValidationMode.LIVE),
            ("test", ValidationMode.TEST),
            ("none", ValidationMode.NONE),
            ("liveMode", ValidationMode.LIVE),
        ],
    )
    def test_validation_mode(self, raw: str, expected: ValidationMode) -> None:
        config = GatewayConfig.from_mapping(_mapping(AUTHNET_VALIDATION_MODE=raw))
        assert config.validation_mode is expected

    @pytest.mark.parametrize(
        "values",
        [
            {"AUTHNET_TRANSACTION_KEY": "key"},
            {"AUTHNET_LOGIN_ID": "login", "AUTHNET_TRANSACTION_KEY": "  "},
            _mapping(AUTHNET_ENVIRONMENT="staging"),
            _mapping(AUTHNET_VALIDATION_MODE="maybe"),
            _mapping(AUTHNET_TIMEOUT_SECONDS="soon"),
            _mapping(AUTHNET_TIMEOUT_SECONDS="0"),
        ],
    )
    def test_invalid_configuration(self, values: Dict[str, str]) -> None:
        with pytest.raises(ConfigError):
            GatewayConfig.from_mapping(values)

    def test_credentials_are_stripped(self) -> None:
        config = GatewayConfig.from_mapping(
            {"AUTHNET_LOGIN_ID": " login ", "AUTHNET_TRANSACTION_KEY": "key\n"}
        )
        assert config.credentials.login_id == "login"
        assert config.credentials.transaction_key == "key"

    def test_repr_hides_transaction_key(self) -> None:
        config = GatewayConfig.from_mapping(
            {"AUTHNET_LOGIN_ID": "login", "AUTHNET_TRANSACTION_KEY": "s3cret"}
        )
        assert "s3cret" not in repr(config)


class TestLoadGatewayConfig:
    """Tests for layering environment, .env file and explicit values."""

    def test_reads_env_file(self, env_file: Path) -> None:
        config = load_gateway_config(env_file=str(env_file), base={})
        assert config.credentials.login_id == "file_login"
        assert config.credentials.transaction_key == "file_key"
        assert config.environment is ApiEnvironment.PRODUCTION

    def test_base_environment_wins_over_file(self, env_file: Path) -> None:
        config = load_gateway_config(
            env_file=str(env_file), base={"AUTHNET_LOGIN_ID": "from_env"}
        )
        assert config.credentials.login_id == "from_env"
        assert config.credentials.transaction_key == "file_key"

    def test_overrides_win_over_base(self, env_file: Path) -> None:
        config = load_gateway_config(
            env_file=str(env_file),
            base={"AUTHNET_LOGIN_ID": "from_env"},
            overrides={"AUTHNET_LOGIN_ID": "override", "AUTHNET_ENVIRONMENT": "sandbox"},
        )
        assert config.credentials.login_id == "override"
        assert config.environment is ApiEnvironment.SANDBOX

    def test_keyword_arguments_win_over_overrides(self) -> None:
        config = load_gateway_config(
            env_file=None,
            base=CREDENTIALS,
            overrides={"AUTHNET_TIMEOUT_SECONDS": "5"},
            timeout_seconds=12,
            validation_mode=ValidationMode.LIVE,
        )
        assert config.timeout_seconds == 12
        assert config.validation_mode is ValidationMode.LIVE

    def test_parameters_bundle(self) -> None:
        parameters = GatewayParameters(
            login_id="bundle",
            transaction_key="bundle_key",
            environment=ApiEnvironment.TEST,
            test_server_uri="http://localhost:1/api",
        )
        config = load_gateway_config(env_file=None, base={}, parameters=parameters)
        assert config.credentials.login_id == "bundle"
        assert config.endpoint == "http://localhost:1/api"

    def test_parameters_as_overrides(self) -> None:
        parameters = GatewayParameters(environment=ApiEnvironment.PRODUCTION, timeout_seconds=5)
        assert parameters.as_overrides() == {
            "AUTHNET_ENVIRONMENT": "production",
            "AUTHNET_TIMEOUT_SECONDS": "5",
        }

    def test_missing_env_file_is_ignored(self, tmp_path: Path) -> None:
        config = load_gateway_config(env_file=str(tmp_path / "absent.env"), base=CREDENTIALS)
        assert config.credentials.login_id == "login_id"

    def test_missing_credentials(self) -> None:
        with pytest.raises(ConfigError):
            load_gateway_config(env_file=None, base={})


class TestEnvironmentHelpers:
    """Tests for the .env helpers."""

    def test_load_env_file_keeps_existing_keys(self, env_file: Path) -> None:
        target = {"AUTHNET_LOGIN_ID": "existing"}
        merged = load_env_file(str(env_file), environ=target)
        assert target["AUTHNET_LOGIN_ID"] == "existing"
        assert target["AUTHNET_TRANSACTION_KEY"] == "file_key"
        assert merged == target
        assert "not a setting" not in merged

    def test_build_environment(self, env_file: Path) -> None:
        resolved = build_environment(
            env_file=str(env_file), base={"OTHER": "1"}, overrides={"OTHER": "2"}
        )
        assert resolved.get("OTHER") == "2"
        assert resolved.get("AUTHNET_LOGIN_ID") == "file_login"
        assert resolved.get("AUTHNET_TIMEOUT_SECONDS", "30") == "30"


class TestCreateGatewayClient:
    """Tests for the client factory."""

    def test_from_config(self) -> None:
        config = GatewayConfig.from_mapping(CREDENTIALS)
        session = MagicMock(spec=requests.Session)
        client = create_gateway_client(config=config, session=session)
        assert client.config is config
        assert client.session is session

    def test_from_parameters(self) -> None:
        client = create_gateway_client(env_file=None, base=CREDENTIALS, environment="production")
        assert client.config.endpoint == ENDPOINTS[ApiEnvironment.PRODUCTION]
        assert isinstance(client.session, requests.Session)

    def test_config_and_parameters_conflict(self) -> None:
        config = GatewayConfig.from_mapping(CREDENTIALS)
        with pytest.raises(ValueError):
            create_gateway_client(config=config, login_id="other")
