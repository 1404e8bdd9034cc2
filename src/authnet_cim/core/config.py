"""
Configuration objects and helpers for the Authorize.Net gateway client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .enums import ValidationMode
from .environment import build_environment
from .errors import AuthNetError, ValidationError

__all__ = [
    "ApiEnvironment",
    "ConfigError",
    "Credentials",
    "ENDPOINTS",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
]

_PARAMETER_TO_ENV_KEY = {
    "login_id": "AUTHNET_LOGIN_ID",
    "transaction_key": "AUTHNET_TRANSACTION_KEY",
    "environment": "AUTHNET_ENVIRONMENT",
    "validation_mode": "AUTHNET_VALIDATION_MODE",
    "test_server_uri": "AUTHNET_TEST_SERVER_URI",
    "timeout_seconds": "AUTHNET_TIMEOUT_SECONDS",
}


class ApiEnvironment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"
    TEST = "test"


ENDPOINTS = {
    ApiEnvironment.SANDBOX: "https://apitest.authorize.net/xml/v1/request.api",
    ApiEnvironment.PRODUCTION: "https://api.authorize.net/xml/v1/request.api",
}


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class ConfigError(AuthNetError):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class Credentials:
    """Merchant authentication sent with every request."""

    login_id: str
    transaction_key: str = field(repr=False)

    def to_wire(self) -> List[Tuple[str, str]]:
        return [("name", self.login_id), ("transactionKey", self.transaction_key)]


@dataclass(frozen=True)
class GatewayParameters:
    """
    Explicit parameter bundle for constructing :class:`GatewayConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_gateway_config`.
    """

    login_id: Optional[str] = None
    transaction_key: Optional[str] = None
    environment: Optional[ApiEnvironment | str] = None
    validation_mode: Optional[ValidationMode | str] = None
    test_server_uri: Optional[str] = None
    timeout_seconds: Optional[int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[GatewayParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown gateway parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _required(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        raise ConfigError(f"{key} must be provided")
    return raw.strip()


def _parse_environment(raw: str) -> ApiEnvironment:
    try:
        return ApiEnvironment(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(env.value for env in ApiEnvironment)
        raise ConfigError(
            f"AUTHNET_ENVIRONMENT must be one of {choices}, got '{raw}'"
        ) from exc


def _parse_validation_mode(raw: str) -> ValidationMode:
    try:
        return ValidationMode.coerce(raw, "AUTHNET_VALIDATION_MODE")
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


@dataclass(frozen=True)
class GatewayConfig:
    credentials: Credentials
    endpoint: str
    environment: ApiEnvironment = ApiEnvironment.SANDBOX
    validation_mode: ValidationMode = ValidationMode.TEST
    timeout_seconds: int = 30

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        credentials = Credentials(
            login_id=_required(values, "AUTHNET_LOGIN_ID"),
            transaction_key=_required(values, "AUTHNET_TRANSACTION_KEY"),
        )

        environment = _parse_environment(values.get("AUTHNET_ENVIRONMENT", "sandbox"))
        if environment is ApiEnvironment.TEST:
            endpoint = _required(values, "AUTHNET_TEST_SERVER_URI")
        else:
            endpoint = ENDPOINTS[environment]

        validation_mode = _parse_validation_mode(
            values.get("AUTHNET_VALIDATION_MODE", "test")
        )

        timeout_raw = values.get("AUTHNET_TIMEOUT_SECONDS", "30")
        try:
            timeout_seconds = int(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"AUTHNET_TIMEOUT_SECONDS must be an integer, got '{timeout_raw}'"
            ) from exc
        if timeout_seconds <= 0:
            raise ConfigError("AUTHNET_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            credentials=credentials,
            endpoint=endpoint,
            environment=environment,
            validation_mode=validation_mode,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[GatewayParameters] = None,
        login_id: Optional[str] = None,
        transaction_key: Optional[str] = None,
        environment: Optional[ApiEnvironment | str] = None,
        validation_mode: Optional[ValidationMode | str] = None,
        test_server_uri: Optional[str] = None,
        timeout_seconds: Optional[int | str] = None,
    ) -> "GatewayConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "login_id": login_id,
                "transaction_key": transaction_key,
                "environment": environment,
                "validation_mode": validation_mode,
                "test_server_uri": test_server_uri,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        resolved = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(resolved.variables)


def load_gateway_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    login_id: Optional[str] = None,
    transaction_key: Optional[str] = None,
    environment: Optional[ApiEnvironment | str] = None,
    validation_mode: Optional[ValidationMode | str] = None,
    test_server_uri: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return GatewayConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        login_id=login_id,
        transaction_key=transaction_key,
        environment=environment,
        validation_mode=validation_mode,
        test_server_uri=test_server_uri,
        timeout_seconds=timeout_seconds,
    )
