"""
Public, high-level helpers for talking to the Authorize.Net API.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import GatewayClient
from .core.config import (
    ApiEnvironment,
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .core.enums import ValidationMode

__all__ = [
    "ConfigError",
    "GatewayClient",
    "GatewayConfig",
    "GatewayParameters",
    "create_gateway_client",
    "load_gateway_config",
]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    session: Optional[requests.Session] = None,
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
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient`.

    Callers can either supply a ready-made :class:`GatewayConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            login_id,
            transaction_key,
            environment,
            validation_mode,
            test_server_uri,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
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
    return GatewayClient(cfg, session=session)
