"""Pytest configuration and fixtures."""

from typing import Callable, Mapping, Optional
from unittest.mock import MagicMock

import pytest
import requests

from authnet_cim.core.client import GatewayClient
from authnet_cim.core.config import GatewayConfig
from authnet_cim.core.document import Node, parse

TEST_SERVER_URI = "http://localhost:8123/xml/v1/request.api"


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Configuration pointing at a local test endpoint."""
    return GatewayConfig.from_mapping(
        {
            "AUTHNET_LOGIN_ID": "login_id",
            "AUTHNET_TRANSACTION_KEY": "transaction_key",
            "AUTHNET_ENVIRONMENT": "test",
            "AUTHNET_TEST_SERVER_URI": TEST_SERVER_URI,
            "AUTHNET_VALIDATION_MODE": "test",
        }
    )


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Build real ``requests.Response`` objects without touching the network."""

    def _make(
        body: bytes,
        status: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response._content = body
        response.headers.update(headers or {"Content-Type": "application/xml; charset=utf-8"})
        return response

    return _make


@pytest.fixture
def session() -> MagicMock:
    """Stand-in transport; tests set ``post.return_value`` or ``post.side_effect``."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(gateway_config: GatewayConfig, session: MagicMock) -> GatewayClient:
    return GatewayClient(gateway_config, session=session)


@pytest.fixture
def serve(session: MagicMock, make_response: Callable[..., requests.Response]):
    """Make the stand-in transport answer every request with ``body``."""

    def _serve(body: bytes, status: int = 200) -> None:
        session.post.return_value = make_response(body, status=status)

    return _serve


@pytest.fixture
def sent(session: MagicMock) -> Callable[[], Node]:
    """Parse the request body handed to the transport by the last call."""

    def _sent() -> Node:
        _, kwargs = session.post.call_args
        return parse(kwargs["data"])

    return _sent
