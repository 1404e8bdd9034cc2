"""
Public facade for the Authorize.Net CIM client package.

The module re-exports the most useful pieces for integrators so they can
``from authnet_cim import ...`` without navigating the package.
"""

from .api import create_gateway_client
from .core import (
    Address,
    ApiEnvironment,
    AuthNetError,
    BankAccount,
    BankAccountType,
    Card,
    ConfigError,
    ConnectionFailure,
    Credentials,
    Customer,
    DecodeError,
    DecodeFailure,
    EcheckType,
    GatewayClient,
    GatewayConfig,
    GatewayConnectionError,
    GatewayParameters,
    IntervalUnit,
    OperationError,
    OperationFailure,
    Outcome,
    PaymentProfile,
    ProfileType,
    RequestError,
    RequestFailure,
    Subscription,
    SubscriptionStatus,
    Success,
    Transaction,
    TransactionType,
    ValidationError,
    ValidationMode,
    load_gateway_config,
)

__all__ = (
    "Address",
    "ApiEnvironment",
    "AuthNetError",
    "BankAccount",
    "BankAccountType",
    "Card",
    "ConfigError",
    "ConnectionFailure",
    "Credentials",
    "Customer",
    "DecodeError",
    "DecodeFailure",
    "EcheckType",
    "GatewayClient",
    "GatewayConfig",
    "GatewayConnectionError",
    "GatewayParameters",
    "IntervalUnit",
    "OperationError",
    "OperationFailure",
    "Outcome",
    "PaymentProfile",
    "ProfileType",
    "RequestError",
    "RequestFailure",
    "Subscription",
    "SubscriptionStatus",
    "Success",
    "Transaction",
    "TransactionType",
    "ValidationError",
    "ValidationMode",
    "create_gateway_client",
    "load_gateway_config",
)
