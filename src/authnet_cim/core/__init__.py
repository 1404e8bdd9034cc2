"""
Core primitives that implement the Authorize.Net request/response cycle.
"""

from .client import GatewayClient, submit
from .config import (
    ApiEnvironment,
    ConfigError,
    Credentials,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .document import Node, element, encode, find, parse, to_bytes
from .enums import (
    BankAccountType,
    EcheckType,
    IntervalUnit,
    PaymentKind,
    ProfileType,
    SubscriptionStatus,
    TransactionType,
    ValidationMode,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    AuthNetError,
    DecodeError,
    GatewayConnectionError,
    OperationError,
    RequestError,
    ValidationError,
)
from .models import (
    Address,
    BankAccount,
    Card,
    Customer,
    PaymentProfile,
    Subscription,
    Transaction,
)
from .payloads import build_envelope
from .results import (
    ConnectionFailure,
    DecodeFailure,
    OperationFailure,
    Outcome,
    RequestFailure,
    Success,
    classify_response,
)

__all__ = [
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
    "GatewayEnvironment",
    "GatewayParameters",
    "IntervalUnit",
    "Node",
    "OperationError",
    "OperationFailure",
    "Outcome",
    "PaymentKind",
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
    "build_envelope",
    "build_environment",
    "classify_response",
    "element",
    "encode",
    "find",
    "load_env_file",
    "load_gateway_config",
    "parse",
    "submit",
    "to_bytes",
]
