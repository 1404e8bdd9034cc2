"""
Helpers for constructing the XML requests sent to the Authorize.Net API.

Every builder here is pure: it returns a node-spec fragment (or, for
:func:`build_envelope`, the complete request tree) and performs no I/O.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from .config import Credentials
from .document import Node, element
from .enums import ValidationMode
from .models import Address, Customer, PaymentProfile, Subscription, Transaction

__all__ = [
    "SCHEMA_NAMESPACE",
    "build_envelope",
    "create_customer_request",
    "create_payment_profile_request",
    "create_shipping_address_request",
    "create_subscription_request",
    "create_transaction_request",
    "customer_ids_request",
    "customer_request",
    "payment_profile_list_request",
    "payment_profile_request",
    "shipping_address_request",
    "subscription_request",
    "update_customer_request",
    "update_payment_profile_request",
    "update_shipping_address_request",
    "validate_payment_profile_request",
]

SCHEMA_NAMESPACE = "AnetApi/xml/v1/schema/AnetApiSchema.xsd"

Fragment = List[Tuple[str, Any]]


def build_envelope(
    operation: str,
    credentials: Credentials,
    fragment: Sequence[Any],
) -> Node:
    """
    Wrap ``fragment`` into the request element for ``operation``.

    The merchant authentication block always comes first, followed by the
    fragment in the order given.
    """
    return element(
        operation,
        [("merchantAuthentication", credentials.to_wire()), *fragment],
        attributes={"xmlns": SCHEMA_NAMESPACE},
    )


def customer_ids_request() -> Fragment:
    return []


def customer_request(profile_id: int) -> Fragment:
    """Body shared by the get and delete customer profile requests."""
    return [("customerProfileId", profile_id)]


def create_customer_request(customer: Customer, mode: ValidationMode) -> Fragment:
    return [
        ("profile", customer.to_wire()),
        ("validationMode", mode if customer.payment_profiles else None),
    ]


def update_customer_request(customer: Customer) -> Fragment:
    return [("profile", customer.to_wire(nested=False))]


def create_payment_profile_request(profile: PaymentProfile, mode: ValidationMode) -> Fragment:
    return [
        ("customerProfileId", profile.customer_id),
        ("paymentProfile", profile.to_wire()),
        ("validationMode", mode),
    ]


def update_payment_profile_request(profile: PaymentProfile, mode: ValidationMode) -> Fragment:
    return create_payment_profile_request(profile, mode)


def payment_profile_request(
    customer_id: int,
    profile_id: int,
    unmask_expiration_date: Optional[bool] = None,
) -> Fragment:
    """Body of the get and delete payment profile requests."""
    return [
        ("customerProfileId", customer_id),
        ("customerPaymentProfileId", profile_id),
        ("unmaskExpirationDate", unmask_expiration_date),
    ]


def payment_profile_list_request(
    search_type: str,
    month: str,
    order_by: str,
    order_descending: bool,
    limit: int,
    offset: int,
) -> Fragment:
    return [
        ("searchType", search_type),
        ("month", month),
        ("sorting", [
            ("orderBy", order_by),
            ("orderDescending", order_descending),
        ]),
        ("paging", [
            ("limit", limit),
            ("offset", offset),
        ]),
    ]


def validate_payment_profile_request(
    customer_id: int,
    profile_id: int,
    card_code: Optional[str],
    mode: ValidationMode,
) -> Fragment:
    return [
        ("customerProfileId", customer_id),
        ("customerPaymentProfileId", profile_id),
        ("cardCode", card_code),
        ("validationMode", mode),
    ]


def create_shipping_address_request(customer_id: int, address: Address) -> Fragment:
    return [("customerProfileId", customer_id), ("address", address.to_wire())]


def update_shipping_address_request(customer_id: int, address: Address) -> Fragment:
    return create_shipping_address_request(customer_id, address)


def shipping_address_request(customer_id: int, address_id: int) -> Fragment:
    """Body of the get and delete shipping address requests."""
    return [("customerProfileId", customer_id), ("customerAddressId", address_id)]


def create_subscription_request(subscription: Subscription) -> Fragment:
    return [("subscription", subscription.to_wire())]


def subscription_request(subscription_id: int) -> Fragment:
    """Body of the ARB get, status and cancel requests."""
    return [("subscriptionId", subscription_id)]


def create_transaction_request(transaction: Transaction) -> Fragment:
    return [("transactionRequest", transaction.to_wire())]
