"""
HTTP client for the Authorize.Net XML API.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional, Sequence

import requests

from .config import GatewayConfig
from .document import Node, find, first, int_value, to_bytes, value, values
from .enums import ProfileType, SubscriptionStatus
from .errors import DecodeError, ValidationError
from .models import (
    Address,
    Customer,
    PaymentMethod,
    PaymentProfile,
    Subscription,
    Transaction,
)
from .payloads import (
    build_envelope,
    create_customer_request,
    create_payment_profile_request,
    create_shipping_address_request,
    create_subscription_request,
    create_transaction_request,
    customer_ids_request,
    customer_request,
    payment_profile_list_request,
    payment_profile_request,
    shipping_address_request,
    subscription_request,
    update_customer_request,
    update_payment_profile_request,
    update_shipping_address_request,
    validate_payment_profile_request,
)
from .results import ConnectionFailure, Outcome, classify_response

__all__ = [
    "GatewayClient",
    "submit",
]

_HEADERS = {"Content-Type": "text/xml; charset=utf-8"}


def submit(
    session: requests.Session,
    config: GatewayConfig,
    operation: str,
    fragment: Sequence[Any],
) -> Outcome:
    """
    Send one request and classify whatever comes back.

    No retries are attempted; a request that obtains no response at all is
    reported as a :class:`ConnectionFailure`.
    """
    envelope = build_envelope(operation, config.credentials, fragment)
    body = to_bytes(envelope)
    logging.info("Submitting %s to %s", operation, config.endpoint)
    try:
        response = session.post(
            config.endpoint,
            data=body,
            headers=_HEADERS,
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as exc:
        logging.warning("Connection to %s failed: %s", config.endpoint, exc)
        return ConnectionFailure(cause=exc)
    return classify_response(response.status_code, response.headers, response.content)


def _required_int(document: Node, selector: str) -> int:
    found = int_value(document, selector)
    if found is None:
        raise DecodeError(f"Response is missing {selector}")
    return found


def _int_list(document: Node, selector: str) -> List[int]:
    try:
        return [int(raw.strip()) for raw in values(document, selector)]
    except ValueError as exc:
        raise DecodeError(f"Non-numeric id at {selector}: {exc}") from exc


def _required_node(document: Node, selector: str) -> Node:
    found = first(document, selector)
    if found is None:
        raise DecodeError(f"Response is missing {selector}")
    return found


class GatewayClient:
    """
    One method per supported API request.

    Every method performs a single blocking call. Failures surface as the
    exceptions raised by ``Outcome.unwrap()``; :meth:`submit` and
    :meth:`validate_payment_profile` hand back the outcome itself.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def submit(self, operation: str, fragment: Sequence[Any]) -> Outcome:
        return submit(self.session, self.config, operation, fragment)

    def request(self, operation: str, fragment: Sequence[Any]) -> Node:
        return self.submit(operation, fragment).unwrap()

    # Customer profiles

    def get_customer_ids(self) -> List[int]:
        doc = self.request("getCustomerProfileIdsRequest", customer_ids_request())
        return _int_list(doc, "//ids/numericString")

    def get_customer(self, profile_id: int) -> Customer:
        doc = self.request("getCustomerProfileRequest", customer_request(profile_id))
        return Customer.from_wire(_required_node(doc, "//profile"))

    def create_customer(self, customer: Customer) -> Customer:
        doc = self.request(
            "createCustomerProfileRequest",
            create_customer_request(customer, self.config.validation_mode),
        )
        profile_id = _required_int(doc, "//customerProfileId")
        payment_ids = _int_list(doc, "//customerPaymentProfileIdList/numericString")
        address_ids = _int_list(doc, "//customerShippingAddressIdList/numericString")
        # ids come back in the order the nested entries were sent
        return replace(
            customer,
            profile_id=profile_id,
            payment_profiles=tuple(
                replace(
                    p,
                    customer_id=profile_id,
                    profile_id=payment_ids[i] if i < len(payment_ids) else None,
                )
                for i, p in enumerate(customer.payment_profiles)
            ),
            shipping_addresses=tuple(
                replace(a, address_id=address_ids[i] if i < len(address_ids) else None)
                for i, a in enumerate(customer.shipping_addresses)
            ),
        )

    def update_customer(self, customer: Customer) -> Customer:
        if customer.profile_id is None:
            raise ValidationError("Only customers with a profile_id can be updated")
        self.request("updateCustomerProfileRequest", update_customer_request(customer))
        return customer

    def delete_customer(self, profile_id: int) -> None:
        self.request("deleteCustomerProfileRequest", customer_request(profile_id))

    # Payment profiles

    def create_payment_profile(self, profile: PaymentProfile) -> PaymentProfile:
        doc = self.request(
            "createCustomerPaymentProfileRequest",
            create_payment_profile_request(profile, self.config.validation_mode),
        )
        return replace(profile, profile_id=_required_int(doc, "//customerPaymentProfileId"))

    def create_individual_profile(
        self,
        customer_id: int,
        address: Optional[Address],
        payment: PaymentMethod,
    ) -> PaymentProfile:
        return self.create_payment_profile(
            PaymentProfile(customer_id, ProfileType.INDIVIDUAL, address, payment)
        )

    def create_business_profile(
        self,
        customer_id: int,
        address: Optional[Address],
        payment: PaymentMethod,
    ) -> PaymentProfile:
        return self.create_payment_profile(
            PaymentProfile(customer_id, ProfileType.BUSINESS, address, payment)
        )

    def get_payment_profile(
        self,
        customer_id: int,
        profile_id: int,
        *,
        unmask_expiration_date: bool = False,
    ) -> PaymentProfile:
        doc = self.request(
            "getCustomerPaymentProfileRequest",
            payment_profile_request(customer_id, profile_id, unmask_expiration_date),
        )
        return PaymentProfile.from_wire(_required_node(doc, "//paymentProfile"), customer_id)

    def list_payment_profiles(
        self,
        month: str,
        *,
        search_type: str = "cardsExpiringInMonth",
        order_by: str = "id",
        order_descending: bool = False,
        limit: int = 10,
        offset: int = 1,
    ) -> List[PaymentProfile]:
        doc = self.request(
            "getCustomerPaymentProfileListRequest",
            payment_profile_list_request(
                search_type, month, order_by, order_descending, limit, offset
            ),
        )
        return [PaymentProfile.from_wire(p) for p in find(doc, "//paymentProfiles/paymentProfile")]

    def update_payment_profile(self, profile: PaymentProfile) -> PaymentProfile:
        if profile.customer_id is None or profile.profile_id is None:
            raise ValidationError("Only stored payment profiles can be updated")
        self.request(
            "updateCustomerPaymentProfileRequest",
            update_payment_profile_request(profile, self.config.validation_mode),
        )
        return profile

    def delete_payment_profile(self, customer_id: int, profile_id: int) -> None:
        self.request(
            "deleteCustomerPaymentProfileRequest",
            payment_profile_request(customer_id, profile_id),
        )

    def validate_payment_profile(
        self,
        customer_id: int,
        profile_id: int,
        card_code: Optional[str] = None,
    ) -> Outcome:
        """
        Ask the gateway to run a validation transaction against a profile.

        The outcome is returned rather than raised so callers can inspect
        ``outcome.ok`` and, on failure, the reason.
        """
        return self.submit(
            "validateCustomerPaymentProfileRequest",
            validate_payment_profile_request(
                customer_id, profile_id, card_code, self.config.validation_mode
            ),
        )

    # Shipping addresses

    def create_shipping_address(self, customer_id: int, address: Address) -> Address:
        doc = self.request(
            "createCustomerShippingAddressRequest",
            create_shipping_address_request(customer_id, address),
        )
        return replace(address, address_id=_required_int(doc, "//customerAddressId"))

    def get_shipping_address(self, customer_id: int, address_id: int) -> Address:
        doc = self.request(
            "getCustomerShippingAddressRequest",
            shipping_address_request(customer_id, address_id),
        )
        return Address.from_wire(_required_node(doc, "//address"))

    def update_shipping_address(self, customer_id: int, address: Address) -> Address:
        if address.address_id is None:
            raise ValidationError("Only stored shipping addresses can be updated")
        self.request(
            "updateCustomerShippingAddressRequest",
            update_shipping_address_request(customer_id, address),
        )
        return address

    def delete_shipping_address(self, customer_id: int, address_id: int) -> None:
        self.request(
            "deleteCustomerShippingAddressRequest",
            shipping_address_request(customer_id, address_id),
        )

    # Recurring billing

    def create_subscription(self, subscription: Subscription) -> Subscription:
        doc = self.request("ARBCreateSubscriptionRequest", create_subscription_request(subscription))
        return replace(subscription, subscription_id=_required_int(doc, "//subscriptionId"))

    def get_subscription(self, subscription_id: int) -> Subscription:
        doc = self.request("ARBGetSubscriptionRequest", subscription_request(subscription_id))
        return Subscription.from_wire(_required_node(doc, "//subscription"), subscription_id)

    def get_subscription_status(self, subscription_id: int) -> SubscriptionStatus:
        doc = self.request(
            "ARBGetSubscriptionStatusRequest", subscription_request(subscription_id)
        )
        return SubscriptionStatus.from_wire(value(doc, "//status"))

    def cancel_subscription(self, subscription_id: int) -> None:
        self.request("ARBCancelSubscriptionRequest", subscription_request(subscription_id))

    # Transactions

    def create_transaction(self, transaction: Transaction) -> Transaction:
        doc = self.request("createTransactionRequest", create_transaction_request(transaction))
        return transaction.with_response(_required_node(doc, "//transactionResponse"))
