"""
Domain entities and their mapping to and from the gateway document tree.

Every entity is an immutable value. ``to_wire()`` returns the content of the
entity's element as a node-spec (the caller picks the element name) and
``from_wire()`` reads it back from that element.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from .document import Node, find, first, int_value, value
from .enums import (
    BankAccountType,
    EcheckType,
    IntervalUnit,
    PaymentKind,
    ProfileType,
    SubscriptionStatus,
    TransactionType,
)
from .errors import DecodeError, ValidationError

__all__ = [
    "Address",
    "BankAccount",
    "Card",
    "Customer",
    "PaymentMethod",
    "PaymentProfile",
    "Subscription",
    "Transaction",
    "payment_from_wire",
    "payment_to_wire",
]

NodeSpec = List[Tuple[str, Any]]


def _set(instance: Any, name: str, new_value: Any) -> None:
    object.__setattr__(instance, name, new_value)


def _to_decimal(raw: Any, field_name: str) -> Decimal:
    try:
        amount = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except InvalidOperation as exc:
        raise ValidationError(
            f"{field_name} must be a decimal amount, got {raw!r}", field=field_name
        ) from exc
    if not amount.is_finite():
        raise ValidationError(
            f"{field_name} must be a finite amount, got {raw!r}", field=field_name
        )
    return amount


def _decimal_value(node: Node, selector: str) -> Optional[Decimal]:
    raw = value(node, selector)
    if raw is None:
        return None
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise DecodeError(f"Expected an amount at {selector}, got {raw!r}") from exc


def _date_value(node: Node, selector: str) -> Optional[date]:
    raw = value(node, selector)
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise DecodeError(f"Expected a date at {selector}, got {raw!r}") from exc


def _enum_value(enum_cls: Any, node: Node, selector: str) -> Any:
    raw = value(node, selector)
    return None if raw is None else enum_cls.from_wire(raw)


def _required(reader: Callable[[Node, str], Any], node: Node, selector: str) -> Any:
    found = reader(node, selector)
    if found is None:
        raise DecodeError(f"{node.name} is missing {selector}")
    return found


@dataclass(frozen=True)
class Address:
    """Billing or shipping address (``customerAddressType``)."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    address_id: Optional[int] = None

    def to_wire(self) -> NodeSpec:
        return [
            ("firstName", self.first_name),
            ("lastName", self.last_name),
            ("company", self.company),
            ("address", self.street),
            ("city", self.city),
            ("state", self.state),
            ("zip", self.zip),
            ("country", self.country),
            ("phoneNumber", self.phone),
            ("faxNumber", self.fax),
            ("customerAddressId", self.address_id),
        ]

    @classmethod
    def from_wire(cls, node: Node) -> "Address":
        return cls(
            first_name=value(node, "firstName"),
            last_name=value(node, "lastName"),
            company=value(node, "company"),
            street=value(node, "address"),
            city=value(node, "city"),
            state=value(node, "state"),
            zip=value(node, "zip"),
            country=value(node, "country"),
            phone=value(node, "phoneNumber"),
            fax=value(node, "faxNumber"),
            address_id=int_value(node, "customerAddressId"),
        )


@dataclass(frozen=True)
class Card:
    """Credit card payment method. ``card_type`` is only reported by the gateway."""

    kind: ClassVar[PaymentKind] = PaymentKind.CREDIT_CARD

    number: str
    expiration_date: str
    code: Optional[str] = None
    card_type: Optional[str] = None

    def to_wire(self) -> NodeSpec:
        return [
            ("cardNumber", self.number),
            ("expirationDate", self.expiration_date),
            ("cardCode", self.code),
        ]

    @classmethod
    def from_wire(cls, node: Node) -> "Card":
        return cls(
            number=value(node, "cardNumber"),
            expiration_date=value(node, "expirationDate"),
            code=value(node, "cardCode"),
            card_type=value(node, "cardType"),
        )


@dataclass(frozen=True)
class BankAccount:
    """eCheck.Net bank account payment method."""

    kind: ClassVar[PaymentKind] = PaymentKind.BANK_ACCOUNT

    account_type: BankAccountType
    routing_number: str
    account_number: str
    name_on_account: str
    echeck_type: EcheckType
    bank_name: Optional[str] = None

    def __post_init__(self) -> None:
        _set(self, "account_type", BankAccountType.coerce(self.account_type, "account_type"))
        _set(self, "echeck_type", EcheckType.coerce(self.echeck_type, "echeck_type"))

    @classmethod
    def checking(
        cls,
        bank_name: Optional[str],
        routing_number: str,
        account_number: str,
        name_on_account: str,
        echeck_type: Union[EcheckType, str],
    ) -> "BankAccount":
        return cls(
            BankAccountType.CHECKING, routing_number, account_number,
            name_on_account, echeck_type, bank_name,
        )

    @classmethod
    def savings(
        cls,
        bank_name: Optional[str],
        routing_number: str,
        account_number: str,
        name_on_account: str,
        echeck_type: Union[EcheckType, str],
    ) -> "BankAccount":
        return cls(
            BankAccountType.SAVINGS, routing_number, account_number,
            name_on_account, echeck_type, bank_name,
        )

    @classmethod
    def business_checking(
        cls,
        bank_name: Optional[str],
        routing_number: str,
        account_number: str,
        name_on_account: str,
        echeck_type: Union[EcheckType, str],
    ) -> "BankAccount":
        return cls(
            BankAccountType.BUSINESS_CHECKING, routing_number, account_number,
            name_on_account, echeck_type, bank_name,
        )

    def to_wire(self) -> NodeSpec:
        return [
            ("accountType", self.account_type),
            ("routingNumber", self.routing_number),
            ("accountNumber", self.account_number),
            ("nameOnAccount", self.name_on_account),
            ("echeckType", self.echeck_type),
            ("bankName", self.bank_name),
        ]

    @classmethod
    def from_wire(cls, node: Node) -> "BankAccount":
        return cls(
            account_type=BankAccountType.from_wire(value(node, "accountType")),
            routing_number=value(node, "routingNumber"),
            account_number=value(node, "accountNumber"),
            name_on_account=value(node, "nameOnAccount"),
            echeck_type=EcheckType.from_wire(value(node, "echeckType")),
            bank_name=value(node, "bankName"),
        )


PaymentMethod = Union[Card, BankAccount]

_PAYMENT_READERS: Dict[PaymentKind, Callable[[Node], PaymentMethod]] = {
    PaymentKind.CREDIT_CARD: Card.from_wire,
    PaymentKind.BANK_ACCOUNT: BankAccount.from_wire,
}


def _payment_kind(method: Any) -> PaymentKind:
    kind = getattr(type(method), "kind", None)
    if kind not in _PAYMENT_READERS or not isinstance(method, (Card, BankAccount)):
        raise ValidationError(
            "Only Card and BankAccount are supported as a payment method, "
            f"got {type(method).__name__}",
            field="payment",
        )
    return kind


def payment_to_wire(method: PaymentMethod) -> NodeSpec:
    """Content of a ``payment`` element holding ``method``."""
    kind = _payment_kind(method)
    return [(kind.wire, method.to_wire())]


def payment_from_wire(node: Node) -> PaymentMethod:
    """Decode the variant held by a ``payment`` element using its marker child."""
    markers = node.elements()
    if len(markers) != 1:
        raise DecodeError(
            f"Expected exactly one payment method marker, found {len(markers)}"
        )
    marker = markers[0]
    kind = PaymentKind.from_wire(marker.name)
    return _PAYMENT_READERS[kind](marker)


@dataclass(frozen=True)
class PaymentProfile:
    """A stored payment method attached to a customer profile."""

    customer_id: Optional[int] = None
    profile_type: Optional[ProfileType] = None
    address: Optional[Address] = None
    payment: Optional[PaymentMethod] = None
    profile_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.profile_type is not None:
            _set(self, "profile_type", ProfileType.coerce(self.profile_type, "profile_type"))
        if self.payment is not None:
            _payment_kind(self.payment)

    def to_wire(self) -> NodeSpec:
        return [
            ("customerType", self.profile_type),
            ("billTo", None if self.address is None else self.address.to_wire()),
            ("payment", None if self.payment is None else payment_to_wire(self.payment)),
            ("customerPaymentProfileId", self.profile_id),
        ]

    @classmethod
    def from_wire(cls, node: Node, customer_id: Optional[int] = None) -> "PaymentProfile":
        if customer_id is None:
            customer_id = int_value(node, "customerProfileId")
        bill_to = first(node, "billTo")
        payment = first(node, "payment")
        return cls(
            customer_id=customer_id,
            profile_type=_enum_value(ProfileType, node, "customerType"),
            address=None if bill_to is None else Address.from_wire(bill_to),
            payment=None if payment is None else payment_from_wire(payment),
            profile_id=int_value(node, "customerPaymentProfileId"),
        )


@dataclass(frozen=True)
class Customer:
    """A customer profile with its nested payment profiles and shipping addresses."""

    merchant_id: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    profile_id: Optional[int] = None
    payment_profiles: Tuple[PaymentProfile, ...] = ()
    shipping_addresses: Tuple[Address, ...] = ()

    def __post_init__(self) -> None:
        _set(self, "payment_profiles", tuple(self.payment_profiles))
        _set(self, "shipping_addresses", tuple(self.shipping_addresses))

    def to_wire(self, *, nested: bool = True) -> NodeSpec:
        """
        ``nested=False`` leaves out payment profiles and shipping addresses,
        which the update request does not accept.
        """
        spec: NodeSpec = [
            ("merchantCustomerId", self.merchant_id),
            ("description", self.description),
            ("email", self.email),
        ]
        if nested:
            spec.extend(("paymentProfiles", p.to_wire()) for p in self.payment_profiles)
            spec.extend(("shipToList", a.to_wire()) for a in self.shipping_addresses)
        spec.append(("customerProfileId", self.profile_id))
        return spec

    @classmethod
    def from_wire(cls, node: Node) -> "Customer":
        profile_id = int_value(node, "customerProfileId")
        return cls(
            merchant_id=value(node, "merchantCustomerId"),
            description=value(node, "description"),
            email=value(node, "email"),
            profile_id=profile_id,
            payment_profiles=tuple(
                PaymentProfile.from_wire(p, profile_id) for p in find(node, "paymentProfiles")
            ),
            shipping_addresses=tuple(Address.from_wire(a) for a in find(node, "shipToList")),
        )


@dataclass(frozen=True)
class Subscription:
    """
    A recurring billing subscription charged against a stored payment profile.
    """

    name: Optional[str]
    amount: Decimal
    interval_length: int
    interval_unit: IntervalUnit
    start_date: date
    total_occurrences: int = 9999
    trial_occurrences: Optional[int] = None
    trial_amount: Optional[Decimal] = None
    customer_profile_id: Optional[int] = None
    payment_profile_id: Optional[int] = None
    subscription_id: Optional[int] = None
    status: Optional[SubscriptionStatus] = None

    def __post_init__(self) -> None:
        _set(self, "amount", _to_decimal(self.amount, "amount"))
        if self.trial_amount is not None:
            _set(self, "trial_amount", _to_decimal(self.trial_amount, "trial_amount"))
        _set(self, "interval_unit", IntervalUnit.coerce(self.interval_unit, "interval_unit"))
        if self.status is not None:
            _set(self, "status", SubscriptionStatus.coerce(self.status, "status"))

    def to_wire(self) -> NodeSpec:
        return [
            ("name", self.name),
            ("paymentSchedule", [
                ("interval", [
                    ("length", self.interval_length),
                    ("unit", self.interval_unit),
                ]),
                ("startDate", self.start_date),
                ("totalOccurrences", self.total_occurrences),
                ("trialOccurrences", self.trial_occurrences),
            ]),
            ("amount", self.amount),
            ("trialAmount", self.trial_amount),
            ("profile", None if self.customer_profile_id is None else [
                ("customerProfileId", self.customer_profile_id),
                ("customerPaymentProfileId", self.payment_profile_id),
            ]),
        ]

    @classmethod
    def from_wire(cls, node: Node, subscription_id: Optional[int] = None) -> "Subscription":
        payment_profile_id = int_value(node, "profile/customerPaymentProfileId")
        if payment_profile_id is None:
            # ARBGetSubscription nests the payment profile one level deeper
            payment_profile_id = int_value(
                node, "profile/paymentProfile/customerPaymentProfileId"
            )
        return cls(
            name=value(node, "name"),
            amount=_required(_decimal_value, node, "amount"),
            interval_length=_required(int_value, node, "paymentSchedule/interval/length"),
            interval_unit=IntervalUnit.from_wire(value(node, "paymentSchedule/interval/unit")),
            start_date=_required(_date_value, node, "paymentSchedule/startDate"),
            total_occurrences=_required(int_value, node, "paymentSchedule/totalOccurrences"),
            trial_occurrences=int_value(node, "paymentSchedule/trialOccurrences"),
            trial_amount=_decimal_value(node, "trialAmount"),
            customer_profile_id=int_value(node, "profile/customerProfileId"),
            payment_profile_id=payment_profile_id,
            subscription_id=subscription_id,
            status=_enum_value(SubscriptionStatus, node, "status"),
        )


_NEEDS_AMOUNT = {
    TransactionType.AUTH_CAPTURE,
    TransactionType.AUTH_ONLY,
    TransactionType.CAPTURE_ONLY,
    TransactionType.REFUND,
}
_NEEDS_PROFILE = {
    TransactionType.AUTH_CAPTURE,
    TransactionType.AUTH_ONLY,
    TransactionType.CAPTURE_ONLY,
}
_NEEDS_REFERENCE = {
    TransactionType.PRIOR_AUTH_CAPTURE,
    TransactionType.REFUND,
    TransactionType.VOID,
}


@dataclass(frozen=True)
class Transaction:
    """
    A payment transaction charged against a customer payment profile.

    The ``transaction_id``, ``response_code``, ``auth_code`` and
    ``account_number`` fields are filled from the gateway's
    ``transactionResponse``.
    """

    transaction_type: TransactionType
    amount: Optional[Decimal] = None
    customer_profile_id: Optional[int] = None
    payment_profile_id: Optional[int] = None
    card_code: Optional[str] = None
    ref_transaction_id: Optional[str] = None
    invoice_number: Optional[str] = None
    description: Optional[str] = None
    transaction_id: Optional[str] = None
    response_code: Optional[str] = None
    auth_code: Optional[str] = None
    account_number: Optional[str] = None

    def __post_init__(self) -> None:
        kind = TransactionType.coerce(self.transaction_type, "transaction_type")
        _set(self, "transaction_type", kind)
        if self.amount is not None:
            _set(self, "amount", _to_decimal(self.amount, "amount"))
        elif kind in _NEEDS_AMOUNT:
            raise ValidationError(f"{kind.wire} requires an amount", field="amount")
        if kind in _NEEDS_PROFILE and (
            self.customer_profile_id is None or self.payment_profile_id is None
        ):
            raise ValidationError(
                f"{kind.wire} requires a customer and payment profile id",
                field="payment_profile_id",
            )
        if kind in _NEEDS_REFERENCE and self.ref_transaction_id is None:
            raise ValidationError(
                f"{kind.wire} requires ref_transaction_id", field="ref_transaction_id"
            )

    def to_wire(self) -> NodeSpec:
        profile = None
        if self.customer_profile_id is not None:
            profile = [
                ("customerProfileId", self.customer_profile_id),
                ("paymentProfile", None if self.payment_profile_id is None else [
                    ("paymentProfileId", self.payment_profile_id),
                    ("cardCode", self.card_code),
                ]),
            ]
        order = None
        if self.invoice_number is not None or self.description is not None:
            order = [
                ("invoiceNumber", self.invoice_number),
                ("description", self.description),
            ]
        return [
            ("transactionType", self.transaction_type),
            ("amount", self.amount),
            ("profile", profile),
            ("refTransId", self.ref_transaction_id),
            ("order", order),
        ]

    def with_response(self, response: Node) -> "Transaction":
        """Copy of this transaction carrying the fields of a ``transactionResponse``."""
        return replace(
            self,
            transaction_id=value(response, "transId"),
            response_code=value(response, "responseCode"),
            auth_code=value(response, "authCode"),
            account_number=value(response, "accountNumber"),
        )

    @classmethod
    def from_wire(cls, node: Node, response: Optional[Node] = None) -> "Transaction":
        transaction = cls(
            transaction_type=TransactionType.from_wire(value(node, "transactionType")),
            amount=_decimal_value(node, "amount"),
            customer_profile_id=int_value(node, "profile/customerProfileId"),
            payment_profile_id=int_value(node, "profile/paymentProfile/paymentProfileId"),
            card_code=value(node, "profile/paymentProfile/cardCode"),
            ref_transaction_id=value(node, "refTransId"),
            invoice_number=value(node, "order/invoiceNumber"),
            description=value(node, "order/description"),
        )
        if response is not None:
            transaction = transaction.with_response(response)
        return transaction
