"""
Closed value sets and their wire representation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from .errors import DecodeError, ValidationError

__all__ = [
    "BankAccountType",
    "EcheckType",
    "IntervalUnit",
    "PaymentKind",
    "ProfileType",
    "SubscriptionStatus",
    "TransactionType",
    "ValidationMode",
    "WireEnum",
]


class WireEnum(str, Enum):
    """
    Base class for enums whose values are the exact strings used on the wire.

    Members can be referred to symbolically by their name in any case
    (``"business_checking"``) or by the wire string itself.
    """

    @classmethod
    def coerce(cls, value: Any, field_name: Optional[str] = None) -> "WireEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls.__members__[key]
            for member in cls:
                if member.value == value:
                    return member
        name = field_name or cls.__name__
        choices = ", ".join(member.name.lower() for member in cls)
        raise ValidationError(
            f"{name} must be one of {choices}, got {value!r}", field=field_name
        )

    @classmethod
    def from_wire(cls, text: Optional[str]) -> "WireEnum":
        for member in cls:
            if member.value == text:
                return member
        raise DecodeError(f"Unrecognized {cls.__name__} value on the wire: {text!r}")

    @property
    def wire(self) -> str:
        return self.value


class ProfileType(WireEnum):
    INDIVIDUAL = "individual"
    BUSINESS = "business"


class BankAccountType(WireEnum):
    CHECKING = "checking"
    SAVINGS = "savings"
    BUSINESS_CHECKING = "businessChecking"


class EcheckType(WireEnum):
    CCD = "CCD"
    PPD = "PPD"
    TEL = "TEL"
    WEB = "WEB"
    ARC = "ARC"
    BOC = "BOC"
    POP = "POP"


class ValidationMode(WireEnum):
    """See "The validationMode Parameter" in the CIM guide."""

    LIVE = "liveMode"
    TEST = "testMode"
    NONE = "none"


class PaymentKind(WireEnum):
    """Tag of the payment method variant; the value is the marker element."""

    CREDIT_CARD = "creditCard"
    BANK_ACCOUNT = "bankAccount"


class IntervalUnit(WireEnum):
    DAYS = "days"
    MONTHS = "months"


class SubscriptionStatus(WireEnum):
    ACTIVE = "active"
    EXPIRED = "expired"
    SUSPENDED = "suspended"
    CANCELED = "canceled"
    TERMINATED = "terminated"


class TransactionType(WireEnum):
    AUTH_CAPTURE = "authCaptureTransaction"
    AUTH_ONLY = "authOnlyTransaction"
    PRIOR_AUTH_CAPTURE = "priorAuthCaptureTransaction"
    CAPTURE_ONLY = "captureOnlyTransaction"
    REFUND = "refundTransaction"
    VOID = "voidTransaction"
