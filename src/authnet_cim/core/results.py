"""
Outcome values produced by submitting a request to the gateway.

Exactly one variant describes each call. Callers either branch on the type
(or on ``ok``) or call ``unwrap()`` to get the response document and let the
matching exception propagate.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

from .document import Node, parse, value, values
from .errors import (
    DecodeError,
    GatewayConnectionError,
    OperationError,
    RequestError,
)

__all__ = [
    "ConnectionFailure",
    "DecodeFailure",
    "OperationFailure",
    "Outcome",
    "RequestFailure",
    "Success",
    "classify_response",
]


@dataclass(frozen=True)
class Success:
    document: Node

    ok = True

    def unwrap(self) -> Node:
        return self.document


@dataclass(frozen=True)
class OperationFailure:
    messages: Tuple[Tuple[str, str], ...]

    ok = False

    def unwrap(self) -> Node:
        raise OperationError(self.messages)


@dataclass(frozen=True)
class RequestFailure:
    status: int
    headers: Dict[str, str] = field(repr=False)
    body: bytes = field(repr=False)

    ok = False

    def unwrap(self) -> Node:
        raise RequestError(self.status, self.headers, self.body)


@dataclass(frozen=True)
class ConnectionFailure:
    cause: Any

    ok = False

    def unwrap(self) -> Node:
        raise GatewayConnectionError(self.cause) from (
            self.cause if isinstance(self.cause, BaseException) else None
        )


@dataclass(frozen=True)
class DecodeFailure:
    """A BOM-prefixed response that could not be read as an API envelope."""

    body: bytes = field(repr=False)
    reason: str

    ok = False

    def unwrap(self) -> Node:
        raise DecodeError(self.reason)


Outcome = Union[Success, OperationFailure, RequestFailure, ConnectionFailure, DecodeFailure]


def classify_response(status: int, headers: Mapping[str, str], body: bytes) -> Outcome:
    """
    Classify a raw HTTP response.

    Only a 200 whose body starts with the UTF-8 byte-order mark is treated as
    an API envelope; anything else is returned untouched as a
    :class:`RequestFailure`.
    """
    if status != 200 or not body.startswith(codecs.BOM_UTF8):
        logging.warning("Unexpected gateway response: HTTP %s", status)
        return RequestFailure(status=status, headers=dict(headers), body=body)

    try:
        document = parse(body[len(codecs.BOM_UTF8):])
    except DecodeError as exc:
        return DecodeFailure(body=body, reason=str(exc))

    result_code = value(document, "//messages/resultCode")
    if result_code is None:
        return DecodeFailure(body=body, reason="Response has no messages/resultCode")

    if result_code == "Error":
        messages = tuple(zip(values(document, "//code"), values(document, "//text")))
        logging.warning("Gateway rejected %s: %s", document.name, messages)
        return OperationFailure(messages=messages)

    return Success(document=document)
