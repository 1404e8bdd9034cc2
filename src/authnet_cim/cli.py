"""
Command-line interface for exercising the Authorize.Net profile APIs.
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Iterable, Sequence, Tuple

import requests

from .api import ConfigError, GatewayClient, create_gateway_client, load_gateway_config
from .core.errors import AuthNetError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authnet-cim",
        description="Inspect and manage Authorize.Net customer profiles",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AUTHNET_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("customer-ids", help="List every customer profile id")

    customer = commands.add_parser("customer", help="Show a customer profile")
    customer.add_argument("profile_id", type=int)

    delete_customer = commands.add_parser("delete-customer", help="Delete a customer profile")
    delete_customer.add_argument("profile_id", type=int)

    payment_profile = commands.add_parser("payment-profile", help="Show a payment profile")
    payment_profile.add_argument("customer_id", type=int)
    payment_profile.add_argument("profile_id", type=int)
    payment_profile.add_argument(
        "--unmask",
        action="store_true",
        help="Ask for the unmasked expiration date",
    )

    validate = commands.add_parser(
        "validate-profile", help="Run a validation transaction against a payment profile"
    )
    validate.add_argument("customer_id", type=int)
    validate.add_argument("profile_id", type=int)
    validate.add_argument("--card-code", default=None)

    status = commands.add_parser("subscription-status", help="Show a subscription's status")
    status.add_argument("subscription_id", type=int)

    cancel = commands.add_parser("cancel-subscription", help="Cancel a subscription")
    cancel.add_argument("subscription_id", type=int)
    return parser


def _customer_ids(client: GatewayClient, args: argparse.Namespace) -> int:
    ids = client.get_customer_ids()
    logging.info("Found %d customer profiles: %s", len(ids), ", ".join(map(str, ids)))
    return 0


def _customer(client: GatewayClient, args: argparse.Namespace) -> int:
    customer = client.get_customer(args.profile_id)
    logging.info(
        "Customer %s (%s) <%s>: %d payment profiles, %d shipping addresses",
        customer.profile_id,
        customer.merchant_id,
        customer.email,
        len(customer.payment_profiles),
        len(customer.shipping_addresses),
    )
    return 0


def _delete_customer(client: GatewayClient, args: argparse.Namespace) -> int:
    client.delete_customer(args.profile_id)
    logging.info("Deleted customer profile %s", args.profile_id)
    return 0


def _payment_profile(client: GatewayClient, args: argparse.Namespace) -> int:
    profile = client.get_payment_profile(
        args.customer_id, args.profile_id, unmask_expiration_date=args.unmask
    )
    payment = "none" if profile.payment is None else profile.payment.kind.wire
    logging.info(
        "Payment profile %s of customer %s: type=%s payment=%s",
        profile.profile_id,
        profile.customer_id,
        None if profile.profile_type is None else profile.profile_type.wire,
        payment,
    )
    return 0


def _validate_profile(client: GatewayClient, args: argparse.Namespace) -> int:
    outcome = client.validate_payment_profile(
        args.customer_id, args.profile_id, args.card_code
    )
    if outcome.ok:
        logging.info("Payment profile %s is valid", args.profile_id)
        return 0
    logging.error("Payment profile %s failed validation: %s", args.profile_id, outcome)
    return 1


def _subscription_status(client: GatewayClient, args: argparse.Namespace) -> int:
    status = client.get_subscription_status(args.subscription_id)
    logging.info("Subscription %s is %s", args.subscription_id, status.wire)
    return 0


def _cancel_subscription(client: GatewayClient, args: argparse.Namespace) -> int:
    client.cancel_subscription(args.subscription_id)
    logging.info("Cancelled subscription %s", args.subscription_id)
    return 0


_COMMANDS: Dict[str, Callable[[GatewayClient, argparse.Namespace], int]] = {
    "customer-ids": _customer_ids,
    "customer": _customer,
    "delete-customer": _delete_customer,
    "payment-profile": _payment_profile,
    "validate-profile": _validate_profile,
    "subscription-status": _subscription_status,
    "cancel-subscription": _cancel_subscription,
}


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config, session=requests.Session())

    try:
        return _COMMANDS[args.command](client, args)
    except AuthNetError as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
