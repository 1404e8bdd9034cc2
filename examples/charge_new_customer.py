"""
Minimal script that uses the public API to store a card and charge it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from typing import Iterable, Tuple

from authnet_cim import (
    Address,
    AuthNetError,
    Card,
    ConfigError,
    Customer,
    Transaction,
    TransactionType,
    create_gateway_client,
    load_gateway_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a customer profile with a card and charge it"
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AUTHNET_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--merchant-id", required=True, help="Your id for the customer")
    parser.add_argument("--email", required=True)
    parser.add_argument("--card-number", default="5424000000000015")
    parser.add_argument("--expiration-date", default="2030-12", help="YYYY-MM")
    parser.add_argument("--card-code", default="900")
    parser.add_argument("--amount", type=Decimal, default=Decimal("1.00"))
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep the customer profile instead of deleting it afterwards",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_gateway_config(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    logging.info("Using %s endpoint %s", config.environment.value, config.endpoint)

    try:
        customer = client.create_customer(
            Customer(merchant_id=args.merchant_id, email=args.email)
        )
        logging.info("Created customer profile %s", customer.profile_id)

        profile = client.create_individual_profile(
            customer.profile_id,
            Address(first_name="Test", last_name="Customer", zip="98004", country="US"),
            Card(args.card_number, args.expiration_date, args.card_code),
        )
        logging.info("Stored card as payment profile %s", profile.profile_id)

        charge = client.create_transaction(
            Transaction(
                TransactionType.AUTH_CAPTURE,
                amount=args.amount,
                customer_profile_id=customer.profile_id,
                payment_profile_id=profile.profile_id,
                card_code=args.card_code,
            )
        )
        logging.info(
            "Charged %s: transaction %s, auth code %s",
            charge.amount,
            charge.transaction_id,
            charge.auth_code,
        )

        if not args.keep:
            client.delete_customer(customer.profile_id)
            logging.info("Deleted customer profile %s", customer.profile_id)
    except AuthNetError as exc:
        logging.error("Gateway call failed: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
