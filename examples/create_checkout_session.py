"""
Minimal script that uses the public API to create a checkout session.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid

import requests

from amazon_pay_api import ConfigurationError, SigningError, create_client, load_client_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a checkout session using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AMAZON_PAY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--store-id",
        required=True,
        help="Store id of the merchant's Amazon Pay integration",
    )
    parser.add_argument(
        "--review-return-url",
        default="https://example.com/review",
        help="URL the buyer is redirected to after selecting a payment method",
    )
    parser.add_argument(
        "--region",
        help="Override AMAZON_PAY_REGION (na, eu or jp)",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Use the sandbox environment when the key id does not say otherwise",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            region=args.region,
            sandbox=True if args.sandbox else None,
        )
        client = create_client(config=config)
    except (ConfigurationError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    logging.info("Creating checkout session against %s", client.base_url)
    payload = {
        "webCheckoutDetails": {"checkoutReviewReturnUrl": args.review_return_url},
        "storeId": args.store_id,
    }

    try:
        response = client.create_checkout_session(
            payload,
            headers={"x-amz-pay-idempotency-key": uuid.uuid4().hex},
        )
    except (SigningError, requests.RequestException) as exc:
        logging.error("Checkout session request failed: %s", exc)
        return 1

    if response.status_code != 201:
        logging.error("Checkout session rejected (%s): %s", response.status_code, response.text)
        return 1

    session = response.json()
    logging.info("Created checkout session %s", session.get("checkoutSessionId"))
    print(json.dumps(session, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
