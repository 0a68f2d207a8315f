"""
Command-line interface for issuing signed Amazon Pay API calls.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Optional, Sequence, Tuple

import requests

from .api import create_client
from .core.config import ConfigurationError, load_client_config
from .core.constants import METHOD_TYPES
from .core.signing import SigningError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amazon-pay-api",
        description="Send a single signed request to the Amazon Pay API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AMAZON_PAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "method",
        nargs="?",
        type=str.upper,
        choices=METHOD_TYPES,
        help="HTTP method of the API call",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Resource path relative to the versioned base URL, e.g. charges/S01-123",
    )
    parser.add_argument(
        "--payload",
        default="",
        help="Raw JSON request body",
    )
    parser.add_argument(
        "--query",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Query parameter to append (repeatable)",
    )
    parser.add_argument(
        "--header",
        action="append",
        type=_key_value,
        metavar="NAME=VALUE",
        default=None,
        help="Extra request header, e.g. x-amz-pay-idempotency-key=... (repeatable)",
    )
    parser.add_argument(
        "--button-payload",
        metavar="JSON",
        help="Print the signature for a checkout button payload and exit",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())

    if args.button_payload is None and (args.method is None or args.path is None):
        parser.error("method and path are required unless --button-payload is given")

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
        client = create_client(config=config)
    except (ConfigurationError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.button_payload is not None:
        try:
            print(client.generate_button_signature(args.button_payload))
        except SigningError as exc:
            logging.error("Unable to sign button payload: %s", exc)
            return 1
        return 0

    try:
        response = client.api_call(
            args.path,
            args.method,
            payload=args.payload,
            headers=_collect_pairs(args.header or ()),
            query_params=_collect_pairs(args.query or ()),
        )
    except (SigningError, requests.RequestException) as exc:
        logging.error("Request failed: %s", exc)
        return 1

    return _handle_response(response)


def _handle_response(response: requests.Response) -> int:
    try:
        body = json.dumps(response.json(), indent=2)
    except ValueError:
        body = response.text

    print(f"HTTP {response.status_code}")
    if body:
        print(body)

    if not 200 <= response.status_code < 300:
        logging.error("Amazon Pay responded with %s", response.status_code)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(run_cli(argv))
