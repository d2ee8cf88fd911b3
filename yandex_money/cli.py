"""
Command-line interface for a Yandex.Money wallet.

Without a token (neither ``TOKEN`` nor the token file) only ``login`` is
available; with one, the wallet commands are too.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import httpx
from dateutil import parser as dateparser
from dotenv import load_dotenv

from .api import Client
from .auth import UnauthorizedClient, extract_code
from .config import YandexMoneyConfig
from .debug import mask_value, set_debug
from .errors import YandexMoneyConfigError, YandexMoneySDKError
from .models import (
    AccessScope,
    AccountId,
    Card,
    Email,
    Net,
    OperationType,
    Phone,
    Secure3D,
    Total,
    Wallet,
)
from .resources import TestPaymentRequest
from .store import config_location, resolve_token, save_token
from .utils import positive_amount

logger = logging.getLogger("yandex_money.cli")

LOGIN_SCOPES = (AccessScope.ACCOUNT_INFO, AccessScope.OPERATION_HISTORY, AccessScope.PAYMENT_P2P)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def pretty(obj: Any) -> str:
    if hasattr(obj, "model_dump"):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, ensure_ascii=False, indent=2)


# ----------------------------- argument types -----------------------------

def _amount(value: str) -> Decimal:
    try:
        return positive_amount(value)
    except (ValueError, TypeError) as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _phone(value: str) -> Phone:
    try:
        return Phone.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _timestamp(value: str):
    try:
        return dateparser.isoparse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid timestamp {value!r}: {e}") from e


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid number {value!r}") from e
    if n < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return n


def _non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise argparse.ArgumentTypeError("must not be empty")
    return value


# ----------------------------- parser -----------------------------

def _add_login(sub, help_text: str) -> None:
    p = sub.add_parser("login", help=help_text)
    p.add_argument("--client-id", default=os.environ.get("CLIENT_ID"),
                   help="Application client_id (default: $CLIENT_ID)")
    p.add_argument("--client-redirect", default=os.environ.get("CLIENT_REDIRECT"),
                   help="Application redirect_uri (default: $CLIENT_REDIRECT)")
    p.add_argument("-n", "--do-not-store-on-disk", action="store_true",
                   help="Print the token instead of saving it to the config file")


def build_parser(authorized: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yandex-money",
        description="Yandex.Money wallet from the command line",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    parser.add_argument("--debug", action="store_true", help="Print sanitized HTTP debug output")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    if not authorized:
        _add_login(sub, "Authorize this client")
        return parser

    _add_login(sub, "Reauthorize this client")
    sub.add_parser("revoke", help="Revoke the current token")
    sub.add_parser("account-info", help="Show wallet status")

    p = sub.add_parser("operation-details", help="Show a single operation")
    p.add_argument("operation_id", type=_non_empty)

    p = sub.add_parser("request-transfer", help="Request a peer-to-peer transfer")
    to = p.add_mutually_exclusive_group(required=True)
    to.add_argument("--to-account", type=int, help="Recipient wallet number")
    to.add_argument("--to-email", help="Recipient e-mail")
    to.add_argument("--to-phone", type=_phone, help="Recipient phone, international form (+7...)")
    amount = p.add_mutually_exclusive_group(required=True)
    amount.add_argument("--amount-net", type=_amount, help="Amount charged to you")
    amount.add_argument("--amount-total", type=_amount, help="Amount the recipient receives")
    p.add_argument("--comment", help="Comment shown in your history")
    p.add_argument("--message", help="Message for the recipient")
    p.add_argument("--label", help="Label to find the payment by later")
    p.add_argument("--codepro", action="store_true", default=None, help="Protect with a code")
    p.add_argument("--hold-for-pickup", action="store_true", default=None,
                   help="Hold the transfer until the recipient opens a wallet")
    p.add_argument("--expire-period", type=_positive_int, help="Days the protection code is valid")
    p.add_argument("--test", action="store_true", help="Dry run: nothing is transferred")
    p.add_argument("--test-result", help="Outcome to simulate with --test (an API error code)")

    p = sub.add_parser("process-payment", help="Confirm a requested payment")
    p.add_argument("--request-id", required=True, type=_non_empty)
    p.add_argument("--money-source", required=True, type=_non_empty, help="'wallet' or a linked card id")
    p.add_argument("--csc", help="Card security code")
    p.add_argument("--ext-auth-success-uri", help="3-D Secure success page")
    p.add_argument("--ext-auth-fail-uri", help="3-D Secure failure page")

    p = sub.add_parser("operation-history", help="Show operation history")
    p.add_argument("--from", dest="from_", type=_timestamp, help="Start timestamp (RFC 3339)")
    p.add_argument("--till", type=_timestamp, help="End timestamp (RFC 3339)")
    p.add_argument("--detailed", action="store_true", help="Include operation details")
    p.add_argument("--label")
    p.add_argument("--type", dest="types", action="append", default=[],
                   choices=[t.value for t in OperationType])
    p.add_argument("--records", type=_positive_int, help="Page size (1-100)")
    return parser


# ----------------------------- commands -----------------------------

async def do_authorize(
    args: argparse.Namespace,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    input_fn: Callable[[str], str] = input,
    token_path: Optional[Path] = None,
) -> str:
    config = YandexMoneyConfig(client_id=args.client_id, redirect_uri=args.client_redirect)

    def callback(redirect_addr: str) -> str:
        print(f"Please open this page in your browser: {redirect_addr}")
        code = extract_code(input_fn("Copy and paste your redirect URI here: "))
        print(f"Extracted code: {mask_value(code)}")
        return code

    async with UnauthorizedClient(config, transport=transport) as client:
        token = await client.authorize(LOGIN_SCOPES, callback)

    if not args.do_not_store_on_disk:
        path = token_path or config_location()
        print(f"Saving token on disk to {path}")
        save_token(token, path)

    print(f"Your permanent token is {token!r}")
    return token


def _money_source(args: argparse.Namespace):
    if args.money_source == "wallet":
        return Wallet()
    secure3d = None
    if args.ext_auth_success_uri:
        secure3d = Secure3D(args.ext_auth_success_uri, args.ext_auth_fail_uri)
    return Card(args.money_source, secure3d=secure3d, csc=args.csc)


async def run_command(
    args: argparse.Namespace,
    token: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    logger.info("Using token %s", mask_value(token))
    async with Client(token, transport=transport) as client:
        if args.command == "revoke":
            await client.revoke_token()
            print("Token successfully revoked")

        elif args.command == "account-info":
            print(pretty(await client.account_info()))

        elif args.command == "operation-details":
            print(pretty(await client.operation_details(args.operation_id)))

        elif args.command == "request-transfer":
            if args.to_account is not None:
                to = AccountId(args.to_account)
            elif args.to_email is not None:
                to = Email(args.to_email)
            else:
                to = args.to_phone
            amount = Net(args.amount_net) if args.amount_net is not None else Total(args.amount_total)

            request = client.request_transfer(
                to,
                amount,
                comment=args.comment,
                message=args.message,
                label=args.label,
                codepro=args.codepro,
                hold_for_pickup=args.hold_for_pickup,
                expire_period=args.expire_period,
            )
            if args.test:
                request = TestPaymentRequest(request, test_result=args.test_result)
            print(pretty(await request.send()))

        elif args.command == "process-payment":
            print(pretty(await client.process_payment(args.request_id, _money_source(args))))

        elif args.command == "operation-history":
            history = client.operation_history(
                types=args.types,
                label=args.label,
                from_=args.from_,
                till=args.till,
                details=args.detailed,
                records=args.records,
            )
            async for op in history:
                print(pretty(op))


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    input_fn: Callable[[str], str] = input,
    token_path: Optional[Path] = None,
) -> int:
    try:
        token = resolve_token(path=token_path)
    except YandexMoneyConfigError as exc:
        logger.warning("Ignoring unreadable token file: %s", exc)
        token = None

    parser = build_parser(authorized=token is not None)
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    if args.debug:
        set_debug(True)

    if args.command == "login":
        if not args.client_id:
            parser.error("--client-id is required (or set CLIENT_ID)")
        if not args.client_redirect:
            parser.error("--client-redirect is required (or set CLIENT_REDIRECT)")
    elif args.command == "process-payment":
        if bool(args.ext_auth_success_uri) != bool(args.ext_auth_fail_uri):
            parser.error("--ext-auth-success-uri and --ext-auth-fail-uri go together")
        if args.money_source == "wallet" and (args.csc or args.ext_auth_success_uri):
            parser.error("--csc and --ext-auth-*-uri apply to card payments only")
    elif args.command == "request-transfer" and args.test_result and not args.test:
        parser.error("--test-result requires --test")

    try:
        if args.command == "login":
            asyncio.run(do_authorize(args, transport=transport, input_fn=input_fn, token_path=token_path))
        else:
            asyncio.run(run_command(args, token, transport=transport))
    except YandexMoneySDKError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    load_dotenv()
    sys.exit(run_cli())


__all__ = ["build_parser", "run_cli", "main"]
