from __future__ import annotations
import argparse, json
from typing import Any
from yandex_money import Client, YandexMoneyConfig
from yandex_money.debug import dprint

def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--base-url", default=None, help="Override YANDEX_MONEY_BASE_URL")
    p.add_argument("--token", default=None, help="Override TOKEN")
    p.add_argument("--timeout", type=float, default=None, help="HTTP timeout seconds")
    p.add_argument("--debug", type=int, default=None, help="Set debug 1/0 (overrides YANDEX_MONEY_DEBUG)")

def make_client_from_args(args) -> Client:
    cfg = YandexMoneyConfig(
        token=args.token,
        base_url=args.base_url,
        timeout=args.timeout,
        debug=(None if args.debug is None else bool(args.debug)),
    )
    dprint("[COMMON] Config", cfg.masked())
    return Client(config=cfg)

def pretty(obj: Any) -> str:
    if hasattr(obj, "model_dump"):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, ensure_ascii=False, indent=2)
