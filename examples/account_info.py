from __future__ import annotations
import argparse, asyncio
from _common import add_common_args, make_client_from_args, pretty
from yandex_money.errors import YandexMoneyAPIError, YandexMoneyHTTPError

async def run(args) -> None:
    async with make_client_from_args(args) as client:
        try:
            info = await client.account_info()
            print(pretty(info))
        except YandexMoneyHTTPError as e:
            print(f"[ACCOUNT] HTTP {e.status}")
            print(e.body)
        except YandexMoneyAPIError as e:
            print(f"[ACCOUNT] API error: {e.description}")

def main():
    ap = argparse.ArgumentParser(description="Show wallet balance and status")
    add_common_args(ap)
    args = ap.parse_args()
    asyncio.run(run(args))

if __name__ == "__main__":
    main()
