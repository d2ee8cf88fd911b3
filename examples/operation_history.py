from __future__ import annotations
import argparse, asyncio
from _common import add_common_args, make_client_from_args, pretty
from yandex_money import OperationType
from yandex_money.errors import YandexMoneySDKError

async def run(args) -> None:
    async with make_client_from_args(args) as client:
        count = 0
        try:
            async for op in client.operation_history(
                types=args.type,
                label=args.label,
                details=args.details,
                records=args.records,
            ):
                print(pretty(op))
                count += 1
                if args.limit and count >= args.limit:
                    break
        except YandexMoneySDKError as e:
            print(f"[HISTORY] stopped after {count} operations: {e}")

def main():
    ap = argparse.ArgumentParser(description="Walk operation history page by page")
    add_common_args(ap)
    ap.add_argument("--type", action="append", default=[], choices=[t.value for t in OperationType])
    ap.add_argument("--label", default=None, help="Only operations with this label")
    ap.add_argument("--details", action="store_true", help="Request full operation details")
    ap.add_argument("--records", type=int, default=None, help="Page size")
    ap.add_argument("--limit", type=int, default=None, help="Stop after N operations")
    args = ap.parse_args()
    asyncio.run(run(args))

if __name__ == "__main__":
    main()
