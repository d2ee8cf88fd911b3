from __future__ import annotations
import argparse, asyncio
from _common import add_common_args, make_client_from_args, pretty
from yandex_money import Email, Total, TestPaymentRequest, Wallet
from yandex_money.errors import YandexMoneyAPIError

async def run(args) -> None:
    async with make_client_from_args(args) as client:
        request = client.request_transfer(Email(args.to), Total(args.amount), comment=args.comment)
        try:
            resp = await TestPaymentRequest(request, test_result=args.test_result).send()
            print(pretty(resp))
        except YandexMoneyAPIError as e:
            print(f"[TRANSFER] request refused: {e.description}")
            return

        if resp.request_id and args.process:
            done = await client.process_payment(resp.request_id, Wallet())
            print(pretty(done))

def main():
    ap = argparse.ArgumentParser(description="Request a test transfer (no money moves)")
    add_common_args(ap)
    ap.add_argument("--to", required=True, help="Recipient e-mail")
    ap.add_argument("--amount", required=True, help="Amount the recipient receives")
    ap.add_argument("--comment", default="SDK dry run")
    ap.add_argument("--test-result", default=None, help="Simulated API error code")
    ap.add_argument("--process", action="store_true", help="Also call process-payment from the wallet")
    args = ap.parse_args()
    asyncio.run(run(args))

if __name__ == "__main__":
    main()
