import argparse
import logging
import sys

from dramaverse.adapters.analytics_log import LoggingAnalyticsSink
from dramaverse.api.deps import Settings, init_storage
from dramaverse.components.monetization import MonetizationService
from dramaverse.domain.errors import MonetizationError
from dramaverse.rules.loader import load_rules

logger = logging.getLogger("cli")


def get_service(settings: Settings | None = None) -> MonetizationService:
    settings = settings or Settings()
    if not settings.rules_path.exists():
        logger.error(f"Rules file {settings.rules_path} not found.")
        sys.exit(1)

    rules = load_rules(settings.rules_path)
    return MonetizationService(
        repo=init_storage(settings),
        rules=rules,
        analytics=LoggingAnalyticsSink(log_level=logging.DEBUG),
    )


def handle_balance(service: MonetizationService, args: argparse.Namespace) -> None:
    snap = service.get_balance(args.user_id)
    print(f"User {snap.user_id}: balance {snap.balance}")
    print(f"  earned {snap.total_earned}, spent {snap.total_spent}")


def handle_history(service: MonetizationService, args: argparse.Namespace) -> None:
    txns = service.get_transactions(args.user_id, limit=args.limit)
    if not txns:
        print("No transactions.")
        return
    for t in txns:
        sign = "-" if t.kind == "spent" else "+"
        content = f" [{t.content_id}]" if t.content_id else ""
        print(f"{t.timestamp.isoformat()}  {sign}{t.amount:>6}  {t.kind:<9} {t.description}{content}")


def handle_grant(service: MonetizationService, args: argparse.Namespace) -> None:
    txn, balance = service.credit(args.user_id, args.amount, args.description)
    print(f"Granted {txn.amount} coins to {args.user_id}. New balance: {balance}")


def handle_subscribe(service: MonetizationService, args: argparse.Namespace) -> None:
    view = service.subscribe(args.user_id, args.plan, args.days, args.auto_renew)
    print(f"Subscription for {args.user_id}: {view.plan} until {view.end_date}")
    print(f"Features: {', '.join(view.features)}")


def handle_opportunities(service: MonetizationService, args: argparse.Namespace) -> None:
    for name, amount in service.get_earning_opportunities().items():
        print(f"{name:<18} {amount}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DramaVerse monetization admin CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    balance_parser = subparsers.add_parser("balance", help="Show a user's coin balance")
    balance_parser.add_argument("user_id")

    history_parser = subparsers.add_parser("history", help="Show recent transactions")
    history_parser.add_argument("user_id")
    history_parser.add_argument("--limit", type=int, default=20)

    grant_parser = subparsers.add_parser("grant", help="Credit coins to a user")
    grant_parser.add_argument("user_id")
    grant_parser.add_argument("amount", type=int)
    grant_parser.add_argument("--description", default="Admin grant")

    sub_parser = subparsers.add_parser("subscribe", help="Activate a subscription")
    sub_parser.add_argument("user_id")
    sub_parser.add_argument("plan", choices=["basic", "premium"])
    sub_parser.add_argument("days", type=int)
    sub_parser.add_argument("--auto-renew", action="store_true")

    subparsers.add_parser("opportunities", help="List coin earning opportunities")
    return parser


HANDLERS = {
    "balance": handle_balance,
    "history": handle_history,
    "grant": handle_grant,
    "subscribe": handle_subscribe,
    "opportunities": handle_opportunities,
}


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    service = get_service()

    try:
        HANDLERS[args.command](service, args)
    except MonetizationError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
