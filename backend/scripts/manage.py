#!/usr/bin/env python
"""Run the catalog and portfolio write procedures from the command line.

Usage:
    cd backend
    python -m scripts.manage add-category "Gaming"
    python -m scripts.manage add-coin HEHE "HEHE" 0.05 0.56 0.2 10 --categories 3,4,5
    python -m scripts.manage update-coin ONDO "Ondo" 0.22 0.937 0.08 1.48 --categories 7,8
    python -m scripts.manage remove-coin USDT
    python -m scripts.manage add-holding HEHE 0.43 300 --notes "Pure gambling this one.."
    python -m scripts.manage update-holding ONDO 1000 0.1 --notes "ICO"
    python -m scripts.manage remove-holding ETH
    python -m scripts.manage --json add-category "Oracle"

Business errors are printed and the command exits with status 1.
"""

import argparse
import sys
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from database import get_session_local
from logging_config import setup_logging
from schemas import CategoryResponse, CoinResponse, HoldingResponse
from services.catalog_service import CatalogService
from services.category_service import CategoryService
from services.exceptions import PortfolioError
from services.holdings_service import HoldingsService
from utils.query_params import parse_category_ids


def _decimal(value: str) -> Decimal:
    """argparse type for monetary and quantity arguments."""
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def _category_ids(value: str) -> list[int]:
    """argparse type for a comma-separated list of category ids."""
    try:
        return parse_category_ids(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the coin catalog and portfolio")
    parser.add_argument(
        "--json", action="store_true", help="Print the affected record as JSON"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-category", help="Create a category")
    p.add_argument("name")

    for name, help_text in (
        ("add-coin", "Add a coin to the catalog"),
        ("update-coin", "Replace a catalog coin and its categories"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("ticker")
        p.add_argument("name")
        p.add_argument("launch_price", type=_decimal)
        p.add_argument("current_price", type=_decimal)
        p.add_argument("all_time_low", type=_decimal)
        p.add_argument("all_time_high", type=_decimal)
        p.add_argument(
            "--categories", "-c", type=_category_ids, default=[],
            help="Comma-separated category ids, e.g. 2,5",
        )

    p = sub.add_parser("remove-coin", help="Remove a coin from the catalog and portfolio")
    p.add_argument("ticker")

    p = sub.add_parser("add-holding", help="Add a catalog coin to the portfolio")
    p.add_argument("ticker")
    p.add_argument("entry_price", type=_decimal)
    p.add_argument("quantity", type=_decimal)
    p.add_argument("--notes", "-n")

    p = sub.add_parser("update-holding", help="Update a portfolio position")
    p.add_argument("ticker")
    p.add_argument("quantity", type=_decimal)
    p.add_argument("entry_price", type=_decimal)
    p.add_argument("--notes", "-n")

    p = sub.add_parser("remove-holding", help="Remove a coin from the portfolio")
    p.add_argument("ticker")

    return parser


def run_command(db: Session, args: argparse.Namespace) -> str:
    """Dispatch a parsed command to its write procedure.

    Returns:
        A one-line confirmation message, or the affected record as JSON
        when ``--json`` is given

    Raises:
        PortfolioError: Propagated from the write procedure
    """
    if args.command == "add-category":
        category = CategoryService.create_category(db, args.name)
        if args.json:
            return CategoryResponse.model_validate(category).model_dump_json()
        return f"Created category {category.name} (id={category.id})"

    if args.command in ("add-coin", "update-coin"):
        procedure = (
            CatalogService.add_coin if args.command == "add-coin" else CatalogService.update_coin
        )
        coin = procedure(
            db,
            args.ticker,
            args.name,
            args.launch_price,
            args.current_price,
            args.all_time_low,
            args.all_time_high,
            args.categories,
        )
        if args.json:
            return CoinResponse.model_validate(coin).model_dump_json()
        verb = "Added" if args.command == "add-coin" else "Updated"
        return f"{verb} {coin.ticker} ({coin.name}), return since launch {coin.return_since_launch}%"

    if args.command == "remove-coin":
        removed = CatalogService.remove_coin_everywhere(db, args.ticker)
        return f"Removed {args.ticker} everywhere" if removed else f"{args.ticker} not in catalog"

    if args.command == "add-holding":
        holding = HoldingsService.add_holding(
            db, args.ticker, args.entry_price, args.quantity, args.notes
        )
        if args.json:
            return HoldingResponse.model_validate(holding).model_dump_json()
        return f"Added {holding.ticker} to portfolio: {holding.holdings} @ {holding.entry_price}"

    if args.command == "update-holding":
        holding = HoldingsService.update_holding(
            db, args.ticker, args.quantity, args.entry_price, args.notes
        )
        if holding is None:
            return f"{args.ticker} not in portfolio, nothing updated"
        if args.json:
            return HoldingResponse.model_validate(holding).model_dump_json()
        return f"Updated {holding.ticker}: {holding.holdings} @ {holding.entry_price}"

    if args.command == "remove-holding":
        removed = HoldingsService.remove_holding(db, args.ticker)
        return f"Removed {args.ticker} from portfolio" if removed else f"{args.ticker} not in portfolio"

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        print(run_command(db, args))
        return 0
    except PortfolioError as e:
        print(f"ERROR: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
