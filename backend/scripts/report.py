#!/usr/bin/env python
"""Print the portfolio reports and change logs.

Sections:
    summary        total invested, total gains, total value
    performers     best and worst performing position
    coins          catalog with categories
    portfolio      full portfolio with value and ROI
    coin-log       catalog change log
    portfolio-log  holdings change log

Usage:
    cd backend
    python -m scripts.report
    python -m scripts.report summary performers
    python -m scripts.report portfolio --json
"""

import argparse
import json

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from database import get_session_local
from logging_config import setup_logging
from schemas import CoinLogResponse, PortfolioLogResponse
from services.change_log_service import ChangeLogService
from services.reporting_service import (
    CoinCatalogRow,
    Performer,
    PortfolioRow,
    PortfolioTotals,
    ReportingService,
)
from utils.formatting import format_money, format_percent

SECTIONS = ["summary", "performers", "coins", "portfolio", "coin-log", "portfolio-log"]


def _fmt_table(rows: list[dict[str, str]]) -> list[str]:
    """Render dict rows as an aligned text table."""
    if not rows:
        return ["(0 rows)"]
    headers = list(rows[0].keys())
    widths = {h: max(len(h), *(len(str(r[h])) for r in rows)) for h in headers}
    lines = [
        " | ".join(f"{h:<{widths[h]}}" for h in headers),
        "-+-".join("-" * widths[h] for h in headers),
    ]
    for row in rows:
        lines.append(" | ".join(f"{str(row[h]):<{widths[h]}}" for h in headers))
    lines.append(f"({len(rows)} rows)")
    return lines


def _performer_rows(best: Performer | None, worst: Performer | None) -> list[dict[str, str]]:
    if best is None or worst is None:
        return []
    return [{
        "Best Performing Coin": best.ticker,
        "Best ROI": format_percent(best.roi),
        "Worst Performing Coin": worst.ticker,
        "Worst ROI": format_percent(worst.roi),
    }]


def build_text_report(db: Session, sections: list[str]) -> list[str]:
    """Render the requested sections as text lines."""
    reporting = ReportingService()
    lines: list[str] = []

    for section in sections:
        lines.append(f"== {section} ==")
        if section == "summary":
            lines.extend(_fmt_table([reporting.get_totals(db).to_display()]))
        elif section == "performers":
            lines.extend(_fmt_table(_performer_rows(
                reporting.best_performing(db), reporting.worst_performing(db)
            )))
        elif section == "coins":
            lines.extend(_fmt_table(
                [r.to_display() for r in reporting.list_coins_with_categories(db)]
            ))
        elif section == "portfolio":
            lines.extend(_fmt_table(
                [r.to_display() for r in reporting.get_full_portfolio(db)]
            ))
        elif section == "coin-log":
            lines.extend(_fmt_table([
                {
                    "Date": e.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    "Coin": e.coin_name,
                    "Event": e.event_kind,
                }
                for e in ChangeLogService.list_coin_log(db)
            ]))
        elif section == "portfolio-log":
            lines.extend(_fmt_table([
                {
                    "Date": e.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    "Coin": e.coin_name,
                    "Amount": format(e.quantity, "f"),
                    "Net Amount": format_money(e.net_amount),
                    "Event": e.event_kind,
                }
                for e in ChangeLogService.list_portfolio_log(db)
            ]))
        lines.append("")

    return lines


def build_json_report(db: Session, sections: list[str]) -> dict:
    """Collect the requested sections as JSON-compatible data."""
    reporting = ReportingService()
    result: dict = {}

    for section in sections:
        if section == "summary":
            totals = reporting.get_totals(db)
            result[section] = TypeAdapter(PortfolioTotals).dump_python(totals, mode="json")
        elif section == "performers":
            adapter = TypeAdapter(Performer | None)
            result[section] = {
                "best": adapter.dump_python(reporting.best_performing(db), mode="json"),
                "worst": adapter.dump_python(reporting.worst_performing(db), mode="json"),
            }
        elif section == "coins":
            result[section] = TypeAdapter(list[CoinCatalogRow]).dump_python(
                reporting.list_coins_with_categories(db), mode="json"
            )
        elif section == "portfolio":
            result[section] = TypeAdapter(list[PortfolioRow]).dump_python(
                reporting.get_full_portfolio(db), mode="json"
            )
        elif section == "coin-log":
            result[section] = [
                CoinLogResponse.model_validate(e).model_dump(mode="json")
                for e in ChangeLogService.list_coin_log(db)
            ]
        elif section == "portfolio-log":
            result[section] = [
                PortfolioLogResponse.model_validate(e).model_dump(mode="json")
                for e in ChangeLogService.list_portfolio_log(db)
            ]

    return result


def main():
    parser = argparse.ArgumentParser(description="Print portfolio reports")
    parser.add_argument(
        "sections",
        nargs="*",
        metavar="section",
        help=f"Sections to print (default: all). One of: {', '.join(SECTIONS)}",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of tables")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else None)
    unknown = [s for s in args.sections if s not in SECTIONS]
    if unknown:
        parser.error(f"unknown section(s): {', '.join(unknown)}")
    sections = args.sections or SECTIONS

    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        if args.json:
            print(json.dumps(build_json_report(db, sections), indent=2))
        else:
            print("\n".join(build_text_report(db, sections)))
    finally:
        db.close()


if __name__ == "__main__":
    main()
