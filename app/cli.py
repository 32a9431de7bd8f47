"""
Command-line entry point.

    solar-finance bill PAYLOAD.json
    solar-finance roi PAYLOAD.json [--table] [--start 2025-01-01]
    solar-finance parse INVOICE.txt

Exit codes: 0 ok, 1 unreadable or invalid payload, 2 invoice without consumption.
"""
import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from app.schemas import BillPayload, RoiPayload
from billing import compute_bill
from core.errors import MissingConsumptionError
from engine import compute_roi
from parsing import parse_energy_invoice, validate_reading, validate_sale_parameters
from reports import generate_proposal_summary, projection_to_frame, yearly_summary

logger = logging.getLogger(__name__)


def _load_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _dump(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _log_warnings(result) -> None:
    for w in result.warnings:
        logger.warning(w)


def run_bill(args: argparse.Namespace) -> int:
    payload = BillPayload.model_validate(_load_json(args.payload))
    reading = payload.reading.to_domain()
    terms = payload.terms.to_domain()
    _log_warnings(validate_reading(reading, terms))

    bill = compute_bill(reading, terms, now=payload.computed_at)
    _dump(bill.to_dict())
    return 0


def run_roi(args: argparse.Namespace) -> int:
    payload = RoiPayload.model_validate(_load_json(args.payload))
    params = payload.to_domain()
    _log_warnings(validate_sale_parameters(params))

    projection = compute_roi(params)
    summary = generate_proposal_summary(projection, params)

    if args.table:
        print(summary.to_dataframe().to_string(index=False))
        print()
        print(yearly_summary(projection).to_string(index=False))
        if args.start is not None:
            print()
            print(projection_to_frame(projection, start=args.start).to_string(index=False))
        return 0

    result = projection.to_dict()
    result["flags"] = summary.flags
    _dump(result)
    return 0


def run_parse(args: argparse.Namespace) -> int:
    text = Path(args.invoice).read_text(encoding="utf-8")
    reading = parse_energy_invoice(text)
    _log_warnings(validate_reading(reading))
    _dump(asdict(reading))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solar-finance",
        description="Contract bill reconciliation and solar purchase ROI projections",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_bill = sub.add_parser("bill", help="Compute the itemized bill for one invoice")
    p_bill.add_argument("payload", help="JSON file with 'reading' and 'terms'")
    p_bill.set_defaults(func=run_bill)

    p_roi = sub.add_parser("roi", help="Project economy, payments and payback of a proposal")
    p_roi.add_argument("payload", help="JSON file with the sale parameters")
    p_roi.add_argument("--table", action="store_true", help="Print summary tables instead of JSON")
    p_roi.add_argument(
        "--start", type=date.fromisoformat, default=None,
        help="Purchase date (YYYY-MM-DD); adds the monthly table with dates",
    )
    p_roi.set_defaults(func=run_roi)

    p_parse = sub.add_parser("parse", help="Extract invoice fields from OCR text")
    p_parse.add_argument("invoice", help="Text file with the invoice OCR output")
    p_parse.set_defaults(func=run_parse)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except MissingConsumptionError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
