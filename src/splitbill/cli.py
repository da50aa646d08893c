from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from splitbill.codec import BillInputError, dump_bill_result, parse_bill_input
from splitbill.config import get_settings
from splitbill.logging import configure_logging, get_logger
from splitbill.services.bill import calculate_bill
from splitbill.services.draft import build_bill_input, default_draft
from splitbill.services.reconcile import reconcile_draft
from splitbill.storage import load_draft, save_draft


def _read_document(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as fh:
        return json.load(fh)


def _print_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def cmd_calculate(args: argparse.Namespace) -> int:
    try:
        data = _read_document(args.file)
    except (OSError, ValueError) as exc:
        print(f"Cannot read bill: {exc}", file=sys.stderr)
        return 2
    if not isinstance(data, dict):
        print("Invalid bill: document must be an object", file=sys.stderr)
        return 2

    try:
        bill = parse_bill_input(data)
    except BillInputError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    _print_json(dump_bill_result(calculate_bill(bill)))
    return 0


def cmd_draft(args: argparse.Namespace) -> int:
    path = Path(args.path) if args.path else get_settings().draft_path

    if args.init:
        save_draft(path, default_draft())

    draft = load_draft(path)
    bill = build_bill_input(draft)
    result = calculate_bill(bill) if bill is not None else None
    reconciliation = reconcile_draft(draft)

    _print_json(
        {
            "result": dump_bill_result(result) if result is not None else None,
            "reconciliation": {
                "receipt_total_cents": reconciliation.receipt_total_cents,
                "calculated_total_cents": reconciliation.calculated_total_cents,
                "mismatch": reconciliation.mismatch,
                "off_by_cents": reconciliation.off_by_cents,
            },
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="splitbill", description="Split a shared bill in cents.")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser("calculate", help="split a bill document")
    calculate.add_argument("file", help="path to a bill JSON document, or - for stdin")
    calculate.set_defaults(func=cmd_calculate)

    draft = subparsers.add_parser("draft", help="split the saved bill draft")
    draft.add_argument("--path", default=None, help="draft file (defaults to DRAFT_PATH)")
    draft.add_argument("--init", action="store_true", help="start a new empty draft first")
    draft.set_defaults(func=cmd_draft)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    log = get_logger(__name__)
    log.debug("cli.command", command=args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
