from __future__ import annotations

from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from splitbill.models import BillInput, BillResult
from splitbill.services.draft import BillDraft

_bill_input_adapter = TypeAdapter(BillInput)
_bill_result_adapter = TypeAdapter(BillResult)
_draft_adapter = TypeAdapter(BillDraft)


class BillInputError(ValueError):
    pass


def parse_bill_input(data: Mapping[str, Any]) -> BillInput:
    try:
        return _bill_input_adapter.validate_python(data)
    except ValidationError as exc:
        raise BillInputError(f"Invalid bill: {exc}") from exc


def parse_draft(data: Mapping[str, Any]) -> BillDraft:
    try:
        return _draft_adapter.validate_python(data)
    except ValidationError as exc:
        raise BillInputError(f"Invalid draft: {exc}") from exc


def dump_bill_result(result: BillResult) -> dict[str, Any]:
    return _bill_result_adapter.dump_python(result, mode="json")


def dump_draft(draft: BillDraft) -> dict[str, Any]:
    return _draft_adapter.dump_python(draft, mode="json")
