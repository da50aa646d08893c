from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Sequence

from pydantic import Field

# Only enforced when a document is validated through splitbill.codec.
Cents = Annotated[int, Field(ge=0)]


@dataclass(slots=True)
class LineItem:
    id: str
    name: str
    amount_cents: Cents
    assigned_to: Sequence[str] = ()


@dataclass(slots=True)
class BillInput:
    items: Sequence[LineItem] = ()
    tax_cents: Cents = 0
    tip_cents: Cents = 0
    fees_cents: Cents = 0
    participants: Sequence[str] = ()


@dataclass(slots=True)
class WeightedShare:
    id: str
    weight: int | float


@dataclass(slots=True)
class ItemShare:
    item_id: str
    item_name: str
    share_cents: int


@dataclass(slots=True)
class PersonShare:
    person_id: str
    items: list[ItemShare] = field(default_factory=list)
    subtotal_cents: int = 0
    tax_cents: int = 0
    tip_cents: int = 0
    fees_cents: int = 0
    total_cents: int = 0


@dataclass(slots=True)
class BillResult:
    shares: list[PersonShare]
    unassigned_items: list[LineItem]
    total_cents: int
