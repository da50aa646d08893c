"""Editable bill state and its conversion into a :class:`BillInput`."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from splitbill.models import BillInput, LineItem


class PriceMode(str, Enum):
    TOTAL = "total"
    EACH = "each"


@dataclass(slots=True)
class Dish:
    id: str
    name: str = ""
    quantity: int = 1
    price_cents: int = 0
    price_mode: PriceMode = PriceMode.TOTAL
    # indices into BillDraft.diners
    diners: list[int] = field(default_factory=list)


@dataclass(slots=True)
class BillDraft:
    diners: list[str] = field(default_factory=list)
    dishes: list[Dish] = field(default_factory=list)
    tax_cents: int = 0
    tip_cents: int = 0
    total_cents: Optional[int] = None


def new_dish() -> Dish:
    return Dish(id=uuid.uuid4().hex)


def default_draft() -> BillDraft:
    return BillDraft(dishes=[new_dish()])


def dish_total_cents(dish: Dish) -> int:
    if dish.price_mode == PriceMode.EACH:
        return dish.price_cents * dish.quantity
    return dish.price_cents


def toggle_price_mode(dish: Dish) -> None:
    """Switch between a total price and a per-unit price.

    The stored price is converted so the dish total stays the same, up to
    rounding of the per-unit price (half up).
    """
    new_mode = PriceMode.EACH if dish.price_mode == PriceMode.TOTAL else PriceMode.TOTAL

    if dish.price_cents > 0 and dish.quantity > 1:
        if new_mode == PriceMode.EACH:
            unit = Decimal(dish.price_cents) / Decimal(dish.quantity)
            dish.price_cents = int(unit.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        else:
            dish.price_cents = dish.price_cents * dish.quantity

    dish.price_mode = new_mode


def named_diners(draft: BillDraft) -> list[tuple[int, str]]:
    return [(idx, name) for idx, name in enumerate(draft.diners) if name.strip()]


def toggle_diner(dish: Dish, diner_index: int) -> None:
    if diner_index in dish.diners:
        dish.diners.remove(diner_index)
    else:
        dish.diners.append(diner_index)


def toggle_all_diners(draft: BillDraft, dish: Dish) -> None:
    all_indices = [idx for idx, _ in named_diners(draft)]
    if all(idx in dish.diners for idx in all_indices):
        dish.diners = []
    else:
        dish.diners = all_indices


def remove_diner(draft: BillDraft, diner_index: int) -> None:
    if not 0 <= diner_index < len(draft.diners):
        return
    del draft.diners[diner_index]
    for dish in draft.dishes:
        dish.diners = [
            idx - 1 if idx > diner_index else idx
            for idx in dish.diners
            if idx != diner_index
        ]


def build_bill_input(draft: BillDraft) -> Optional[BillInput]:
    """Turn the draft into engine input.

    Returns ``None`` until there is at least one named diner and one named
    dish. Blank diners and dishes are left out.
    """
    diners = named_diners(draft)
    dishes = [dish for dish in draft.dishes if dish.name.strip()]
    if not diners or not dishes:
        return None

    items = []
    for dish in dishes:
        assigned_to = [
            draft.diners[idx]
            for idx in dish.diners
            if 0 <= idx < len(draft.diners) and draft.diners[idx].strip()
        ]
        items.append(
            LineItem(
                id=dish.id,
                name=dish.name,
                amount_cents=dish_total_cents(dish),
                assigned_to=assigned_to,
            )
        )

    return BillInput(
        items=items,
        tax_cents=draft.tax_cents,
        tip_cents=draft.tip_cents,
        fees_cents=0,
        participants=[name for _, name in diners],
    )
