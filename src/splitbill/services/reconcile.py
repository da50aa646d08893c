from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from splitbill.services.draft import BillDraft, dish_total_cents


@dataclass(slots=True)
class Reconciliation:
    receipt_total_cents: Optional[int]
    calculated_total_cents: int

    @property
    def mismatch(self) -> bool:
        return self.receipt_total_cents is not None and self.receipt_total_cents != self.calculated_total_cents

    @property
    def off_by_cents(self) -> int:
        if self.receipt_total_cents is None:
            return 0
        return abs(self.receipt_total_cents - self.calculated_total_cents)


def reconcile_draft(draft: BillDraft) -> Reconciliation:
    """Compare the receipt total entered by the user with subtotal + tax + tip."""
    subtotal = sum(dish_total_cents(dish) for dish in draft.dishes)
    return Reconciliation(
        receipt_total_cents=draft.total_cents,
        calculated_total_cents=subtotal + draft.tax_cents + draft.tip_cents,
    )
