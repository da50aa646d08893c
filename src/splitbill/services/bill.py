from __future__ import annotations

from typing import Literal, Sequence

from splitbill.logging import get_logger
from splitbill.models import BillInput, BillResult, ItemShare, LineItem, PersonShare, WeightedShare
from splitbill.services.split import allocate_proportionally, split_evenly

ExtraField = Literal["tax_cents", "tip_cents", "fees_cents"]


def _allocate_extra(
    amount_cents: int,
    shares_by_person: dict[str, PersonShare],
    participants: Sequence[str],
    weights: Sequence[WeightedShare],
    use_even_split: bool,
    field_name: ExtraField,
) -> None:
    if amount_cents <= 0:
        return

    if use_even_split:
        allocation = split_evenly(amount_cents, participants)
    else:
        allocation = allocate_proportionally(amount_cents, weights)

    for person_id, amount in allocation.items():
        share = shares_by_person.get(person_id)
        if share is not None:
            setattr(share, field_name, amount)


def calculate_bill(bill: BillInput) -> BillResult:
    """Compute every participant's share of ``bill``.

    Items are split evenly between their assignees, then tax, tip and fees
    are allocated in proportion to each person's subtotal. When nobody has
    a positive subtotal those extras are split evenly instead.
    """
    log = get_logger(__name__)
    shares_by_person: dict[str, PersonShare] = {}
    for person_id in bill.participants:
        shares_by_person.setdefault(person_id, PersonShare(person_id=person_id))

    unassigned_items: list[LineItem] = []

    for item in bill.items:
        if not item.assigned_to:
            unassigned_items.append(item)
            continue

        for person_id, share_cents in split_evenly(item.amount_cents, item.assigned_to).items():
            person_share = shares_by_person.get(person_id)
            if person_share is None:
                # Caller must keep assigned_to within participants; this share is lost.
                log.warning(
                    "bill.assignee_dropped",
                    item_id=item.id,
                    person_id=person_id,
                    share_cents=share_cents,
                )
                continue
            person_share.items.append(
                ItemShare(item_id=item.id, item_name=item.name, share_cents=share_cents)
            )
            person_share.subtotal_cents += share_cents

    total_subtotal = sum(share.subtotal_cents for share in shares_by_person.values())
    weights = [
        WeightedShare(id=person_id, weight=share.subtotal_cents)
        for person_id, share in shares_by_person.items()
    ]
    use_even_split = total_subtotal == 0 and len(bill.participants) > 0

    _allocate_extra(bill.tax_cents, shares_by_person, bill.participants, weights, use_even_split, "tax_cents")
    _allocate_extra(bill.tip_cents, shares_by_person, bill.participants, weights, use_even_split, "tip_cents")
    _allocate_extra(bill.fees_cents, shares_by_person, bill.participants, weights, use_even_split, "fees_cents")

    for share in shares_by_person.values():
        share.total_cents = share.subtotal_cents + share.tax_cents + share.tip_cents + share.fees_cents

    shares = list(shares_by_person.values())
    total_cents = sum(share.total_cents for share in shares)

    log.debug(
        "bill.calculated",
        participants=len(shares),
        items=len(bill.items),
        unassigned=len(unassigned_items),
        total_cents=total_cents,
        even_split=use_even_split,
    )

    return BillResult(shares=shares, unassigned_items=unassigned_items, total_cents=total_cents)
