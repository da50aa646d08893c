from __future__ import annotations

import math
from fractions import Fraction
from typing import Sequence

from splitbill.models import WeightedShare


def split_evenly(amount_cents: int, person_ids: Sequence[str]) -> dict[str, int]:
    """Split ``amount_cents`` between ``person_ids``.

    Leftover cents go one each to the first people in the list, so the
    result always sums to ``amount_cents``.
    """
    if not person_ids:
        return {}

    base_share, remainder = divmod(amount_cents, len(person_ids))
    return {
        person_id: base_share + 1 if idx < remainder else base_share
        for idx, person_id in enumerate(person_ids)
    }


def allocate_proportionally(total_cents: int, shares: Sequence[WeightedShare]) -> dict[str, int]:
    """Allocate ``total_cents`` by weight using the largest remainder method.

    Every entry gets the floor of its exact share, then the cents still
    missing are handed out one each in descending order of fractional part.
    Equal fractions keep input order. A zero total weight allocates nothing.
    """
    if not shares:
        return {}

    total_weight = sum(Fraction(share.weight) for share in shares)
    if total_weight == 0:
        return {share.id: 0 for share in shares}

    amounts: list[int] = []
    fractions: list[Fraction] = []
    for share in shares:
        exact = Fraction(total_cents) * Fraction(share.weight) / total_weight
        base = math.floor(exact)
        amounts.append(base)
        fractions.append(exact - base)

    remaining = total_cents - sum(amounts)

    # sorted() is stable, also with reverse=True
    by_fraction = sorted(range(len(shares)), key=lambda idx: fractions[idx], reverse=True)
    for idx in by_fraction:
        if remaining <= 0:
            break
        amounts[idx] += 1
        remaining -= 1

    result: dict[str, int] = {}
    for share, amount in zip(shares, amounts):
        result[share.id] = amount
    return result
