"""
Arithmetic over already-aggregated sales rows: percentage shares, the "Other"
remainder slice, all-seller monthly averages and top-X% standings.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from market.repositories.order_product_repo import SellerMonthTotal, SellerTotalPrice
from market.schemas.statistics import PercentAndPrice

OTHER_LABEL = "Other"


def get_percent(price: int, total_price_sum: int) -> float:
    if total_price_sum == 0:
        return 0.0
    return price / total_price_sum * 100


def to_percent_and_price(name: str, price: int, total_price_sum: int) -> PercentAndPrice:
    return PercentAndPrice(name=name, price=price, percentage=get_percent(price, total_price_sum))


def build_price_percent_slices(
    top_rank: Sequence[SellerTotalPrice], total_price_sum: int
) -> list[PercentAndPrice]:
    """Top-N slices, plus an "Other" slice when they do not cover the whole category total."""
    slices = []
    remain = total_price_sum
    for row in top_rank:
        slices.append(to_percent_and_price(row.seller_name, row.total_price, total_price_sum))
        remain -= row.total_price
    if remain != 0:
        slices.append(to_percent_and_price(OTHER_LABEL, remain, total_price_sum))
    return slices


def fill_months(months: Iterable[str], values: dict[str, int]) -> list[int]:
    return [values.get(month, 0) for month in months]


def average_per_seller(totals: Sequence[int], seller_count: int) -> list[int]:
    """Integer average over every seller, active or deleted; all zero without sellers."""
    if seller_count == 0:
        return [0 for _ in totals]
    return [total // seller_count for total in totals]


def top_percentile(totals: Sequence[int], own_total: int) -> float:
    """Standing as "top X%": rank / number of sellers * 100, ties share the best rank."""
    rank = 1 + sum(1 for total in totals if total > own_total)
    return round(rank / len(totals) * 100, 2)


def monthly_percentiles(
    months: Iterable[str], rows: Iterable[SellerMonthTotal], seller_id: int
) -> list[Optional[float]]:
    per_month: dict[str, dict[int, int]] = defaultdict(dict)
    for row in rows:
        per_month[row.month][row.seller_id] = row.total_price

    result: list[Optional[float]] = []
    for month in months:
        totals = per_month.get(month, {})
        if seller_id not in totals:
            result.append(None)
            continue
        result.append(top_percentile(list(totals.values()), totals[seller_id]))
    return result
