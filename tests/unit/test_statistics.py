"""
Unit tests: percentage shares, "Other" remainder, seller averages and top-X% standings.
"""
import pytest

from market.repositories.order_product_repo import SellerMonthTotal, SellerTotalPrice
from market.services.statistics import (
    OTHER_LABEL,
    average_per_seller,
    build_price_percent_slices,
    fill_months,
    get_percent,
    monthly_percentiles,
    top_percentile,
)


def test_get_percent_guards_zero_total():
    assert get_percent(0, 0) == 0
    assert get_percent(500, 0) == 0
    assert get_percent(250, 1000) == pytest.approx(25.0)


def test_slices_add_other_bucket_for_uncovered_remainder():
    top = [SellerTotalPrice(1, "kim", 500), SellerTotalPrice(2, "lee", 300)]
    slices = build_price_percent_slices(top, 1000)

    assert [s.name for s in slices] == ["kim", "lee", OTHER_LABEL]
    assert [s.price for s in slices] == [500, 300, 200]
    assert slices[0].percentage == pytest.approx(50.0)
    assert slices[-1].percentage == pytest.approx(20.0)
    assert sum(s.percentage for s in slices) == pytest.approx(100.0)


def test_slices_without_other_when_top_rank_covers_total():
    top = [SellerTotalPrice(1, "kim", 700), SellerTotalPrice(2, "lee", 300)]
    slices = build_price_percent_slices(top, 1000)

    assert OTHER_LABEL not in [s.name for s in slices]
    assert sum(s.percentage for s in slices) == pytest.approx(100.0)


def test_slices_of_empty_category():
    assert build_price_percent_slices([], 0) == []


def test_fill_months_reports_missing_months_as_zero():
    months = ["2024-01", "2024-02", "2024-03"]
    assert fill_months(months, {"2024-02": 700}) == [0, 700, 0]


def test_average_per_seller_uses_integer_division():
    assert average_per_seller([1000, 7, 0], 3) == [333, 2, 0]


def test_average_per_seller_without_sellers():
    assert average_per_seller([1000, 200], 0) == [0, 0]


@pytest.mark.parametrize(
    "totals, own, expected",
    [
        ([1000], 1000, 100.0),
        ([1000, 500, 500], 1000, 33.33),
        ([1000, 500, 500], 500, 66.67),
        ([400, 300, 200, 100], 100, 100.0),
    ],
)
def test_top_percentile(totals, own, expected):
    assert top_percentile(totals, own) == pytest.approx(expected)


def test_monthly_percentiles_none_for_months_without_own_sales():
    rows = [
        SellerMonthTotal("2024-01", 1, 1000),
        SellerMonthTotal("2024-01", 2, 500),
        SellerMonthTotal("2024-02", 1, 300),
        SellerMonthTotal("2024-03", 2, 900),
    ]
    result = monthly_percentiles(["2024-01", "2024-02", "2024-03", "2024-04"], rows, seller_id=2)

    assert result == [pytest.approx(100.0), None, pytest.approx(100.0), None]
