"""
Request parameter dependencies shared by the routers (query strings and form fields).
"""
from typing import Optional

from fastapi import Form, Query

from market.schemas.condition import ORDER_BY_LATEST, CategoryParams, ProductSearchCondition
from market.schemas.product import ProductForm
from market.services.period import YEAR_MONTH_PATTERN, YearMonth, YearMonthPeriod, check_period


def category_params(
    item_category_code: Optional[int] = Query(None),
    item_code: Optional[int] = Query(None),
    kind_id: Optional[int] = Query(None),
    kind_grade_id: Optional[int] = Query(None),
) -> CategoryParams:
    return CategoryParams(
        item_category_code=item_category_code,
        item_code=item_code,
        kind_id=kind_id,
        kind_grade_id=kind_grade_id,
    )


def product_search_condition(
    product_name: Optional[str] = Query(None),
    item_category_code: Optional[int] = Query(None),
    item_code: Optional[int] = Query(None),
    kind_id: Optional[int] = Query(None),
    kind_grade_id: Optional[int] = Query(None),
    order_by: str = Query(ORDER_BY_LATEST, description='"latest" or anything else for price'),
) -> ProductSearchCondition:
    return ProductSearchCondition(
        product_name=product_name,
        item_category_code=item_category_code,
        item_code=item_code,
        kind_id=kind_id,
        kind_grade_id=kind_grade_id,
        order_by=order_by,
    )


def year_month_period(
    start_date: str = Query(..., pattern=YEAR_MONTH_PATTERN, examples=["2022-11"]),
    end_date: str = Query(..., pattern=YEAR_MONTH_PATTERN, examples=["2022-12"]),
) -> YearMonthPeriod:
    """Validated period; start after end or end after the current month is a 400."""
    return check_period(YearMonth.parse(start_date), YearMonth.parse(end_date))


def product_form(
    kind_grade_id: int = Form(...),
    name: str = Form(..., min_length=1, max_length=100),
    price: int = Form(..., ge=0),
    info: str = Form(""),
) -> ProductForm:
    return ProductForm(kind_grade_id=kind_grade_id, name=name, price=price, info=info)
