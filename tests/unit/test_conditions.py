"""
Unit tests: optional predicates are only added for the inputs that are set.
"""
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from market.models.product import Product
from market.repositories.conditions import (
    category_conditions,
    order_condition,
    product_name_contains,
    search_conditions,
)
from market.schemas.condition import CategoryParams, ProductSearchCondition


def _sql(expr) -> str:
    return str(expr.compile(dialect=postgresql.dialect()))


def test_no_filters_no_predicates():
    assert search_conditions(ProductSearchCondition()) == []
    assert category_conditions(CategoryParams()) == []


def test_blank_name_adds_no_predicate():
    assert product_name_contains(None) is None
    assert product_name_contains("") is None
    assert product_name_contains("   ") is None


def test_name_is_substring_match_with_escaped_wildcards():
    sql = _sql(product_name_contains("50%"))
    assert "products.name LIKE" in sql
    assert "ESCAPE" in sql


def test_each_set_field_adds_one_predicate():
    condition = ProductSearchCondition(product_name="배추", item_category_code=200, kind_grade_id=3)
    sql = [_sql(p) for p in search_conditions(condition)]

    assert len(sql) == 3
    assert any("items.item_category_code" in s for s in sql)
    assert any("kind_grades.id" in s for s in sql)


def test_category_conditions_cover_all_levels():
    params = CategoryParams(item_category_code=200, item_code=211, kind_id=1, kind_grade_id=2)
    sql = " ".join(_sql(p) for p in category_conditions(params))

    for column in ("items.item_category_code", "items.item_code", "kinds.id", "kind_grades.id"):
        assert column in sql


def test_order_condition():
    latest = _sql(select(Product.id).order_by(order_condition("latest")))
    by_price = _sql(select(Product.id).order_by(order_condition("price")))

    assert "ORDER BY products.created_at DESC" in latest
    assert "ORDER BY products.price DESC" in by_price
