"""
Optional WHERE predicates for product and sales queries.
Each builder returns None when its input is unset; `compose` drops the Nones.
Queries using these must join Product -> KindGrade -> Kind -> Item.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from market.models.category import Item, Kind, KindGrade
from market.models.product import Product
from market.schemas.condition import ORDER_BY_LATEST, CategoryParams, ProductSearchCondition


def product_name_contains(product_name: Optional[str]) -> Optional[ColumnElement[bool]]:
    if product_name is None or not product_name.strip():
        return None
    return Product.name.contains(product_name, autoescape=True)


def item_category_eq(item_category_code: Optional[int]) -> Optional[ColumnElement[bool]]:
    return Item.item_category_code == item_category_code if item_category_code is not None else None


def item_code_eq(item_code: Optional[int]) -> Optional[ColumnElement[bool]]:
    return Item.item_code == item_code if item_code is not None else None


def kind_eq(kind_id: Optional[int]) -> Optional[ColumnElement[bool]]:
    return Kind.id == kind_id if kind_id is not None else None


def kind_grade_eq(kind_grade_id: Optional[int]) -> Optional[ColumnElement[bool]]:
    return KindGrade.id == kind_grade_id if kind_grade_id is not None else None


def compose(*predicates: Optional[ColumnElement[bool]]) -> list[ColumnElement[bool]]:
    return [p for p in predicates if p is not None]


def category_conditions(params: CategoryParams) -> list[ColumnElement[bool]]:
    return compose(
        item_category_eq(params.item_category_code),
        item_code_eq(params.item_code),
        kind_eq(params.kind_id),
        kind_grade_eq(params.kind_grade_id),
    )


def search_conditions(condition: ProductSearchCondition) -> list[ColumnElement[bool]]:
    return compose(product_name_contains(condition.product_name)) + category_conditions(condition)


def order_condition(order_by: Optional[str]) -> UnaryExpression:
    if order_by == ORDER_BY_LATEST:
        return Product.created_at.desc()
    return Product.price.desc()
