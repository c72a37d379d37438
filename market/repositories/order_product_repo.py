"""
Sales queries over ordered lines (order_products), filtered by category and period.
Canceled lines never count toward totals or order counts.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, NamedTuple, Optional

from sqlalchemy import Select, func, literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from market.models.category import Item, Kind, KindGrade
from market.models.order import Order, OrderProduct, OrderStatus
from market.models.product import Product
from market.models.user import User
from market.repositories.conditions import category_conditions
from market.schemas.condition import CategoryParams

# Literal (unbound) arguments keep the SELECT and GROUP BY expressions identical for Postgres
MONTH_LABEL = func.to_char(
    func.timezone(literal_column("'UTC'"), Order.created_at),
    literal_column("'YYYY-MM'"),
)
LINE_TOTAL = OrderProduct.count * OrderProduct.price


class SellerTotalPrice(NamedTuple):
    seller_id: int
    seller_name: str
    total_price: int


class SellerMonthTotal(NamedTuple):
    month: str
    seller_id: int
    total_price: int


def _sales_query(*columns: Any) -> Select:
    return (
        select(*columns)
        .select_from(OrderProduct)
        .join(Order, OrderProduct.order_id == Order.id)
        .join(Product, OrderProduct.product_id == Product.id)
        .join(KindGrade, Product.kind_grade_id == KindGrade.id)
        .join(Kind, KindGrade.kind_id == Kind.id)
        .join(Item, Kind.item_code == Item.item_code)
    )


def _sales_filter(params: CategoryParams, start: datetime, end: datetime) -> list:
    return [
        OrderProduct.status == OrderStatus.ORDERED,
        Order.created_at.between(start, end),
        *category_conditions(params),
    ]


class OrderProductRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_category_total_price_sum(
        self, params: CategoryParams, start: datetime, end: datetime
    ) -> int:
        r = await self.session.execute(
            _sales_query(func.coalesce(func.sum(LINE_TOTAL), 0)).where(*_sales_filter(params, start, end))
        )
        return int(r.scalar_one())

    async def find_category_top_rank_sellers(
        self, params: CategoryParams, start: datetime, end: datetime, limit: int
    ) -> list[SellerTotalPrice]:
        total = func.sum(LINE_TOTAL)
        r = await self.session.execute(
            _sales_query(User.id, User.name, total)
            .join(User, Product.user_id == User.id)
            .where(*_sales_filter(params, start, end))
            .group_by(User.id, User.name)
            .order_by(total.desc(), User.id)
            .limit(limit)
        )
        return [SellerTotalPrice(seller_id, name, int(price)) for seller_id, name, price in r.all()]

    async def find_category_seller_total_price(
        self, params: CategoryParams, start: datetime, end: datetime, seller_id: int
    ) -> Optional[SellerTotalPrice]:
        """None when the seller has no ordered lines in the category and period."""
        r = await self.session.execute(
            _sales_query(User.id, User.name, func.sum(LINE_TOTAL))
            .join(User, Product.user_id == User.id)
            .where(*_sales_filter(params, start, end), User.id == seller_id)
            .group_by(User.id, User.name)
        )
        row = r.one_or_none()
        if row is None:
            return None
        return SellerTotalPrice(row[0], row[1], int(row[2]))

    async def count_sale_history(self, start: datetime, end: datetime, seller_id: int) -> int:
        r = await self.session.execute(
            select(func.count(OrderProduct.id))
            .select_from(OrderProduct)
            .join(Order, OrderProduct.order_id == Order.id)
            .join(Product, OrderProduct.product_id == Product.id)
            .where(Product.user_id == seller_id, Order.created_at.between(start, end))
        )
        return r.scalar_one()

    async def find_sale_history(
        self, start: datetime, end: datetime, seller_id: int, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        """Seller's ordered lines (canceled included) in [start, end], newest first."""
        r = await self.session.execute(
            select(
                OrderProduct.id.label("order_product_id"),
                Order.id.label("order_id"),
                Product.id.label("product_id"),
                Product.name.label("product_name"),
                User.name.label("buyer_name"),
                OrderProduct.count.label("count"),
                OrderProduct.price.label("price"),
                LINE_TOTAL.label("total_price"),
                OrderProduct.status.label("status"),
                Order.created_at.label("ordered_at"),
            )
            .select_from(OrderProduct)
            .join(Order, OrderProduct.order_id == Order.id)
            .join(Product, OrderProduct.product_id == Product.id)
            .join(User, Order.user_id == User.id)
            .where(Product.user_id == seller_id, Order.created_at.between(start, end))
            .order_by(Order.created_at.desc(), OrderProduct.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [dict(row) for row in r.mappings().all()]

    async def get_monthly_total_price(
        self,
        params: CategoryParams,
        start: datetime,
        end: datetime,
        seller_id: Optional[int] = None,
    ) -> dict[str, int]:
        """{"YYYY-MM": total}; all sellers unless seller_id is given. Months without sales are absent."""
        query = _sales_query(MONTH_LABEL, func.sum(LINE_TOTAL)).where(*_sales_filter(params, start, end))
        if seller_id is not None:
            query = query.where(Product.user_id == seller_id)
        r = await self.session.execute(query.group_by(MONTH_LABEL))
        return {month: int(total) for month, total in r.all()}

    async def get_monthly_order_count(
        self,
        params: CategoryParams,
        start: datetime,
        end: datetime,
        seller_id: Optional[int] = None,
    ) -> dict[str, int]:
        """{"YYYY-MM": number of ordered lines}; all sellers unless seller_id is given."""
        query = _sales_query(MONTH_LABEL, func.count(OrderProduct.id)).where(*_sales_filter(params, start, end))
        if seller_id is not None:
            query = query.where(Product.user_id == seller_id)
        r = await self.session.execute(query.group_by(MONTH_LABEL))
        return {month: int(count) for month, count in r.all()}

    async def find_monthly_seller_totals(
        self, params: CategoryParams, start: datetime, end: datetime
    ) -> list[SellerMonthTotal]:
        r = await self.session.execute(
            _sales_query(MONTH_LABEL, Product.user_id, func.sum(LINE_TOTAL))
            .where(*_sales_filter(params, start, end))
            .group_by(MONTH_LABEL, Product.user_id)
        )
        return [SellerMonthTotal(month, seller_id, int(total)) for month, seller_id, total in r.all()]
