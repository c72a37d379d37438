from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from market.models.category import Item, Kind, KindGrade
from market.models.order import Order, OrderProduct, OrderStatus
from market.models.product import Product
from market.repositories.conditions import order_condition, search_conditions
from market.schemas.condition import ProductSearchCondition


class ProductRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, product: Product) -> int:
        self.session.add(product)
        await self.session.flush()
        return product.id

    async def get_by_id(self, product_id: int) -> Product | None:
        r = await self.session.execute(
            select(Product)
            .options(selectinload(Product.seller), selectinload(Product.images))
            .where(Product.id == product_id)
        )
        return r.scalar_one_or_none()

    async def get_by_id_with_category(self, product_id: int) -> Product | None:
        """Product with seller, images and the whole category chain loaded."""
        r = await self.session.execute(
            select(Product)
            .options(
                selectinload(Product.seller),
                selectinload(Product.images),
                selectinload(Product.kind_grade).selectinload(KindGrade.grade),
                selectinload(Product.kind_grade)
                .selectinload(KindGrade.kind)
                .selectinload(Kind.item)
                .selectinload(Item.item_category),
            )
            .where(Product.id == product_id)
        )
        return r.scalar_one_or_none()

    async def get_by_id_and_seller_id(self, product_id: int, user_id: int) -> Product | None:
        r = await self.session.execute(
            select(Product)
            .options(selectinload(Product.images))
            .where(Product.id == product_id, Product.user_id == user_id)
        )
        return r.scalar_one_or_none()

    async def find_by_condition(self, condition: ProductSearchCondition) -> list[Product]:
        r = await self.session.execute(
            select(Product)
            .join(Product.kind_grade)
            .join(KindGrade.kind)
            .join(Kind.item)
            .options(selectinload(Product.seller), selectinload(Product.images))
            .where(*search_conditions(condition))
            .order_by(order_condition(condition.order_by), Product.id.desc())
        )
        return list(r.scalars().all())

    async def get_avg_price(self, kind_grade_id: int) -> float | None:
        r = await self.session.execute(
            select(func.avg(Product.price)).where(Product.kind_grade_id == kind_grade_id)
        )
        avg = r.scalar_one_or_none()
        return float(avg) if avg is not None else None

    async def count_by_seller(self, user_id: int) -> int:
        r = await self.session.execute(
            select(func.count(Product.id)).where(Product.user_id == user_id)
        )
        return r.scalar_one()

    async def find_by_seller(self, user_id: int, offset: int, limit: int) -> list[Product]:
        r = await self.session.execute(
            select(Product)
            .options(selectinload(Product.images))
            .where(Product.user_id == user_id)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(r.scalars().all())

    async def find_latest(self, limit: int) -> list[Product]:
        r = await self.session.execute(
            select(Product)
            .options(selectinload(Product.images))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .limit(limit)
        )
        return list(r.scalars().all())

    async def find_top_by_order_count(self, limit: int, start: datetime, end: datetime) -> list[Product]:
        """Products with the most ordered lines placed in [start, end]."""
        order_count = func.count(OrderProduct.id)
        r = await self.session.execute(
            select(Product)
            .join(OrderProduct, OrderProduct.product_id == Product.id)
            .join(Order, OrderProduct.order_id == Order.id)
            .options(selectinload(Product.images))
            .where(
                OrderProduct.status == OrderStatus.ORDERED,
                Order.created_at.between(start, end),
            )
            .group_by(Product.id)
            .order_by(order_count.desc(), Product.id.desc())
            .limit(limit)
        )
        return list(r.scalars().all())
