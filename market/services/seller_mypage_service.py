"""
Seller dashboard: own product list, sale history and monthly statistics
compared against all sellers.
"""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from market.core.paging import get_offset, get_total_page_num
from market.repositories.order_product_repo import OrderProductRepository
from market.repositories.product_repo import ProductRepository
from market.repositories.user_repo import UserRepository
from market.schemas.common import PagingResultResponse
from market.schemas.condition import CategoryParams
from market.schemas.product import SaleListItem
from market.schemas.statistics import (
    OrderCountCompareByPeriod,
    OrderPricePercentileGraphByPeriod,
    PriceCompareByPeriod,
    SaleHistoryItem,
)
from market.services.product_service import sig_src
from market.services.period import YearMonthPeriod, months_between
from market.services.statistics import average_per_seller, fill_months, monthly_percentiles


async def sale_list(
    session: AsyncSession, seller_id: int, page_num: int, page_size: int
) -> PagingResultResponse[SaleListItem]:
    repo = ProductRepository(session)
    total = await repo.count_by_seller(seller_id)
    products = await repo.find_by_seller(seller_id, get_offset(page_num, page_size), page_size)
    items = [
        SaleListItem(
            product_id=p.id,
            name=p.name,
            price=p.price,
            sig_src=sig_src(p),
            created_at=p.created_at,
        )
        for p in products
    ]
    return PagingResultResponse[SaleListItem](
        data=items, page_num=page_num, total_page_num=get_total_page_num(total, page_size)
    )


async def sale_history(
    session: AsyncSession,
    seller_id: int,
    period: YearMonthPeriod,
    page_num: int,
    page_size: int,
) -> PagingResultResponse[SaleHistoryItem]:
    repo = OrderProductRepository(session)
    start, end = period.start_datetime, period.end_datetime
    total = await repo.count_sale_history(start, end, seller_id)
    rows = await repo.find_sale_history(start, end, seller_id, get_offset(page_num, page_size), page_size)
    return PagingResultResponse[SaleHistoryItem](
        data=[SaleHistoryItem.model_validate(row) for row in rows],
        page_num=page_num,
        total_page_num=get_total_page_num(total, page_size),
    )


async def order_price_statistics(
    session: AsyncSession, seller_id: int, period: YearMonthPeriod, params: CategoryParams
) -> PriceCompareByPeriod:
    repo = OrderProductRepository(session)
    start, end = period.start_datetime, period.end_datetime
    months = months_between(period)

    all_totals = fill_months(months, await repo.get_monthly_total_price(params, start, end))
    seller_totals = fill_months(months, await repo.get_monthly_total_price(params, start, end, seller_id))
    seller_count = await UserRepository(session).count_all_sellers()

    return PriceCompareByPeriod(
        date_list=months,
        seller_price_list=seller_totals,
        avg_price_list=average_per_seller(all_totals, seller_count),
    )


async def order_price_percentile_statistics(
    session: AsyncSession, seller_id: int, period: YearMonthPeriod, params: CategoryParams
) -> OrderPricePercentileGraphByPeriod:
    months = months_between(period)
    rows = await OrderProductRepository(session).find_monthly_seller_totals(
        params, period.start_datetime, period.end_datetime
    )
    return OrderPricePercentileGraphByPeriod(
        date_list=months,
        percentile_list=monthly_percentiles(months, rows, seller_id),
    )


async def order_count_statistics(
    session: AsyncSession, seller_id: int, period: YearMonthPeriod, params: CategoryParams
) -> OrderCountCompareByPeriod:
    repo = OrderProductRepository(session)
    start, end = period.start_datetime, period.end_datetime
    months = months_between(period)

    all_counts = fill_months(months, await repo.get_monthly_order_count(params, start, end))
    my_counts = fill_months(months, await repo.get_monthly_order_count(params, start, end, seller_id))
    seller_count = await UserRepository(session).count_all_sellers()

    return OrderCountCompareByPeriod(
        date_list=months,
        my_count_list=my_counts,
        avg_count_list=average_per_seller(all_counts, seller_count),
    )
