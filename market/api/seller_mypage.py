"""
Seller mypage API - own products, sale history and monthly sales statistics (seller only).
Periods are YYYY-MM; start must not be after end, end must not be after the current month.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from market.api.params import category_params, year_month_period
from market.core.auth import require_role
from market.db import get_db
from market.models.user import User, UserRole
from market.schemas.common import PagingResultResponse, ResultResponse
from market.schemas.condition import CategoryParams
from market.schemas.product import SaleListItem
from market.schemas.statistics import (
    OrderCountCompareByPeriod,
    OrderPricePercentileGraphByPeriod,
    PriceCompareByPeriod,
    SaleHistoryItem,
)
from market.services import seller_mypage_service
from market.services.period import YearMonthPeriod

router = APIRouter(prefix="/seller-mypage", tags=["seller-mypage"])

_INVALID_PERIOD = {400: {"description": "Invalid period"}}


@router.get("/sale-list", response_model=PagingResultResponse[SaleListItem], summary="Products on sale")
async def get_sale_list(
    page_size: int = Query(10, ge=1),
    page_num: int = Query(1, ge=1),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> PagingResultResponse[SaleListItem]:
    return await seller_mypage_service.sale_list(session, current_user.id, page_num, page_size)


@router.get(
    "/sale-history",
    response_model=PagingResultResponse[SaleHistoryItem],
    summary="Ordered lines of the seller's products in the period",
    responses=_INVALID_PERIOD,
)
async def get_sale_history(
    period: YearMonthPeriod = Depends(year_month_period),
    page_size: int = Query(10, ge=1),
    page_num: int = Query(1, ge=1),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> PagingResultResponse[SaleHistoryItem]:
    return await seller_mypage_service.sale_history(session, current_user.id, period, page_num, page_size)


@router.get(
    "/order-price-statistics",
    response_model=ResultResponse[PriceCompareByPeriod],
    summary="Monthly sales total vs. all-seller average",
    responses=_INVALID_PERIOD,
)
async def get_order_price_by_period(
    period: YearMonthPeriod = Depends(year_month_period),
    params: CategoryParams = Depends(category_params),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[PriceCompareByPeriod]:
    data = await seller_mypage_service.order_price_statistics(session, current_user.id, period, params)
    return ResultResponse(data=data)


@router.get(
    "/order-price-percentile-statistics",
    response_model=ResultResponse[OrderPricePercentileGraphByPeriod],
    summary="Monthly top-X% standing by sales total",
    responses=_INVALID_PERIOD,
)
async def get_order_price_percentile_by_period(
    period: YearMonthPeriod = Depends(year_month_period),
    params: CategoryParams = Depends(category_params),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[OrderPricePercentileGraphByPeriod]:
    data = await seller_mypage_service.order_price_percentile_statistics(session, current_user.id, period, params)
    return ResultResponse(data=data)


@router.get(
    "/order-count-statistics",
    response_model=ResultResponse[OrderCountCompareByPeriod],
    summary="Monthly ordered line count vs. all-seller average",
    responses=_INVALID_PERIOD,
)
async def get_order_count_by_period(
    period: YearMonthPeriod = Depends(year_month_period),
    params: CategoryParams = Depends(category_params),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[OrderCountCompareByPeriod]:
    data = await seller_mypage_service.order_count_statistics(session, current_user.id, period, params)
    return ResultResponse(data=data)
