from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from market.models.order import OrderStatus


class PercentAndPrice(BaseModel):
    """One slice of the category pie graph."""

    name: str
    price: int
    percentage: float


class PricePercentPieGraph(BaseModel):
    """GET /api/products/statistics/{product_id}."""

    top_rank_percent_list: list[PercentAndPrice]
    seller_percent: PercentAndPrice


class PriceCompareByPeriod(BaseModel):
    """Seller monthly totals next to the all-seller monthly average."""

    date_list: list[str]
    seller_price_list: list[int]
    avg_price_list: list[int]


class OrderPricePercentileGraphByPeriod(BaseModel):
    """Top-X% standing per month; None for months the seller sold nothing."""

    date_list: list[str]
    percentile_list: list[Optional[float]]


class OrderCountCompareByPeriod(BaseModel):
    date_list: list[str]
    my_count_list: list[int]
    avg_count_list: list[int]


class SaleHistoryItem(BaseModel):
    order_product_id: int
    order_id: int
    product_id: int
    product_name: str
    buyer_name: str
    count: int
    price: int
    total_price: int
    status: OrderStatus
    ordered_at: datetime
