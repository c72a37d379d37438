from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

ORDER_BY_LATEST = "latest"


class CategoryParams(BaseModel):
    """Optional category filter; every set field narrows the rows."""

    item_category_code: Optional[int] = None
    item_code: Optional[int] = None
    kind_id: Optional[int] = None
    kind_grade_id: Optional[int] = None


class ProductSearchCondition(CategoryParams):
    """GET /api/products query: category filter + name substring + ordering."""

    product_name: Optional[str] = None
    order_by: str = ORDER_BY_LATEST  # "latest" -> newest first, anything else -> price desc
