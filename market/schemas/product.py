from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProductForm(BaseModel):
    """Text fields of the register / update multipart form."""

    kind_grade_id: int
    name: str = Field(min_length=1, max_length=100)
    price: int = Field(ge=0)
    info: str = ""


class ProductShortInfo(BaseModel):
    """GET /api/products item."""

    product_id: int
    name: str
    price: int
    sig_src: Optional[str] = None
    seller_name: str
    created_at: datetime


class ImageSchema(BaseModel):
    name: str
    src: str


class ProductDetail(BaseModel):
    """GET /api/products/{product_id}."""

    product_id: int
    name: str
    price: int
    info: str
    seller_id: int
    seller_name: str
    item_category_code: int
    item_category_name: str
    item_code: int
    item_name: str
    kind_id: int
    kind_name: str
    kind_grade_id: int
    grade_rank: str
    avg_price: Optional[float] = None  # all products of the same kind grade
    sig_img: Optional[ImageSchema] = None
    imgs: list[ImageSchema] = Field(default_factory=list)
    created_at: datetime


class ProductUpdateForm(BaseModel):
    """GET /api/products/update/{product_id}: current values for the edit form."""

    product_id: int
    name: str
    price: int
    info: str
    item_category_code: int
    item_code: int
    kind_id: int
    kind_grade_id: int
    sig_img: Optional[ImageSchema] = None
    imgs: list[ImageSchema] = Field(default_factory=list)


class ProductSigSrc(BaseModel):
    """Main page tile."""

    product_id: int
    sig_src: Optional[str] = None


class SaleListItem(BaseModel):
    product_id: int
    name: str
    price: int
    sig_src: Optional[str] = None
    created_at: datetime
