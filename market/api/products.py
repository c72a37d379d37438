"""
Products API - search, detail, registration/update (seller), category sales pie graph, main page.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from market.api.params import product_form, product_search_condition
from market.config import get_settings
from market.core.auth import require_role
from market.db import get_db
from market.models.user import User, UserRole
from market.schemas.common import MessageResponse, ResultResponse
from market.schemas.condition import ProductSearchCondition
from market.schemas.product import ProductDetail, ProductForm, ProductShortInfo, ProductSigSrc, ProductUpdateForm
from market.schemas.statistics import PricePercentPieGraph
from market.services import product_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=ResultResponse[list[ProductShortInfo]],
    summary="Search products",
    description="Every given filter narrows the list; order_by=latest sorts newest first, anything else by price.",
)
async def get_product_list(
    condition: ProductSearchCondition = Depends(product_search_condition),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[list[ProductShortInfo]]:
    return ResultResponse(data=await product_service.product_short_info_list(session, condition))


@router.get(
    "/main-page/latest",
    response_model=ResultResponse[list[ProductSigSrc]],
    summary="Latest products for the main page",
)
async def main_page_latest(session: AsyncSession = Depends(get_db)) -> ResultResponse[list[ProductSigSrc]]:
    limit = get_settings().main_page_limit
    return ResultResponse(data=await product_service.latest_products(session, limit))


@router.get(
    "/main-page/order-count",
    response_model=ResultResponse[list[ProductSigSrc]],
    summary="Most ordered products of the last month for the main page",
)
async def main_page_order_count(session: AsyncSession = Depends(get_db)) -> ResultResponse[list[ProductSigSrc]]:
    limit = get_settings().main_page_limit
    return ResultResponse(data=await product_service.top_order_count_products(session, limit))


@router.get(
    "/statistics/{product_id}",
    response_model=ResultResponse[PricePercentPieGraph],
    summary="Category sales shares",
    description="Top sellers of the product's kind grade this month (with an 'Other' remainder) and the product's seller.",
    responses={404: {"description": "Product not found"}},
)
async def total_price_percent_by_category(
    product_id: int,
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[PricePercentPieGraph]:
    return ResultResponse(data=await product_service.price_percent_pie_graph(session, product_id))


@router.get(
    "/update/{product_id}",
    response_model=ResultResponse[ProductUpdateForm],
    summary="Current values for the edit form (owning seller)",
    responses={403: {"description": "Not the product's seller"}, 404: {"description": "Product not found"}},
)
async def get_update_form(
    product_id: int,
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[ProductUpdateForm]:
    await product_service.seller_access_check(session, product_id, current_user.id)
    return ResultResponse(data=await product_service.product_update_form(session, product_id))


@router.post(
    "/update/{product_id}",
    response_model=ResultResponse[MessageResponse],
    summary="Update product (owning seller)",
    responses={400: {"description": "No image file"}, 403: {"description": "Not the product's seller"}},
)
async def update_product(
    product_id: int,
    form: ProductForm = Depends(product_form),
    sig_img: UploadFile = File(...),
    img: Optional[list[UploadFile]] = File(None),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[MessageResponse]:
    await product_service.update_product(session, product_id, current_user.id, form, sig_img, img)
    return ResultResponse(data=MessageResponse(message="Product updated"))


@router.get(
    "/{product_id}",
    response_model=ResultResponse[ProductDetail],
    summary="Product detail",
    responses={404: {"description": "Product not found"}},
)
async def get_product_detail(
    product_id: int,
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[ProductDetail]:
    return ResultResponse(data=await product_service.product_detail_info(session, product_id))


@router.post(
    "",
    response_model=ResultResponse[MessageResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register product (seller)",
    description="Multipart form: kind_grade_id, name, price, info, sig_img and one or more img files.",
    responses={400: {"description": "No image file"}, 404: {"description": "Kind grade not found"}},
)
async def register_product(
    form: ProductForm = Depends(product_form),
    sig_img: UploadFile = File(...),
    img: Optional[list[UploadFile]] = File(None),
    current_user: User = require_role(UserRole.SELLER),
    session: AsyncSession = Depends(get_db),
) -> ResultResponse[MessageResponse]:
    await product_service.register_product(session, current_user.id, form, sig_img, img)
    return ResultResponse(data=MessageResponse(message="Product registered"))
