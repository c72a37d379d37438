"""
Product registration/update, product queries for listing and detail pages,
and the category sales pie graph shown on a product page.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from market.config import get_settings
from market.core.errors import AccessDeniedError, FileSaveError, NotFoundError
from market.models.product import ImageType, Product, ProductImage
from market.repositories.category_repo import CategoryRepository
from market.repositories.order_product_repo import OrderProductRepository
from market.repositories.product_repo import ProductRepository
from market.schemas.condition import CategoryParams, ProductSearchCondition
from market.schemas.product import (
    ImageSchema,
    ProductDetail,
    ProductForm,
    ProductShortInfo,
    ProductSigSrc,
    ProductUpdateForm,
)
from market.schemas.statistics import PricePercentPieGraph
from market.services import file_store
from market.services.period import YearMonth, one_month_before_midnight
from market.services.statistics import build_price_percent_slices, to_percent_and_price

logger = logging.getLogger(__name__)


def _image_schema(image: Optional[ProductImage]) -> Optional[ImageSchema]:
    if image is None:
        return None
    return ImageSchema(name=image.name, src=file_store.image_src(image.path))


def sig_src(product: Product) -> Optional[str]:
    sig = product.signature_image
    return file_store.image_src(sig.path) if sig else None


async def _images_for(sig_img: UploadFile, imgs: Sequence[UploadFile]) -> list[ProductImage]:
    sig = await file_store.store_file(sig_img)
    try:
        normals = await file_store.store_files(imgs)
    except FileSaveError:
        file_store.delete_files([sig.path])
        raise
    images = [ProductImage(name=sig.upload_name, path=sig.path, type=ImageType.SIGNATURE)]
    images.extend(ProductImage(name=f.upload_name, path=f.path, type=ImageType.NORMAL) for f in normals)
    return images


async def _check_kind_grade(session: AsyncSession, kind_grade_id: int) -> None:
    if await CategoryRepository(session).get_kind_grade(kind_grade_id) is None:
        raise NotFoundError(f"Kind grade not found: {kind_grade_id}")


async def register_product(
    session: AsyncSession,
    seller_id: int,
    form: ProductForm,
    sig_img: UploadFile,
    imgs: Optional[Sequence[UploadFile]],
) -> int:
    """
    Store the images, then persist and commit the product with its images.
    Stored files are removed again when the database work fails. Returns the new product id.
    """
    file_store.check_not_empty(imgs)
    await _check_kind_grade(session, form.kind_grade_id)

    images = await _images_for(sig_img, imgs)
    try:
        product = Product(
            name=form.name,
            price=form.price,
            info=form.info,
            kind_grade_id=form.kind_grade_id,
            user_id=seller_id,
            images=images,
        )
        product_id = await ProductRepository(session).save(product)
        await session.commit()
    except Exception:
        file_store.delete_files([image.path for image in images])
        raise
    logger.info("product_registered", extra={"user_id": seller_id, "product_id": product_id})
    return product_id


async def seller_access_check(session: AsyncSession, product_id: int, seller_id: int) -> Product:
    """The product if it belongs to the seller; 404 if it does not exist, 403 if it is someone else's."""
    repo = ProductRepository(session)
    product = await repo.get_by_id_and_seller_id(product_id, seller_id)
    if product is not None:
        return product
    if await repo.get_by_id(product_id) is None:
        raise NotFoundError("Product not found")
    raise AccessDeniedError("No permission to modify this product")


async def update_product(
    session: AsyncSession,
    product_id: int,
    seller_id: int,
    form: ProductForm,
    sig_img: UploadFile,
    imgs: Optional[Sequence[UploadFile]],
) -> None:
    """
    Replace fields and images of the seller's own product.
    Old image files are removed only after the commit; new ones are removed if it fails.
    """
    file_store.check_not_empty(imgs)
    product = await seller_access_check(session, product_id, seller_id)
    await _check_kind_grade(session, form.kind_grade_id)

    old_paths = [image.path for image in product.images]
    images = await _images_for(sig_img, imgs)
    try:
        product.name = form.name
        product.price = form.price
        product.info = form.info
        product.kind_grade_id = form.kind_grade_id
        product.images = images
        await session.flush()
        await session.commit()
    except Exception:
        file_store.delete_files([image.path for image in images])
        raise

    file_store.delete_files(old_paths)
    logger.info("product_updated", extra={"user_id": seller_id, "product_id": product_id})


async def product_short_info_list(
    session: AsyncSession, condition: ProductSearchCondition
) -> list[ProductShortInfo]:
    products = await ProductRepository(session).find_by_condition(condition)
    return [
        ProductShortInfo(
            product_id=p.id,
            name=p.name,
            price=p.price,
            sig_src=sig_src(p),
            seller_name=p.seller.name,
            created_at=p.created_at,
        )
        for p in products
    ]


async def _get_with_category(session: AsyncSession, product_id: int) -> Product:
    product = await ProductRepository(session).get_by_id_with_category(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def product_detail_info(session: AsyncSession, product_id: int) -> ProductDetail:
    product = await _get_with_category(session, product_id)
    kind_grade = product.kind_grade
    kind = kind_grade.kind
    item = kind.item
    avg_price = await ProductRepository(session).get_avg_price(kind_grade.id)
    return ProductDetail(
        product_id=product.id,
        name=product.name,
        price=product.price,
        info=product.info,
        seller_id=product.seller.id,
        seller_name=product.seller.name,
        item_category_code=item.item_category.item_category_code,
        item_category_name=item.item_category.name,
        item_code=item.item_code,
        item_name=item.name,
        kind_id=kind.id,
        kind_name=kind.name,
        kind_grade_id=kind_grade.id,
        grade_rank=kind_grade.grade.grade_rank,
        avg_price=avg_price,
        sig_img=_image_schema(product.signature_image),
        imgs=[_image_schema(image) for image in product.normal_images],
        created_at=product.created_at,
    )


async def product_update_form(session: AsyncSession, product_id: int) -> ProductUpdateForm:
    product = await _get_with_category(session, product_id)
    kind = product.kind_grade.kind
    return ProductUpdateForm(
        product_id=product.id,
        name=product.name,
        price=product.price,
        info=product.info,
        item_category_code=kind.item.item_category_code,
        item_code=kind.item_code,
        kind_id=kind.id,
        kind_grade_id=product.kind_grade_id,
        sig_img=_image_schema(product.signature_image),
        imgs=[_image_schema(image) for image in product.normal_images],
    )


async def latest_products(session: AsyncSession, limit: int) -> list[ProductSigSrc]:
    products = await ProductRepository(session).find_latest(limit)
    return [ProductSigSrc(product_id=p.id, sig_src=sig_src(p)) for p in products]


async def top_order_count_products(
    session: AsyncSession, limit: int, now: Optional[datetime] = None
) -> list[ProductSigSrc]:
    """Products with the most ordered lines from one month ago (00:00) until now."""
    end = now or datetime.now(timezone.utc)
    start = one_month_before_midnight(end)
    logger.info("main_page_order_count window start=%s end=%s", start.isoformat(), end.isoformat())
    products = await ProductRepository(session).find_top_by_order_count(limit, start, end)
    return [ProductSigSrc(product_id=p.id, sig_src=sig_src(p)) for p in products]


async def price_percent_pie_graph(
    session: AsyncSession,
    product_id: int,
    now: Optional[datetime] = None,
    top_rank: Optional[int] = None,
) -> PricePercentPieGraph:
    """
    Sales shares in the product's kind grade for the current month:
    top-N sellers (+ "Other" remainder) and the product's own seller.
    """
    product = await ProductRepository(session).get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")

    params = CategoryParams(kind_grade_id=product.kind_grade_id)
    end = now or datetime.now(timezone.utc)
    start = YearMonth(end.year, end.month).first_moment()
    rank_count = get_settings().statistics_top_rank if top_rank is None else top_rank

    repo = OrderProductRepository(session)
    total_price_sum = await repo.get_category_total_price_sum(params, start, end)
    top = await repo.find_category_top_rank_sellers(params, start, end, rank_count)
    own = await repo.find_category_seller_total_price(params, start, end, product.user_id)

    own_price = own.total_price if own is not None else 0
    return PricePercentPieGraph(
        top_rank_percent_list=build_price_percent_slices(top, total_price_sum),
        seller_percent=to_percent_and_price(product.seller.name, own_price, total_price_sum),
    )
