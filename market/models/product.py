from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market.db import Base


class ImageType(str, PyEnum):
    SIGNATURE = "signature"
    NORMAL = "normal"


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    info: Mapped[str] = mapped_column(Text, nullable=False, default="")
    kind_grade_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("kind_grades.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    kind_grade: Mapped["KindGrade"] = relationship("KindGrade", back_populates="products")
    seller: Mapped["User"] = relationship("User", back_populates="products")
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage", back_populates="product", cascade="all, delete-orphan", order_by="ProductImage.id"
    )

    @property
    def signature_image(self) -> Optional["ProductImage"]:
        return next((img for img in self.images if img.type == ImageType.SIGNATURE), None)

    @property
    def normal_images(self) -> list["ProductImage"]:
        return [img for img in self.images if img.type == ImageType.NORMAL]


# Newest-first listings (search default, main page, sale list)
Index("idx_products_created_at", Product.created_at.desc())


class ProductImage(Base):
    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)  # uploaded file name
    path: Mapped[str] = mapped_column(String(255), nullable=False)  # relative to images_root
    type: Mapped[ImageType] = mapped_column(
        Enum(
            ImageType,
            name="image_type_enum",
            create_constraint=True,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        default=ImageType.NORMAL,
    )

    product: Mapped["Product"] = relationship("Product", back_populates="images")
