"""
Category hierarchy: ItemCategory > Item > Kind > KindGrade (< Grade).
Codes of ItemCategory and Item are the natural keys used by the public price data.
"""
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market.db import Base


class ItemCategory(Base):
    __tablename__ = "item_categories"

    item_category_code: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    items: Mapped[list["Item"]] = relationship("Item", back_populates="item_category")


class Item(Base):
    __tablename__ = "items"

    item_code: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    item_category_code: Mapped[int] = mapped_column(
        Integer, ForeignKey("item_categories.item_category_code", ondelete="RESTRICT"), nullable=False, index=True
    )

    item_category: Mapped["ItemCategory"] = relationship("ItemCategory", back_populates="items")
    kinds: Mapped[list["Kind"]] = relationship("Kind", back_populates="item")


class Kind(Base):
    __tablename__ = "kinds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    item_code: Mapped[int] = mapped_column(
        Integer, ForeignKey("items.item_code", ondelete="RESTRICT"), nullable=False, index=True
    )

    item: Mapped["Item"] = relationship("Item", back_populates="kinds")
    kind_grades: Mapped[list["KindGrade"]] = relationship("KindGrade", back_populates="kind")


class Grade(Base):
    __tablename__ = "grades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grade_rank: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)


class KindGrade(Base):
    __tablename__ = "kind_grades"
    __table_args__ = (UniqueConstraint("kind_id", "grade_id", name="uq_kind_grades_kind_id_grade_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("kinds.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    grade_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("grades.id", ondelete="RESTRICT"), nullable=False
    )

    kind: Mapped["Kind"] = relationship("Kind", back_populates="kind_grades")
    grade: Mapped["Grade"] = relationship("Grade")
    products: Mapped[list["Product"]] = relationship("Product", back_populates="kind_grade")
