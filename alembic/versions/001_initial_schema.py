"""Initial schema: users, category hierarchy, products, product images, orders, order products.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Category hierarchy: item_categories > items > kinds > kind_grades (< grades).
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE TYPE user_role_enum AS ENUM ('buyer', 'seller', 'admin')")
    op.execute("CREATE TYPE user_status_enum AS ENUM ('exist', 'deleted')")
    op.execute("CREATE TYPE image_type_enum AS ENUM ('signature', 'normal')")
    op.execute("CREATE TYPE order_status_enum AS ENUM ('ordered', 'canceled')")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", postgresql.ENUM("buyer", "seller", "admin", name="user_role_enum", create_type=False), nullable=False, server_default="buyer"),
        sa.Column("status", postgresql.ENUM("exist", "deleted", name="user_status_enum", create_type=False), nullable=False, server_default="exist"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "item_categories",
        sa.Column("item_category_code", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(50), nullable=False),
    )

    op.create_table(
        "items",
        sa.Column("item_code", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("item_category_code", sa.Integer(), sa.ForeignKey("item_categories.item_category_code", ondelete="RESTRICT"), nullable=False),
    )
    op.create_index("ix_items_item_category_code", "items", ["item_category_code"])

    op.create_table(
        "kinds",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("item_code", sa.Integer(), sa.ForeignKey("items.item_code", ondelete="RESTRICT"), nullable=False),
    )
    op.create_index("ix_kinds_item_code", "kinds", ["item_code"])

    op.create_table(
        "grades",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("grade_rank", sa.String(20), nullable=False, unique=True),
    )

    op.create_table(
        "kind_grades",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("kind_id", sa.Integer(), sa.ForeignKey("kinds.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("grade_id", sa.Integer(), sa.ForeignKey("grades.id", ondelete="RESTRICT"), nullable=False),
        sa.UniqueConstraint("kind_id", "grade_id", name="uq_kind_grades_kind_id_grade_id"),
    )
    op.create_index("ix_kind_grades_kind_id", "kind_grades", ["kind_id"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("info", sa.Text(), nullable=False, server_default=""),
        sa.Column("kind_grade_id", sa.Integer(), sa.ForeignKey("kind_grades.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_kind_grade_id", "products", ["kind_grade_id"])
    op.create_index("ix_products_user_id", "products", ["user_id"])
    op.create_index("idx_products_created_at", "products", [sa.text("created_at DESC")])

    op.create_table(
        "product_images",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("path", sa.String(255), nullable=False),
        sa.Column("type", postgresql.ENUM("signature", "normal", name="image_type_enum", create_type=False), nullable=False, server_default="normal"),
    )
    op.create_index("ix_product_images_product_id", "product_images", ["product_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "order_products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("status", postgresql.ENUM("ordered", "canceled", name="order_status_enum", create_type=False), nullable=False, server_default="ordered"),
    )
    op.create_index("ix_order_products_order_id", "order_products", ["order_id"])
    op.create_index("ix_order_products_product_id", "order_products", ["product_id"])


def downgrade() -> None:
    op.drop_table("order_products")
    op.drop_table("orders")
    op.drop_table("product_images")
    op.drop_table("products")
    op.drop_table("kind_grades")
    op.drop_table("grades")
    op.drop_table("kinds")
    op.drop_table("items")
    op.drop_table("item_categories")
    op.drop_table("users")
    op.execute("DROP TYPE order_status_enum")
    op.execute("DROP TYPE image_type_enum")
    op.execute("DROP TYPE user_status_enum")
    op.execute("DROP TYPE user_role_enum")
