"""
Unit tests: model metadata agrees with the initial migration.
"""
import re
from pathlib import Path

from market.db import Base
import market.models  # noqa: F401

MIGRATION = Path(__file__).resolve().parents[2] / "alembic" / "versions" / "001_initial_schema.py"


def test_migration_indexes_are_declared_on_models():
    migrated = set(re.findall(r'op\.create_index\(\s*"([^"]+)"', MIGRATION.read_text(encoding="utf-8")))
    declared = {index.name for table in Base.metadata.tables.values() for index in table.indexes}
    assert migrated == declared


def test_product_created_at_index_is_descending():
    index = next(i for i in Base.metadata.tables["products"].indexes if i.name == "idx_products_created_at")
    assert "DESC" in str(index.expressions[0])
