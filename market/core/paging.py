from __future__ import annotations

import math


def get_offset(page_num: int, page_size: int) -> int:
    return (page_num - 1) * page_size


def get_total_page_num(total: int, page_size: int) -> int:
    """Number of pages needed for `total` rows; 0 when there are no rows."""
    return math.ceil(total / page_size)
