from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResultResponse(BaseModel, Generic[T]):
    """Envelope of every successful JSON body: {"data": ...}."""

    data: T


class PagingResultResponse(BaseModel, Generic[T]):
    data: list[T]
    page_num: int
    total_page_num: int


class MessageResponse(BaseModel):
    message: str
