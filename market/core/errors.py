"""
Domain errors. Each carries the HTTP status the API answers with;
main.py registers a single handler for MarketError.
"""
from __future__ import annotations

from fastapi import status


class MarketError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(MarketError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidPeriodError(MarketError):
    status_code = status.HTTP_400_BAD_REQUEST


class AccessDeniedError(MarketError):
    status_code = status.HTTP_403_FORBIDDEN


class FileSaveError(MarketError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class EmptyFileError(FileSaveError):
    status_code = status.HTTP_400_BAD_REQUEST
