from fastapi import status

from .base import AppError


class CatalogFetchError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, operation: str, message: str | None = None):
        self.operation = operation
        detail = f"Failed to fetch {operation}"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)


class UnsupportedContentKindError(AppError):
    status_code = 422

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Invalid content type: {kind!r}. Use 'movie' or 'series'.")
