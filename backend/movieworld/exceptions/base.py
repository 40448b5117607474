from fastapi import status


class AppError(Exception):
    """Base for errors that are reported to API callers as `{"detail": ...}`."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred."

    def __init__(self, detail: str | None = None, *, status_code: int | None = None):
        if detail:
            self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)

    def to_response_body(self) -> dict[str, str]:
        return {"detail": self.detail}
