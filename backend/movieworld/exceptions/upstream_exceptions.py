from fastapi import status

from .base import AppError


class UpstreamError(AppError):
    """Failure talking to TMDB or OMDb."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(detail)


class ApiKeyMissingError(UpstreamError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, source: str):
        super().__init__(
            source,
            f"Missing API key for {source}. Please add it to your configuration.",
        )


class InvalidApiKeyError(UpstreamError):
    def __init__(self, source: str):
        super().__init__(
            source,
            f"Invalid {source} API key. Please check your configuration.",
        )


class RateLimitedError(UpstreamError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, source: str):
        super().__init__(source, "Too many requests. Please try again later.")


class TransientUpstreamError(UpstreamError):
    def __init__(self, source: str, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(
            source,
            f"{source} server error ({upstream_status}). Please try again later.",
        )


class MalformedPayloadError(UpstreamError):
    def __init__(self, source: str, reason: str):
        super().__init__(source, f"Unexpected {source} response: {reason}")
