from typing import Optional

from twangpao.domain.models.response import ApiResponse


class VoucherException(Exception):
    """
    Base exception for voucher redemption failures.

    Every failure carries a normalized ``code`` so it can be turned into an
    error envelope at the service boundary.
    """

    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.detail = detail
        self.code = code or self.default_code
        self.cause = cause
        super().__init__(self.detail)
        if cause is not None:
            self.__cause__ = cause

    def to_response(self, include_cause: bool = False) -> ApiResponse:
        """Convert exception to an error envelope."""
        return ApiResponse.failure(
            self.code,
            self.detail,
            cause=self.cause if include_cause else None
        )


class ValidationError(VoucherException):
    """Raised when a phone number or voucher code is malformed."""

    default_code = "VALIDATION_ERROR"


class ApiError(VoucherException):
    """Raised when the upstream answers non-2xx without a usable error body."""

    default_code = "HTTP_ERROR_UNKNOWN"

    def __init__(
        self,
        detail: str = "API request failed: Unknown",
        code: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        if code is None:
            code = f"HTTP_ERROR_{status_code}" if status_code else self.default_code
        super().__init__(detail=detail, code=code)
        self.status_code = status_code


class NetworkError(VoucherException):
    """Raised when the upstream could not be reached."""

    default_code = "NETWORK_ERROR"


class JsonParseError(VoucherException):
    """Raised when a successful upstream response is not valid JSON."""

    default_code = "INVALID_JSON_RESPONSE"

    def __init__(self, detail: str = "API returned invalid JSON", cause: Optional[BaseException] = None):
        super().__init__(detail=detail, cause=cause)
