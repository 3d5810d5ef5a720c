"""
Classification of upstream redeem responses.

Well-formed upstream errors are trusted and passed through unchanged so the
caller keeps their diagnostic detail. A code is synthesized only when the
upstream is silent or malformed.
"""
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from twangpao.core.exceptions import ApiError, JsonParseError
from twangpao.core.logging import get_logger
from twangpao.domain.models.response import ApiResponse

logger = get_logger(__name__)


def _has_status_code(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    status = body.get("status")
    return isinstance(status, dict) and isinstance(status.get("code"), str)


def _to_envelope(body: Any) -> Optional[ApiResponse]:
    if not isinstance(body, dict):
        return None
    try:
        return ApiResponse.from_upstream(body)
    except PydanticValidationError:
        return None


def classify_response(response: httpx.Response) -> ApiResponse:
    """
    Interpret an upstream response as an envelope.

    Args:
        response: Upstream response with its body already read

    Returns:
        ApiResponse: Success envelope, or the upstream body as an error envelope

    Raises:
        ApiError: If a non-2xx response has no recognizable error body
        JsonParseError: If a 2xx response body is not a JSON object
    """
    if not response.is_success:
        try:
            error_body = response.json()
        except ValueError:
            error_body = None

        if _has_status_code(error_body):
            envelope = _to_envelope(error_body)
            if envelope is not None:
                logger.info(
                    f"Voucher API returned error {envelope.code}",
                    extra={"status_code": response.status_code}
                )
                return envelope

        reason = response.reason_phrase or "Unknown"
        logger.warning(f"Voucher API request failed with status {response.status_code}")
        raise ApiError(
            f"API request failed: {reason}",
            status_code=response.status_code or None
        )

    try:
        body = response.json()
    except ValueError as e:
        logger.warning(f"Voucher API returned invalid JSON: {str(e)}")
        raise JsonParseError(cause=e)

    envelope = _to_envelope(body)
    if envelope is None:
        logger.warning("Voucher API returned JSON that is not an envelope object")
        raise JsonParseError("API returned an unexpected response shape")

    return envelope
