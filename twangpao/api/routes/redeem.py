from fastapi import APIRouter, Depends, Response, status

from twangpao.api.dependencies import get_redeem_service
from twangpao.core.exceptions import JsonParseError
from twangpao.core.logging import get_logger
from twangpao.domain.models.request import RedeemRequest
from twangpao.domain.models.response import ApiResponse
from twangpao.services.redeem_service import (
    INVALID_PHONE_NUMBER,
    INVALID_VOUCHER_CODE,
    NETWORK_ERROR,
    RedeemService,
)

redeem_router = APIRouter()
logger = get_logger(__name__)

CLIENT_ERROR_CODES = {INVALID_PHONE_NUMBER, INVALID_VOUCHER_CODE}
SERVER_ERROR_CODES = {NETWORK_ERROR, JsonParseError.default_code}


def status_code_for(result: ApiResponse) -> int:
    """
    Map an envelope to the HTTP status returned to the caller.

    Synthesized transport, decoding and upstream HTTP failures are server
    errors. Input errors and error codes passed through from the upstream
    are client errors.
    """
    if result.is_success:
        return status.HTTP_200_OK

    code = result.code or ""
    if code in CLIENT_ERROR_CODES:
        return status.HTTP_400_BAD_REQUEST
    if code in SERVER_ERROR_CODES or code.startswith("HTTP_ERROR_"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


@redeem_router.post(
    "",
    summary="Redeem a voucher",
    description="Redeems a gift voucher for a Thai mobile number and returns the normalized envelope."
)
async def redeem_voucher(
    body: RedeemRequest,
    response: Response,
    redeem_service: RedeemService = Depends(get_redeem_service)
):
    result = await redeem_service.redeem(body.phone_number, body.voucher_code)
    response.status_code = status_code_for(result)
    logger.info(
        f"Redeem request answered with {result.code}",
        extra={"status_code": response.status_code}
    )
    return result.to_dict()
