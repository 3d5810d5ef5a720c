"""Domain models for voucher redemption."""

from twangpao.domain.models.request import RedeemPayload, RedeemRequest
from twangpao.domain.models.response import SUCCESS_CODE, ApiResponse, ResponseStatus
from twangpao.domain.models.voucher import Profile, RedeemData, Ticket, VoucherDetails

__all__ = [
    "RedeemRequest",
    "RedeemPayload",
    "ApiResponse",
    "ResponseStatus",
    "SUCCESS_CODE",
    "RedeemData",
    "VoucherDetails",
    "Profile",
    "Ticket",
]
