"""Adaptor for the TrueMoney gift voucher redemption endpoint."""

from twangpao.adapters.truemoney.classifier import classify_response
from twangpao.adapters.truemoney.client import TrueMoneyVoucherClient
from twangpao.adapters.truemoney.encoder import build_redeem_payload, encode_redeem_body
from twangpao.adapters.truemoney.validators import get_valid_voucher_code, is_valid_thai_phone_number

__all__ = [
    "TrueMoneyVoucherClient",
    "classify_response",
    "build_redeem_payload",
    "encode_redeem_body",
    "get_valid_voucher_code",
    "is_valid_thai_phone_number",
]
