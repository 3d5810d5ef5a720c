"""
TW Angpao Adaptor - redeems TrueMoney gift vouchers.

This package validates redemption input, calls the upstream redeem endpoint,
normalizes every outcome into a uniform envelope and caches results per
phone number and voucher code.
"""

__version__ = "0.1.0"
