"""
Service layer for the TW Angpao adaptor.
"""

from twangpao.services.redeem_service import RedeemService

__all__ = ["RedeemService"]
