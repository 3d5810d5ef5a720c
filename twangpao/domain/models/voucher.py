from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class _UpstreamModel(BaseModel):
    """Upstream payloads are read leniently: every field optional, unknown keys kept."""

    model_config = ConfigDict(extra="allow", frozen=True)


class VoucherDetails(_UpstreamModel):
    """Voucher state as reported by the redemption endpoint."""

    voucher_id: Optional[str] = None
    amount_baht: Optional[str] = None
    redeemed_amount_baht: Optional[str] = None
    member: Optional[int] = None
    status: Optional[str] = None
    link: Optional[str] = None
    detail: Optional[str] = None
    expire_date: Optional[int] = None
    type: Optional[str] = None
    redeemed: Optional[int] = None
    available: Optional[int] = None


class Profile(_UpstreamModel):
    full_name: Optional[str] = None
    mobile_number: Optional[str] = None


class Ticket(_UpstreamModel):
    """A single redemption record on a voucher."""

    mobile: Optional[str] = None
    update_date: Optional[int] = None
    amount_baht: Optional[str] = None
    full_name: Optional[str] = None
    profile_pic: Optional[str] = None


class RedeemData(_UpstreamModel):
    """Payload of a successful redemption (``status.data``)."""

    voucher: Optional[VoucherDetails] = None
    owner_profile: Optional[Profile] = None
    redeemer_profile: Optional[Profile] = None
    my_ticket: Optional[Ticket] = None
    tickets: Optional[List[Ticket]] = None
