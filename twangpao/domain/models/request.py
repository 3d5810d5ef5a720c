from pydantic import BaseModel, ConfigDict, Field


class RedeemRequest(BaseModel):
    """Raw redemption input as received from a caller, not yet validated."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str = Field(..., alias="phoneNumber", description="Phone number to credit")
    voucher_code: str = Field(..., alias="voucherCode", description="Voucher code or voucher link")


class RedeemPayload(BaseModel):
    """
    Body of the upstream redeem call.

    Field names match the upstream wire format exactly; the model doubles as
    the schema check that gates the fast encoding path.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    mobile: str
    voucher_hash: str
