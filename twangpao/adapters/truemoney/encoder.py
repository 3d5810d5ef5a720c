import json
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from twangpao.domain.models.request import RedeemPayload

CONTENT_TYPE = "application/json"


def build_redeem_payload(mobile: str, voucher_hash: str) -> Dict[str, str]:
    """Build the upstream redeem body from validated input."""
    return {"mobile": mobile, "voucher_hash": voucher_hash}


def encode_redeem_body(body: Dict[str, Any]) -> bytes:
    """
    Serialize a redeem body to compact JSON.

    Bodies that pass the ``RedeemPayload`` schema are serialized by pydantic;
    anything else goes through the generic ``json`` encoder. Both paths emit
    the same bytes for a well-formed body.

    Args:
        body: Mapping with ``mobile`` and ``voucher_hash``

    Returns:
        bytes: UTF-8 encoded JSON
    """
    try:
        payload = RedeemPayload.model_validate(body)
    except PydanticValidationError:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    return payload.model_dump_json().encode("utf-8")
