"""
Input validation for redemption requests.

Both helpers are pure: they never raise and never touch the network.
"""
import re

_THAI_LOCAL_NUMBER = re.compile(r"^0[689][0-9]{8}$")
_NON_DIGITS = re.compile(r"[^0-9]")
_VOUCHER_MARKER = re.compile(r"\??v=")
_ALPHANUMERIC_RUN = re.compile(r"[0-9A-Za-z]+")

THAI_COUNTRY_CODE = "66"


def is_valid_thai_phone_number(phone_number: str) -> bool:
    """
    Check whether the input is a Thai mobile number.

    Non-digit characters are ignored, so ``"081-234-5678"`` is accepted.
    The ``66`` country-code form is checked as its local equivalent.

    Args:
        phone_number: Raw phone number input

    Returns:
        bool: True for a 10 digit local number starting with 06, 08 or 09
    """
    digits = _NON_DIGITS.sub("", phone_number or "")

    if digits.startswith(THAI_COUNTRY_CODE) and len(digits) == 11:
        return bool(_THAI_LOCAL_NUMBER.match("0" + digits[2:]))

    return bool(_THAI_LOCAL_NUMBER.match(digits))


def get_valid_voucher_code(voucher_code: str) -> str:
    """
    Extract the voucher code from a bare code or a voucher link.

    For links such as ``https://gift.truemoney.com/campaign/?v=abc123`` the
    part after ``v=`` is used. The first run of ASCII letters and digits is
    returned.

    Args:
        voucher_code: Raw voucher code or link

    Returns:
        str: The extracted code, or an empty string if none was found
    """
    parts = _VOUCHER_MARKER.split(voucher_code or "", maxsplit=1)
    candidate = parts[1] if len(parts) > 1 and parts[1] else parts[0]

    match = _ALPHANUMERIC_RUN.search(candidate)
    return match.group(0) if match else ""
