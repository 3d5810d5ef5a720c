from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from twangpao.domain.models.voucher import RedeemData

SUCCESS_CODE = "SUCCESS"


def describe_cause(cause: BaseException) -> Dict[str, str]:
    """Render an exception as JSON-safe diagnostic detail."""
    return {"type": type(cause).__name__, "message": str(cause)}


class ResponseStatus(BaseModel):
    """The ``status`` block of the envelope."""

    model_config = ConfigDict(extra="allow", frozen=True)

    code: Optional[str] = None
    message: Optional[Any] = None
    data: Optional[Any] = None
    error: Optional[Any] = None


class ApiResponse(BaseModel):
    """
    Uniform response envelope returned by the redeem operation.

    The envelope is a success when ``status.code`` is ``SUCCESS`` and
    ``status.data`` holds a non-empty object; every other shape is an error.
    Upstream bodies keep their unknown fields, so ``to_dict()`` returns a
    passed-through body exactly as it was received.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    status: Optional[ResponseStatus] = None
    data: Optional[Any] = None

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        cause: Optional[BaseException] = None
    ) -> "ApiResponse":
        """
        Build a synthesized error envelope.

        Args:
            code: Normalized error code
            message: Human readable message
            cause: Optional underlying exception, kept as diagnostic detail

        Returns:
            ApiResponse: Error envelope with ``data`` set to null
        """
        if cause is not None:
            status = ResponseStatus(code=code, message=message, error=describe_cause(cause))
        else:
            status = ResponseStatus(code=code, message=message)
        return cls(status=status, data=None)

    @classmethod
    def from_upstream(cls, body: Dict[str, Any]) -> "ApiResponse":
        """Wrap a parsed upstream JSON object without altering it."""
        return cls.model_validate(body)

    @property
    def code(self) -> Optional[str]:
        return self.status.code if self.status else None

    @property
    def message(self) -> Optional[Any]:
        return self.status.message if self.status else None

    @property
    def is_success(self) -> bool:
        if self.status is None or self.status.code != SUCCESS_CODE:
            return False
        return isinstance(self.status.data, dict) and bool(self.status.data)

    @property
    def redeem_data(self) -> Optional[RedeemData]:
        """Typed view of the success payload, None for error envelopes."""
        if not self.is_success:
            return None
        return RedeemData.model_validate(self.status.data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the envelope to a JSON-ready dictionary."""
        return self.model_dump(mode="json", exclude_unset=True)
