import asyncio
from typing import Dict, Optional

import httpx

from twangpao.adapters.interfaces.cache import CacheStrategy
from twangpao.adapters.truemoney.classifier import classify_response
from twangpao.adapters.truemoney.client import TrueMoneyVoucherClient
from twangpao.adapters.truemoney.encoder import build_redeem_payload
from twangpao.adapters.truemoney.validators import get_valid_voucher_code, is_valid_thai_phone_number
from twangpao.core.config import Settings
from twangpao.core.exceptions import (
    JsonParseError,
    NetworkError,
    ValidationError,
    VoucherException,
)
from twangpao.core.logging import get_logger
from twangpao.domain.models.response import ApiResponse
from twangpao.infrastructure.cache.memory_cache import MemoryCache

logger = get_logger(__name__)

SUCCESS_CACHE_TTL = 60 * 60 * 24  # 24 hours
ERROR_CACHE_TTL = 60 * 5  # 5 minutes

INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
INVALID_VOUCHER_CODE = "INVALID_VOUCHER_CODE"
NETWORK_ERROR = "NETWORK_ERROR"


class RedeemService:
    """
    Redeems vouchers against the upstream and normalizes the outcome.

    ``redeem`` never raises: validation failures, upstream errors, transport
    failures and malformed responses all come back as an error envelope.
    Results of upstream calls are cached per phone number and voucher code,
    and concurrent calls for the same key share a single upstream request.
    """

    def __init__(
        self,
        client: TrueMoneyVoucherClient,
        cache: Optional[CacheStrategy] = None,
        success_ttl: float = SUCCESS_CACHE_TTL,
        error_ttl: float = ERROR_CACHE_TTL
    ):
        """
        Initialize the service.

        Args:
            client: Upstream voucher client
            cache: Response cache, a fresh MemoryCache when omitted
            success_ttl: Seconds a success envelope stays cached
            error_ttl: Seconds an error envelope stays cached
        """
        self.client = client
        self.cache = cache if cache is not None else MemoryCache()
        self.success_ttl = success_ttl
        self.error_ttl = error_ttl
        self._in_flight: Dict[str, "asyncio.Task[ApiResponse]"] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "RedeemService":
        """Build a service wired from application settings."""
        client = TrueMoneyVoucherClient(
            base_url=settings.UPSTREAM_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT,
            http_client=http_client
        )
        return cls(
            client=client,
            cache=MemoryCache(max_entries=settings.CACHE_MAX_ENTRIES),
            success_ttl=settings.SUCCESS_CACHE_TTL,
            error_ttl=settings.ERROR_CACHE_TTL
        )

    @staticmethod
    def build_cache_key(mobile: str, voucher_hash: str) -> str:
        return f"{mobile}:{voucher_hash}"

    def ttl_for(self, response: ApiResponse) -> float:
        """Success is final and kept long; errors are retried sooner."""
        return self.success_ttl if response.is_success else self.error_ttl

    async def redeem(self, phone_number: Optional[str], voucher_code: Optional[str]) -> ApiResponse:
        """
        Redeem a voucher for a phone number.

        Args:
            phone_number: Thai mobile number, local or ``66`` form
            voucher_code: Voucher code or voucher link

        Returns:
            ApiResponse: Success envelope or error envelope
        """
        mobile = (phone_number or "").strip()
        voucher_hash = get_valid_voucher_code(voucher_code) if voucher_code else ""

        try:
            self._validate(mobile, voucher_hash)
        except ValidationError as e:
            logger.info(f"Rejected redeem request: {e.code}")
            return e.to_response()

        cache_key = self.build_cache_key(mobile, voucher_hash)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Serving redeem result from cache for voucher {voucher_hash}")
            return cached.model_copy(deep=True)

        task = self._in_flight.get(cache_key)
        if task is None:
            task = asyncio.create_task(
                self._fetch_and_store(cache_key, build_redeem_payload(mobile, voucher_hash))
            )
            self._in_flight[cache_key] = task
            task.add_done_callback(lambda _: self._in_flight.pop(cache_key, None))
        else:
            logger.debug(f"Joining in-flight redeem request for voucher {voucher_hash}")

        # A cancelled caller must not cancel the request other callers share
        result = await asyncio.shield(task)
        # The stored envelope is never handed out, callers get copies
        return result.model_copy(deep=True)

    def _validate(self, mobile: str, voucher_hash: str) -> None:
        if not is_valid_thai_phone_number(mobile):
            raise ValidationError("Invalid Thai Phone Number.", code=INVALID_PHONE_NUMBER)
        if not voucher_hash:
            raise ValidationError("Invalid Voucher Code.", code=INVALID_VOUCHER_CODE)

    async def _fetch_and_store(self, cache_key: str, body: Dict[str, str]) -> ApiResponse:
        try:
            response = await self.client.redeem(body)
            result = classify_response(response)
        except (NetworkError, JsonParseError) as e:
            result = e.to_response(include_cause=True)
        except VoucherException as e:
            result = e.to_response()
        except Exception as e:
            logger.error(f"Unexpected error in redeem: {str(e)}", exc_info=True)
            return ApiResponse.failure(NETWORK_ERROR, str(e) or "Unexpected error", cause=e)

        await self.cache.set(cache_key, result, self.ttl_for(result))
        logger.info(
            f"Redeem for voucher {body['voucher_hash']} finished with {result.code}",
            extra={"cache_ttl": self.ttl_for(result)}
        )
        return result

    async def aclose(self) -> None:
        """Release the upstream client."""
        await self.client.aclose()
