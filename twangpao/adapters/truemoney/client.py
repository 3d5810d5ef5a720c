import time
from typing import Any, Dict, Optional

import httpx

from twangpao.adapters.truemoney.encoder import CONTENT_TYPE, encode_redeem_body
from twangpao.core.exceptions import NetworkError
from twangpao.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://gift.truemoney.com"
REDEEM_PATH = "/campaign/vouchers/{voucher_hash}/redeem"


class TrueMoneyVoucherClient:
    """
    Client for the TrueMoney gift voucher redemption endpoint.

    Sends the redeem call and hands back the raw ``httpx.Response``;
    interpreting the response is left to the classifier. Transport failures,
    including timeouts, surface as ``NetworkError``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the voucher client.

        Args:
            base_url: Scheme and host of the gift service
            timeout: Request timeout in seconds
            http_client: Optional preconfigured client, mainly for tests
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

        logger.info(f"Voucher client initialized for {self.base_url}")

    def build_url(self, voucher_hash: str) -> str:
        """Builds the redeem URL for a voucher."""
        return f"{self.base_url}{REDEEM_PATH.format(voucher_hash=voucher_hash)}"

    async def redeem(self, body: Dict[str, Any]) -> httpx.Response:
        """
        POST a redeem body to the upstream.

        Args:
            body: Mapping with ``mobile`` and ``voucher_hash``

        Returns:
            httpx.Response: The upstream response, whatever its status

        Raises:
            NetworkError: If the upstream could not be reached
        """
        url = self.build_url(body["voucher_hash"])

        try:
            start_time = time.time()
            response = await self.http_client.post(
                url,
                content=encode_redeem_body(body),
                headers={"content-type": CONTENT_TYPE},
                timeout=self.timeout
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Voucher API timed out after {self.timeout}s: {str(e)}")
            raise NetworkError(f"Request timed out: {str(e) or type(e).__name__}", cause=e)
        except httpx.RequestError as e:
            logger.warning(f"Voucher API connection error: {str(e)}")
            raise NetworkError(f"Connection error: {str(e) or type(e).__name__}", cause=e)

        duration = time.time() - start_time
        logger.debug(
            f"Voucher API request completed in {duration:.2f}s",
            extra={"url": url, "status_code": response.status_code}
        )
        return response

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "TrueMoneyVoucherClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
