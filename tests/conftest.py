from __future__ import annotations

import inspect
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from twangpao.adapters.truemoney.client import TrueMoneyVoucherClient
from twangpao.infrastructure.cache.memory_cache import MemoryCache
from twangpao.services.redeem_service import RedeemService

SUCCESS_BODY: dict[str, Any] = {
    "status": {
        "code": "SUCCESS",
        "message": "success",
        "data": {
            "voucher": {
                "voucher_id": "1234567890",
                "amount_baht": "50.00",
                "redeemed_amount_baht": "10.00",
                "member": 5,
                "status": "active",
                "link": "abc123",
                "detail": "Happy new year",
                "expire_date": 1735689600000,
                "type": "R",
                "redeemed": 1,
                "available": 4,
            },
            "owner_profile": {"full_name": "Owner Name"},
            "redeemer_profile": {"mobile_number": "081xxx5678"},
            "my_ticket": {
                "mobile": "081-xxx-5678",
                "update_date": 1735600000000,
                "amount_baht": "10.00",
                "full_name": "Redeemer",
                "profile_pic": None,
            },
            "tickets": [
                {
                    "mobile": "081-xxx-5678",
                    "update_date": 1735600000000,
                    "amount_baht": "10.00",
                    "full_name": "Redeemer",
                    "profile_pic": "https://example.local/pic.png",
                }
            ],
        },
    }
}


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UpstreamStub:
    """Records every request and answers through a handler."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self._handler = handler
        self.calls: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        result = self._handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def json_response(status_code: int, body: Any) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=body)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def make_service(clock: FakeClock):
    http_clients: list[httpx.AsyncClient] = []

    def factory(handler: Callable[[httpx.Request], Any]) -> tuple[RedeemService, UpstreamStub]:
        stub = UpstreamStub(handler)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        http_clients.append(http_client)
        client = TrueMoneyVoucherClient(base_url="https://gift.example.local", http_client=http_client)
        service = RedeemService(client=client, cache=MemoryCache(clock=clock))
        return service, stub

    yield factory

    for http_client in http_clients:
        await http_client.aclose()
