import logging

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from tests.conftest import SUCCESS_BODY, json_response
from twangpao.api.routes.redeem import status_code_for
from twangpao.domain.models.response import ApiResponse
from twangpao.main import create_application


async def _request(make_service, handler, method: str, path: str, **kwargs) -> tuple[httpx.Response, object]:
    service, upstream = make_service(handler)
    app = create_application(redeem_service=service)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.request(method, path, **kwargs)
    return response, upstream


async def _post_redeem(make_service, handler, payload: dict[str, object]) -> tuple[httpx.Response, object]:
    return await _request(make_service, handler, "POST", "/api/v1/redeem", json=payload)


def _payload(phone_number: str, voucher_code: str) -> dict[str, object]:
    return {"phoneNumber": phone_number, "voucherCode": voucher_code}


@pytest.mark.asyncio
async def test_redeem_success_returns_200(make_service) -> None:
    response, upstream = await _post_redeem(
        make_service, json_response(200, SUCCESS_BODY), _payload("0812345678", "abc123")
    )

    assert response.status_code == 200
    assert response.json() == SUCCESS_BODY
    assert len(upstream.calls) == 1


@pytest.mark.asyncio
async def test_invalid_phone_number_returns_400(make_service) -> None:
    response, upstream = await _post_redeem(
        make_service, json_response(200, SUCCESS_BODY), _payload("INVALID_PHONENUMBER", "VALID_CODE")
    )

    assert response.status_code == 400
    assert response.json()["status"]["code"] == "INVALID_PHONE_NUMBER"
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_invalid_voucher_code_returns_400(make_service) -> None:
    response, upstream = await _post_redeem(
        make_service, json_response(200, SUCCESS_BODY), _payload("0812345678", "!!!")
    )

    assert response.status_code == 400
    assert response.json()["status"]["code"] == "INVALID_VOUCHER_CODE"
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_upstream_error_returns_400_with_body(make_service) -> None:
    body = {"status": {"code": "VOUCHER_EXPIRED", "message": "Voucher has expired"}}

    response, upstream = await _post_redeem(make_service, json_response(400, body), _payload("0812345678", "VALIDCODE"))

    assert response.status_code == 400
    assert response.json() == body
    assert len(upstream.calls) == 1


@pytest.mark.asyncio
async def test_invalid_json_returns_500(make_service) -> None:
    response, _ = await _post_redeem(
        make_service,
        lambda request: httpx.Response(200, text="invalid json"),
        _payload("0641349437", "VALIDCODE"),
    )

    assert response.status_code == 500
    assert response.json()["status"]["code"] == "INVALID_JSON_RESPONSE"


@pytest.mark.asyncio
async def test_missing_field_returns_422_envelope(make_service) -> None:
    response, _ = await _post_redeem(make_service, json_response(200, SUCCESS_BODY), {"phoneNumber": "0812345678"})

    assert response.status_code == 422
    payload = response.json()
    assert payload["status"]["code"] == "INVALID_REQUEST"
    assert payload["data"] is None


@pytest.mark.asyncio
async def test_redeem_outcome_is_logged(make_service, caplog) -> None:
    caplog.set_level(logging.INFO, logger="twangpao.api.routes.redeem")
    body = {"status": {"code": "VOUCHER_OUT_OF_STOCK", "message": "empty"}}

    await _post_redeem(make_service, json_response(400, body), _payload("0812345678", "abc123"))

    records = [record for record in caplog.records if record.name == "twangpao.api.routes.redeem"]
    assert [record.getMessage() for record in records] == ["Redeem request answered with VOUCHER_OUT_OF_STOCK"]
    assert records[0].status_code == 400


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(make_service) -> None:
    response, _ = await _request(
        make_service,
        json_response(200, SUCCESS_BODY),
        "GET",
        "/api/v1/health",
        headers={"X-Correlation-ID": "corr-1"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Correlation-ID"] == "corr-1"


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("INVALID_PHONE_NUMBER", 400),
        ("INVALID_VOUCHER_CODE", 400),
        ("HTTP_ERROR_503", 500),
        ("HTTP_ERROR_UNKNOWN", 500),
        ("NETWORK_ERROR", 500),
        ("INVALID_JSON_RESPONSE", 500),
        ("TARGET_USER_REDEEMED", 400),
    ],
)
def test_status_code_policy(code: str, expected: int) -> None:
    assert status_code_for(ApiResponse.failure(code, "message")) == expected


def test_success_status_code() -> None:
    assert status_code_for(ApiResponse.from_upstream(SUCCESS_BODY)) == 200
