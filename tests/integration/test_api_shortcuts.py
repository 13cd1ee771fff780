"""Integration tests for the module-level shortcuts over httpx and respx."""

from unittest.mock import AsyncMock, call

import httpx
import pytest
import respx

import sisyphus
from sisyphus import RetriesExhaustedError, RetryPolicy

URL = "https://api.example.test/status"

pytestmark = pytest.mark.integration


@respx.mock
async def test_request_returns_successful_response():
    respx.get(URL).mock(return_value=httpx.Response(200, json={"ok": True}))

    response = await sisyphus.request(RetryPolicy(), {"url": URL})

    assert response.status_code == 200
    assert response.json() == {"ok": True}


@respx.mock
async def test_request_retries_server_errors():
    route = respx.get(URL).mock(
        side_effect=[httpx.Response(500), httpx.Response(503), httpx.Response(200, json={"ok": True})]
    )
    hook = AsyncMock()

    response = await sisyphus.get(RetryPolicy(max_attempts=3, on_failed_attempt=hook), {"url": URL})

    assert response.status_code == 200
    assert route.call_count == 3
    assert hook.await_args_list == [call(0), call(1)]


@respx.mock
async def test_request_collects_status_errors_when_exhausted():
    respx.get(URL).mock(side_effect=[httpx.Response(500), httpx.Response(502)])

    with pytest.raises(RetriesExhaustedError) as exc_info:
        await sisyphus.get(RetryPolicy(max_attempts=2), {"url": URL})

    errors = exc_info.value.errors
    assert [type(e) for e in errors] == [httpx.HTTPStatusError, httpx.HTTPStatusError]
    assert [e.response.status_code for e in errors] == [500, 502]


@respx.mock
async def test_request_collects_network_errors():
    respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(RetriesExhaustedError) as exc_info:
        await sisyphus.get(RetryPolicy(max_attempts=2), {"url": URL})

    assert all(isinstance(e, httpx.ConnectError) for e in exc_info.value.errors)
    assert len(exc_info.value.errors) == 2


@respx.mock
async def test_filter_rejects_application_failure():
    respx.post(URL).mock(return_value=httpx.Response(200, json={"ok": False}))

    async def not_ok(response: httpx.Response) -> bool:
        return not response.json()["ok"]

    with pytest.raises(RetriesExhaustedError) as exc_info:
        await sisyphus.post(RetryPolicy(response_failed_filter=not_ok), {"url": URL, "json": {}})

    assert exc_info.value.errors[0].json() == {"ok": False}


@respx.mock
@pytest.mark.parametrize("alias", ["get", "head", "options", "delete", "post", "put", "patch"])
async def test_alias_sends_its_method(alias):
    route = respx.route(url=URL).mock(return_value=httpx.Response(200))

    await getattr(sisyphus, alias)(RetryPolicy(), {"url": URL, "method": "TRACE"})

    assert route.calls.last.request.method == alias.upper()


def test_request_is_the_default_entry_point():
    assert sisyphus.request is sisyphus.api.request


@respx.mock
async def test_filter_sees_non_2xx_response_when_status_validated():
    route = respx.get(URL).mock(return_value=httpx.Response(400, json={"ok": False}))
    seen = []

    async def not_ok(response: httpx.Response) -> bool:
        seen.append(response.status_code)
        return not response.json()["ok"]

    with pytest.raises(RetriesExhaustedError) as exc_info:
        await sisyphus.get(
            RetryPolicy(response_failed_filter=not_ok),
            {"url": URL, "validate_status": lambda status: True},
        )

    assert route.call_count == 1
    assert seen == [400]
    evidence = exc_info.value.errors[0]
    assert isinstance(evidence, httpx.Response)
    assert evidence.status_code == 400
    assert evidence.json() == {"ok": False}


@respx.mock
async def test_controller_over_status_validating_transport_retries_filtered_response():
    respx.get(URL).mock(
        side_effect=[httpx.Response(409, json={"ok": False}), httpx.Response(200, json={"ok": True})]
    )
    hook = AsyncMock()

    async def not_ok(response: httpx.Response) -> bool:
        return not response.json()["ok"]

    async with sisyphus.HttpxTransport(validate_status=lambda status: status < 500) as transport:
        response = await sisyphus.RetryController(transport).get(
            RetryPolicy(max_attempts=2, response_failed_filter=not_ok, on_failed_attempt=hook),
            {"url": URL},
        )

    assert response.status_code == 200
    hook.assert_awaited_once_with(0)
