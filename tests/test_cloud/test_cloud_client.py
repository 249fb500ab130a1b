"""Tests for the HTTP cloud sync backend."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from day_agent.cloud.client import HttpCloudBackend, SyncPayloadStore
from day_agent.cloud.models import CloudUser, SyncData
from day_agent.cloud.orchestrator import CloudSyncOrchestrator
from day_agent.exceptions import CloudError, SyncStepError


def _backend(handler, token="tok-123", store=None):
    if store is None:
        store = MagicMock(spec=SyncPayloadStore)
        store.collect.return_value = SyncData(accounts=[{"email": "me@example.com"}])
    return HttpCloudBackend(
        store,
        token=token,
        base_url="http://cloud.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_pull_applies_remote_data():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"categories": ["work"], "last_modified": "t1"})

    backend = _backend(handler)
    data = await backend.pull("pw")

    assert requests[0].method == "GET"
    assert requests[0].url.path == "/api/sync/pull"
    assert requests[0].headers["Authorization"] == "Bearer tok-123"
    assert data.categories == ["work"]
    backend.store.apply.assert_called_once_with(data, "pw")


@pytest.mark.asyncio
async def test_push_sends_collected_payload():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "success": True,
                "server_timestamp": "2026-10-18T10:00:00Z",
                "conflicts": [
                    {
                        "data_type": "categories",
                        "local_timestamp": "a",
                        "server_timestamp": "b",
                        "resolution": "remote",
                    }
                ],
            },
        )

    backend = _backend(handler)
    result = await backend.push("pw")

    body = json.loads(requests[0].content)
    assert requests[0].url.path == "/api/sync/push"
    assert body["accounts"] == [{"email": "me@example.com"}]
    assert body["client_timestamp"]
    assert result.success is True
    assert result.conflicts[0].resolution == "remote"
    backend.store.collect.assert_called_once_with("pw")


@pytest.mark.asyncio
async def test_status():
    backend = _backend(
        lambda request: httpx.Response(200, json={"last_sync": "t", "device_count": 3})
    )

    status = await backend.status()

    assert status.last_sync == "t"
    assert status.device_count == 3


@pytest.mark.asyncio
async def test_missing_token():
    backend = _backend(lambda request: httpx.Response(200, json={}), token=None)

    with pytest.raises(CloudError, match="Not logged in"):
        await backend.status()


@pytest.mark.asyncio
async def test_unauthorized_means_session_expired():
    backend = _backend(lambda request: httpx.Response(401))

    with pytest.raises(CloudError, match="Session expired"):
        await backend.pull()


@pytest.mark.asyncio
async def test_server_error_is_network_error():
    backend = _backend(lambda request: httpx.Response(500))

    with pytest.raises(CloudError, match="Network error"):
        await backend.status()


@pytest.mark.asyncio
async def test_bad_json_is_parse_error():
    backend = _backend(lambda request: httpx.Response(200, text="nope"))

    with pytest.raises(CloudError, match="Parse error"):
        await backend.status()


@pytest.mark.asyncio
async def test_apply_failure_is_cloud_error():
    store = MagicMock(spec=SyncPayloadStore)
    store.apply.side_effect = RuntimeError("wrong password")
    backend = _backend(lambda request: httpx.Response(200, json={}), store=store)

    with pytest.raises(CloudError, match="wrong password"):
        await backend.pull("bad")


@pytest.mark.asyncio
async def test_logout_clears_token_even_if_server_fails():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    backend = _backend(handler)
    await backend.logout()

    assert backend.token is None
    with pytest.raises(CloudError, match="Not logged in"):
        await backend.status()


@pytest.mark.asyncio
async def test_logout_notifies_server():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    backend = _backend(handler)
    await backend.logout()

    assert requests[0].url.path == "/api/auth/logout"
    assert requests[0].headers["Authorization"] == "Bearer tok-123"


@pytest.mark.asyncio
async def test_malformed_status_is_parse_error():
    backend = _backend(
        lambda request: httpx.Response(200, json={"last_sync": "t", "device_count": None})
    )

    with pytest.raises(CloudError, match="Parse error"):
        await backend.status()


@pytest.mark.asyncio
async def test_malformed_push_result_is_parse_error():
    backend = _backend(
        lambda request: httpx.Response(200, json={"success": True, "conflicts": None})
    )

    with pytest.raises(CloudError, match="Parse error"):
        await backend.push()


@pytest.mark.asyncio
async def test_orchestrator_survives_malformed_responses():
    responses = {
        "/api/sync/status": {"last_sync": "t1", "device_count": 2},
        "/api/sync/pull": {},
        "/api/sync/push": {"success": True, "conflicts": None},
    }

    def handler(request):
        return httpx.Response(200, json=responses[request.url.path])

    orchestrator = CloudSyncOrchestrator(_backend(handler))
    known = await orchestrator.status()
    responses["/api/sync/status"] = {"device_count": None}

    with pytest.raises(SyncStepError) as exc_info:
        await orchestrator.sync(CloudUser(id=1, email="pro@example.com", is_premium=True))

    assert exc_info.value.step == "push"
    assert orchestrator.last_error.startswith("Push failed: Parse error")
    assert await orchestrator.status() == known
