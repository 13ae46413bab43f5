# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from coreason_arm.client import ArmClient
from coreason_arm.config import OperationConfig
from coreason_arm.dispatcher import Operation

PING = Operation(operation_id="Ping", method="GET", path="/ping", responses={200: Any})


class PingClient(ArmClient):
    API_VERSION = "2020-01-01"


@pytest.mark.asyncio
async def test_internal_client_lifecycle() -> None:
    client = ArmClient(OperationConfig(api_version="2020-01-01", http_timeout=7.5))
    assert client._internal_client is True
    assert client._client.timeout.read == 7.5

    with patch.object(client._client, "aclose", new_callable=AsyncMock) as mock_close:
        async with client as entered:
            assert entered is client
        mock_close.assert_awaited_once()


@pytest.mark.asyncio
async def test_external_client_is_not_closed() -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    client = ArmClient(OperationConfig(api_version="2020-01-01"), client=http_client)
    assert client._internal_client is False
    assert client.dispatcher.client is http_client

    async with client:
        pass

    assert not http_client.is_closed
    await http_client.aclose()


def test_service_api_version_fills_unset_config() -> None:
    client = PingClient(OperationConfig(api_version=None))
    assert client.config.api_version == "2020-01-01"
    assert client.dispatcher.config.api_version == "2020-01-01"


def test_explicit_api_version_wins() -> None:
    client = PingClient(OperationConfig(api_version="2023-05-01"))
    assert client.config.api_version == "2023-05-01"


@pytest.mark.asyncio
async def test_credential_is_shared_with_dispatcher(recording_transport: Any, token_factory: Any) -> None:
    transport = recording_transport(lambda request: httpx.Response(200, json={"pong": True}))
    credential = AsyncMock()
    credential.acquire_token.return_value = token_factory("bearer-value")

    async with PingClient(
        OperationConfig(), credential=credential, client=httpx.AsyncClient(transport=transport)
    ) as client:
        result = await client.dispatcher.dispatch(PING)

    assert result.value == {"pong": True}
    assert transport.requests[0].headers["Authorization"] == "Bearer bearer-value"
    assert transport.requests[0].url.params["api-version"] == "2020-01-01"
