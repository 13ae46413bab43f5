# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock

import anyio
import pytest

from coreason_arm.credentials import TokenCredential
from coreason_arm.exceptions import ClientAuthenticationError
from coreason_arm.models import AccessToken
from coreason_arm.token_cache import CachedTokenCredential

RESOURCE = "https://management.azure.com/"


class CountingCredential:
    """Issues a new token per call, after a short delay."""

    def __init__(self, token_factory: Any, lifetime: timedelta = timedelta(hours=1)) -> None:
        self.calls: list[str] = []
        self.token_factory = token_factory
        self.lifetime = lifetime

    async def acquire_token(self, resource: str) -> AccessToken:
        self.calls.append(resource)
        await anyio.sleep(0.01)
        return self.token_factory(f"token-{len(self.calls)}", self.lifetime)


def test_cache_is_a_token_credential(token_factory: Any) -> None:
    assert isinstance(CachedTokenCredential(CountingCredential(token_factory)), TokenCredential)


@pytest.mark.asyncio
async def test_cached_token_is_reused(token_factory: Any) -> None:
    inner = CountingCredential(token_factory)
    cache = CachedTokenCredential(inner)

    first = await cache.acquire_token(RESOURCE)
    second = await cache.acquire_token(RESOURCE)

    assert first is second
    assert inner.calls == [RESOURCE]


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_exchange(token_factory: Any) -> None:
    inner = CountingCredential(token_factory)
    cache = CachedTokenCredential(inner)
    results: list[AccessToken] = []

    async def worker() -> None:
        results.append(await cache.acquire_token(RESOURCE))

    async with anyio.create_task_group() as tg:
        for _ in range(10):
            tg.start_soon(worker)

    assert len(results) == 10
    assert len(inner.calls) == 1
    assert {token.token.get_secret_value() for token in results} == {"token-1"}


@pytest.mark.asyncio
async def test_resources_are_cached_separately(token_factory: Any) -> None:
    inner = CountingCredential(token_factory)
    cache = CachedTokenCredential(inner)

    await cache.acquire_token(RESOURCE)
    await cache.acquire_token("https://vault.azure.net")

    assert inner.calls == [RESOURCE, "https://vault.azure.net"]


@pytest.mark.asyncio
async def test_token_within_refresh_margin_is_refreshed(token_factory: Any) -> None:
    inner = CountingCredential(token_factory, lifetime=timedelta(minutes=4))
    cache = CachedTokenCredential(inner, refresh_margin=timedelta(minutes=5))

    first = await cache.acquire_token(RESOURCE)
    second = await cache.acquire_token(RESOURCE)

    assert first.token.get_secret_value() == "token-1"
    assert second.token.get_secret_value() == "token-2"
    assert cache._tokens == {}


@pytest.mark.asyncio
async def test_expired_token_is_not_cached(token_factory: Any) -> None:
    inner = CountingCredential(token_factory, lifetime=timedelta(0))
    cache = CachedTokenCredential(inner, refresh_margin=timedelta(0))

    await cache.acquire_token(RESOURCE)
    await cache.acquire_token(RESOURCE)

    assert len(inner.calls) == 2
    assert cache._tokens == {}


@pytest.mark.asyncio
async def test_invalidate(token_factory: Any) -> None:
    inner = CountingCredential(token_factory)
    cache = CachedTokenCredential(inner)

    await cache.acquire_token(RESOURCE)
    await cache.acquire_token("https://vault.azure.net")

    cache.invalidate(RESOURCE)
    await cache.acquire_token(RESOURCE)
    await cache.acquire_token("https://vault.azure.net")
    assert len(inner.calls) == 3

    cache.invalidate()
    await cache.acquire_token("https://vault.azure.net")
    assert len(inner.calls) == 4


@pytest.mark.asyncio
async def test_failures_are_not_cached(token_factory: Any) -> None:
    inner = AsyncMock()
    inner.acquire_token.side_effect = [ClientAuthenticationError("OAuth2 error"), token_factory()]
    cache = CachedTokenCredential(inner)

    with pytest.raises(ClientAuthenticationError):
        await cache.acquire_token(RESOURCE)

    token = await cache.acquire_token(RESOURCE)
    assert token.token.get_secret_value() == "test-access-token"
    assert inner.acquire_token.await_count == 2
