# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

"""
Optional token cache wrapped around any TokenCredential.
"""

from datetime import datetime, timedelta, timezone

import anyio

from coreason_arm.credentials import TokenCredential
from coreason_arm.models import AccessToken
from coreason_arm.utils.logger import logger


class CachedTokenCredential:
    """
    Caches tokens per resource for a wrapped credential.

    The wrapped credential fixes tenant and client, so the resource completes the
    cache key. Concurrent misses for one resource share a single exchange.

    Attributes:
        credential (TokenCredential): The credential that performs the exchanges.
        refresh_margin (timedelta): Tokens this close to expiry are refreshed.
    """

    def __init__(self, credential: TokenCredential, refresh_margin: timedelta = timedelta(minutes=5)) -> None:
        """
        Initialize the CachedTokenCredential.

        Args:
            credential: The credential to wrap.
            refresh_margin: Refresh tokens expiring within this margin. Defaults to 5 minutes.
        """
        self.credential = credential
        self.refresh_margin = refresh_margin
        self._tokens: dict[str, AccessToken] = {}
        self._locks: dict[str, anyio.Lock] = {}

    def _servable(self, token: AccessToken) -> bool:
        return datetime.now(timezone.utc) < token.expires_on - self.refresh_margin

    def _cached(self, resource: str) -> AccessToken | None:
        token = self._tokens.get(resource)
        if token is None or not self._servable(token):
            return None
        return token

    async def acquire_token(self, resource: str) -> AccessToken:
        """
        Returns a cached token for `resource`, or fetches one from the wrapped credential.

        Raises:
            CoreasonArmError: Whatever the wrapped credential raises. Failures are not cached.
        """
        # Double-checked locking (Check 1: no lock)
        token = self._cached(resource)
        if token is not None:
            return token

        lock = self._locks.setdefault(resource, anyio.Lock())
        async with lock:
            token = self._cached(resource)
            if token is not None:
                return token

            token = await self.credential.acquire_token(resource)
            if not self._servable(token):
                # Lifetime shorter than the refresh margin: the token is single use
                logger.debug(f"Not caching short-lived token for resource {resource}")
                self._tokens.pop(resource, None)
            else:
                self._tokens[resource] = token
            return token

    def invalidate(self, resource: str | None = None) -> None:
        """
        Drops the cached token for `resource`, or every cached token when None.
        """
        if resource is None:
            self._tokens.clear()
        else:
            self._tokens.pop(resource, None)
