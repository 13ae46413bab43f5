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
ArmClient: owns the HTTP client lifecycle and the dispatcher shared by a service's call sites.
"""

from typing import Any, ClassVar, Self

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from coreason_arm.config import OperationConfig
from coreason_arm.credentials import TokenCredential
from coreason_arm.dispatcher import OperationDispatcher


class ArmClient:
    """
    Base class for management service clients.
    Handles resources via async context manager.

    Attributes:
        API_VERSION (str | None): The service's API version, used when the config leaves it unset.
    """

    API_VERSION: ClassVar[str | None] = None

    def __init__(
        self,
        config: OperationConfig | None = None,
        credential: TokenCredential | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the ArmClient.

        Args:
            config: The operation configuration. Defaults to `OperationConfig()` (environment driven).
            credential: Token source. Without one, requests are sent unauthenticated.
            client: External async client (optional). If not provided, one is created and closed with this client.
        """
        config = config or OperationConfig()
        if config.api_version is None and self.API_VERSION is not None:
            config = config.model_copy(update={"api_version": self.API_VERSION})
        self.config = config
        self._internal_client = client is None

        if client is not None:
            self._client = client
        else:
            self._client = httpx.AsyncClient(timeout=self.config.http_timeout)

        # Instrument the client for distributed tracing
        HTTPXClientInstrumentor().instrument_client(self._client)

        self.dispatcher = OperationDispatcher(self.config, self._client, credential)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """
        Closes the HTTP client if this instance created it. Injected clients are left open.
        """
        if self._internal_client:
            await self._client.aclose()
