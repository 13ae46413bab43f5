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
Token credentials: the single-method capability consumed by the dispatcher, and the
OAuth 2.0 client-credentials implementation (RFC 6749 section 4.4).
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable
from urllib.parse import urlparse

import httpx
from authlib.oauth2.rfc6749.parameters import prepare_token_request
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from coreason_arm.config import AuthorityHost, CredentialSettings
from coreason_arm.exceptions import (
    ConfigurationError,
    IdentityProviderError,
    OversizedResponseError,
    TokenExchangeError,
)
from coreason_arm.models import AccessToken
from coreason_arm.models_internal import AuthorityEndpoints, OAuth2ErrorResponse, TokenResponse
from coreason_arm.transport import read_limited
from coreason_arm.utils.logger import logger

tracer = trace.get_tracer(__name__)

# A tenant id is a GUID or a verified domain name: one path segment, nothing to escape.
_TENANT_SEGMENT = re.compile(r"[A-Za-z0-9._-]+")

_FORM_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/x-www-form-urlencoded;charset=UTF-8",
}

GENERIC_EXCHANGE_FAILURE = "OAuth2 error"
MISSING_DESCRIPTION = "Server error without description"


@runtime_checkable
class TokenCredential(Protocol):
    """Anything able to produce a bearer token for an audience."""

    async def acquire_token(self, resource: str) -> AccessToken:
        """
        Returns a token scoped to `resource` together with its absolute expiry.
        """
        ...


class TokenCredentialOptions(BaseModel):
    """
    Options controlling how credentials talk to the identity provider.

    Attributes:
        authority_host (str | None): Identity-provider base URL. Defaults to the public cloud.
        unsafe_local_dev (bool): Allow a plain-http authority host. Only for local testing.
    """

    model_config = ConfigDict(frozen=True)

    authority_host: str | None = None
    unsafe_local_dev: bool = False

    def resolved_authority_host(self) -> str:
        return self.authority_host or AuthorityHost.AZURE_PUBLIC_CLOUD.value


def _validate_authority_host(authority_host: str, unsafe_local_dev: bool) -> str:
    """
    Checks that the authority host is an absolute URL and returns it without a trailing slash.

    Raises:
        ConfigurationError: If the host cannot be the base of a token endpoint.
    """
    candidate = authority_host.strip()
    if not candidate or candidate != authority_host or any(c.isspace() for c in candidate):
        raise ConfigurationError(f"Invalid authority host {authority_host!r}")

    try:
        parsed = urlparse(candidate)
    except ValueError as e:
        # e.g. an unbalanced IPv6 bracket
        raise ConfigurationError(f"Invalid authority host {authority_host!r}") from e

    allowed_schemes = {"https", "http"} if unsafe_local_dev else {"https"}
    if parsed.scheme not in allowed_schemes:
        raise ConfigurationError(
            f"Authority host {authority_host!r} must use https. Set 'unsafe_local_dev=True' only for local testing."
        )

    try:
        # Accessing .port validates it
        _ = parsed.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid port in authority host {authority_host!r}") from e

    if not parsed.hostname or parsed.username or parsed.password:
        raise ConfigurationError(f"Invalid authority host {authority_host!r}")
    if parsed.query or parsed.fragment or parsed.params:
        raise ConfigurationError(f"Authority host {authority_host!r} must not carry a query or fragment")

    return candidate.rstrip("/")


def _build_endpoint(host: str, tenant_id: str, kind: str) -> str:
    if not _TENANT_SEGMENT.fullmatch(tenant_id) or tenant_id in (".", ".."):
        raise ConfigurationError(f"Failed to construct {kind} endpoint with tenant id {tenant_id!r}")
    return f"{host}/{tenant_id}/oauth2/v2.0/{kind}"


def build_authority_endpoints(
    authority_host: str, tenant_id: str, unsafe_local_dev: bool = False
) -> AuthorityEndpoints:
    """
    Builds `{authority_host}/{tenant_id}/oauth2/v2.0/{token,authorize}`.

    Args:
        authority_host: Identity-provider base URL.
        tenant_id: Tenant path segment.
        unsafe_local_dev: Accept a plain-http authority host.

    Returns:
        AuthorityEndpoints: Both endpoints as absolute URLs.

    Raises:
        ConfigurationError: If either input would produce a malformed endpoint.
    """
    host = _validate_authority_host(authority_host, unsafe_local_dev)
    return AuthorityEndpoints(
        token_endpoint=_build_endpoint(host, tenant_id, "token"),
        authorize_endpoint=_build_endpoint(host, tenant_id, "authorize"),
    )


class ClientSecretCredential:
    """
    Exchanges a service-principal identity for a short-lived bearer token using the
    client-credentials grant. Client authentication goes in the request body, never
    HTTP basic auth.

    Every call performs a fresh exchange; wrap in `CachedTokenCredential` to reuse tokens.

    Attributes:
        tenant_id (str): The identity-provider tenant.
        client_id (str): The application (client) id.
        options (TokenCredentialOptions): Authority host and transport safety options.
    """

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str | SecretStr,
        options: TokenCredentialOptions | None = None,
        client: httpx.AsyncClient | None = None,
        http_timeout: float = 30.0,
    ) -> None:
        """
        Initialize the ClientSecretCredential.

        Args:
            tenant_id: The tenant id. Validated lazily by `acquire_token`.
            client_id: The application (client) id.
            client_secret: The application secret.
            options: Credential options. Defaults to the public cloud authority.
            client: Shared async HTTP client (optional). If omitted, each exchange uses a transient client.
            http_timeout: Timeout in seconds for transient clients.
        """
        self.tenant_id = tenant_id
        self.client_id = client_id
        self._client_secret = client_secret if isinstance(client_secret, SecretStr) else SecretStr(client_secret)
        self.options = options or TokenCredentialOptions()
        self._client = client
        self.http_timeout = http_timeout

    @classmethod
    def from_settings(
        cls, settings: CredentialSettings, client: httpx.AsyncClient | None = None
    ) -> "ClientSecretCredential":
        """
        Builds a credential from `CredentialSettings` (the AZURE_* environment variables).
        """
        return cls(
            tenant_id=settings.tenant_id,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            options=TokenCredentialOptions(authority_host=settings.authority_host),
            client=client,
        )

    def __repr__(self) -> str:
        return (
            f"ClientSecretCredential(tenant_id={self.tenant_id!r}, "
            f"client_id={self.client_id!r}, "
            f"client_secret={self._client_secret!r}, "
            f"authority_host={self.options.resolved_authority_host()!r})"
        )

    def endpoints(self) -> AuthorityEndpoints:
        """
        Returns the token and authorize endpoints for this credential.

        Raises:
            ConfigurationError: If the tenant id or authority host is malformed.
        """
        return build_authority_endpoints(
            self.options.resolved_authority_host(), self.tenant_id, self.options.unsafe_local_dev
        )

    async def acquire_token(self, resource: str) -> AccessToken:
        """
        Requests a token for `resource` with scope `{resource}.default`.

        Emits an OpenTelemetry span `acquire_token`.

        Args:
            resource: The audience, e.g. "https://management.azure.com/".

        Returns:
            AccessToken: The token and `expires_on = now + expires_in`. A response without
            `expires_in` yields a token that is already expired.

        Raises:
            ConfigurationError: If the resource is empty or the endpoints cannot be built. No I/O happens.
            IdentityProviderError: If the identity provider returns a structured OAuth2 error.
            TokenExchangeError: For any other exchange failure.
        """
        if not resource or not resource.strip():
            raise ConfigurationError("Resource must be a non-empty audience string.")

        endpoints = self.endpoints()

        with tracer.start_as_current_span("acquire_token") as span:
            span.set_attribute("arm.resource", resource)
            logger.debug(f"Requesting token for resource {resource}")

            try:
                status_code, content = await self._exchange(endpoints.token_endpoint, resource)
                token = self._parse_token_response(status_code, content)
            except (IdentityProviderError, TokenExchangeError) as e:
                span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                raise

            span.set_status(Status(StatusCode.OK))
            logger.info(f"Token acquired for resource {resource}, expires on {token.expires_on.isoformat()}")
            return token

    async def _exchange(self, token_endpoint: str, resource: str) -> tuple[int, bytes]:
        body = prepare_token_request(
            "client_credentials",
            scope=f"{resource}.default",
            client_id=self.client_id,
            client_secret=self._client_secret.get_secret_value(),
        )

        try:
            if self._client is not None:
                return await self._post(self._client, token_endpoint, body)
            async with httpx.AsyncClient(timeout=self.http_timeout) as client:
                return await self._post(client, token_endpoint, body)
        except (httpx.HTTPError, OversizedResponseError) as e:
            logger.error(f"Token exchange with {token_endpoint} failed: {type(e).__name__}")
            raise TokenExchangeError(GENERIC_EXCHANGE_FAILURE) from e

    @staticmethod
    async def _post(client: httpx.AsyncClient, url: str, body: str) -> tuple[int, bytes]:
        async with client.stream("POST", url, content=body, headers=_FORM_HEADERS) as response:
            content = await read_limited(response)
            return response.status_code, content

    @staticmethod
    def _parse_token_response(status_code: int, content: bytes) -> AccessToken:
        # Validation errors echo the response body, which may hold the token. They are not chained.
        if 200 <= status_code < 300:
            try:
                parsed = TokenResponse.model_validate_json(content)
            except ValidationError:
                logger.error(f"Token endpoint returned an unreadable token response (status {status_code})")
                raise TokenExchangeError(GENERIC_EXCHANGE_FAILURE) from None

            expires_in = timedelta(seconds=parsed.expires_in or 0)
            return AccessToken(
                token=SecretStr(parsed.access_token),
                expires_on=datetime.now(timezone.utc) + expires_in,
            )

        try:
            error_response = OAuth2ErrorResponse.model_validate_json(content)
        except ValidationError:
            logger.error(f"Token endpoint failed with status {status_code} and no OAuth2 error body")
            raise TokenExchangeError(GENERIC_EXCHANGE_FAILURE) from None

        logger.warning(f"Identity provider rejected the token request: {error_response.error}")
        raise IdentityProviderError(
            error_response.error_description or MISSING_DESCRIPTION,
            error=error_response.error,
        )
