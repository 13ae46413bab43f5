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
Custom exceptions for the coreason-arm package.

Secrets (client secret, access token) never appear in any message below.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coreason_arm.models import ErrorResponse


class CoreasonArmError(Exception):
    """Base exception for all coreason-arm errors."""


class ConfigurationError(CoreasonArmError):
    """
    Raised when the authority host or tenant id cannot form a valid endpoint.
    Fatal and not retryable; raised before any network I/O.
    """


class ClientAuthenticationError(CoreasonArmError):
    """Base for failures of the token exchange with the identity provider."""


class IdentityProviderError(ClientAuthenticationError):
    """
    The identity provider answered with a structured OAuth2 error.
    The message is the provider's description, verbatim.
    """

    def __init__(self, description: str, error: str | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.error = error


class TokenExchangeError(ClientAuthenticationError):
    """Unclassified exchange failure (network, malformed or oversized response)."""


class OperationError(CoreasonArmError):
    """Base for every failure of a dispatched management operation."""

    def __init__(self, message: str, operation_id: str) -> None:
        super().__init__(message)
        self.operation_id = operation_id


class GetTokenError(OperationError):
    """A credential was configured but could not produce a token. The cause is chained."""


class BuildRequestError(OperationError):
    """The request could not be built (bad path parameters, unencodable body, invalid URL)."""


class ExecuteRequestError(OperationError):
    """The request could not be sent (connection refused, timeout, TLS failure)."""


class ResponseBytesError(OperationError):
    """The response body could not be fully read."""


class DeserializeError(OperationError):
    """The body did not match the schema declared for the observed status. Keeps the raw bytes."""

    def __init__(self, message: str, operation_id: str, status_code: int, body: bytes) -> None:
        super().__init__(message, operation_id)
        self.status_code = status_code
        self.body = body


class UnexpectedResponseError(OperationError):
    """The status code is not declared for the operation. Keeps status and raw body verbatim."""

    def __init__(self, operation_id: str, status_code: int, body: bytes) -> None:
        super().__init__(f"{operation_id} returned unexpected status {status_code}", operation_id)
        self.status_code = status_code
        self.body = body


class DefaultResponseError(OperationError):
    """A non-success status decoded through the provider-wide error envelope."""

    def __init__(self, operation_id: str, status_code: int, value: "ErrorResponse") -> None:
        super().__init__(f"{operation_id} failed with status {status_code}: {value.error.code}", operation_id)
        self.status_code = status_code
        self.value = value


class OversizedResponseError(CoreasonArmError):
    """Raised when an HTTP response body exceeds the configured size cap."""
