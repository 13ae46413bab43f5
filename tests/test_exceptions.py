# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

import pytest

from coreason_arm.exceptions import (
    BuildRequestError,
    ClientAuthenticationError,
    ConfigurationError,
    CoreasonArmError,
    DefaultResponseError,
    DeserializeError,
    ExecuteRequestError,
    GetTokenError,
    IdentityProviderError,
    OperationError,
    OversizedResponseError,
    ResponseBytesError,
    TokenExchangeError,
    UnexpectedResponseError,
)
from coreason_arm.models import ErrorDetail, ErrorResponse


@pytest.mark.parametrize(
    "exc_class",
    [ConfigurationError, ClientAuthenticationError, OperationError, OversizedResponseError],
)
def test_base_hierarchy(exc_class: type[Exception]) -> None:
    assert issubclass(exc_class, CoreasonArmError)


@pytest.mark.parametrize("exc_class", [IdentityProviderError, TokenExchangeError])
def test_authentication_hierarchy(exc_class: type[Exception]) -> None:
    assert issubclass(exc_class, ClientAuthenticationError)


@pytest.mark.parametrize(
    "exc_class",
    [
        GetTokenError,
        BuildRequestError,
        ExecuteRequestError,
        ResponseBytesError,
        DeserializeError,
        UnexpectedResponseError,
        DefaultResponseError,
    ],
)
def test_operation_hierarchy(exc_class: type[Exception]) -> None:
    assert issubclass(exc_class, OperationError)


def test_identity_provider_error_message() -> None:
    error = IdentityProviderError("AADSTS700016: Application not found.", error="unauthorized_client")
    assert str(error) == "AADSTS700016: Application not found."
    assert error.description == "AADSTS700016: Application not found."
    assert error.error == "unauthorized_client"


def test_operation_error_carries_operation_id() -> None:
    error = GetTokenError("Vaults_Get: could not authenticate", "Vaults_Get")
    assert error.operation_id == "Vaults_Get"
    assert str(error) == "Vaults_Get: could not authenticate"


def test_unexpected_response_error() -> None:
    error = UnexpectedResponseError("Vaults_Get", 418, b"teapot")
    assert error.status_code == 418
    assert error.body == b"teapot"
    assert "418" in str(error)
    assert "teapot" not in str(error)


def test_deserialize_error_keeps_body() -> None:
    error = DeserializeError("could not decode", "Vaults_Get", 200, b"{")
    assert error.body == b"{"
    assert error.status_code == 200


def test_default_response_error() -> None:
    value = ErrorResponse(error=ErrorDetail(code="QuotaExceeded", message="Too many capacities"))
    error = DefaultResponseError("Operations_List", 409, value)
    assert error.value is value
    assert error.status_code == 409
    assert str(error) == "Operations_List failed with status 409: QuotaExceeded"
