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
Azure Resource Manager client core: client-secret credentials and a uniform operation dispatcher.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .client import ArmClient
from .config import AuthorityHost, CredentialSettings, KnownTenant, OperationConfig
from .credentials import ClientSecretCredential, TokenCredential, TokenCredentialOptions
from .dispatcher import NO_CONTENT, Operation, OperationDispatcher
from .exceptions import (
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
    ResponseBytesError,
    TokenExchangeError,
    UnexpectedResponseError,
)
from .models import AccessToken, ErrorDetail, ErrorResponse, OperationResponse
from .token_cache import CachedTokenCredential

__all__ = [
    "NO_CONTENT",
    "AccessToken",
    "ArmClient",
    "AuthorityHost",
    "BuildRequestError",
    "CachedTokenCredential",
    "ClientAuthenticationError",
    "ClientSecretCredential",
    "ConfigurationError",
    "CoreasonArmError",
    "CredentialSettings",
    "DefaultResponseError",
    "DeserializeError",
    "ErrorDetail",
    "ErrorResponse",
    "ExecuteRequestError",
    "GetTokenError",
    "IdentityProviderError",
    "KnownTenant",
    "Operation",
    "OperationConfig",
    "OperationDispatcher",
    "OperationError",
    "OperationResponse",
    "ResponseBytesError",
    "TokenCredential",
    "TokenCredentialOptions",
    "TokenExchangeError",
    "UnexpectedResponseError",
]
