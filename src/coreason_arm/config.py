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
Configuration for the coreason-arm package.

Well-known hosts are immutable constants. Each client owns its own resolved
configuration; nothing here is mutable process-wide state.
"""

from enum import StrEnum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MANAGEMENT_ENDPOINT = "https://management.azure.com"
DEFAULT_TOKEN_CREDENTIAL_RESOURCE = "https://management.azure.com/"


class AuthorityHost(StrEnum):
    """Known identity-provider authority hosts. Sovereign clouds are separate constants."""

    AZURE_PUBLIC_CLOUD = "https://login.microsoftonline.com"
    AZURE_CHINA = "https://login.chinacloudapi.cn"
    AZURE_GERMANY = "https://login.microsoftonline.de"
    AZURE_GOVERNMENT = "https://login.microsoftonline.us"


class KnownTenant(StrEnum):
    COMMON = "common"
    # Active Directory Federated Services
    ADFS = "adfs"


class OperationConfig(BaseSettings):
    """
    Settings consumed by every dispatched operation.

    Attributes:
        api_version (str | None): The service API version. Filled from the service client when unset.
        base_path (str): The management endpoint all operation paths are relative to.
        token_credential_resource (str): The audience passed to the credential.
        http_timeout (float): Timeout in seconds for the internally created HTTP client.
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_ARM_",
        case_sensitive=False,
    )

    api_version: str | None = None
    base_path: str = MANAGEMENT_ENDPOINT
    token_credential_resource: str = DEFAULT_TOKEN_CREDENTIAL_RESOURCE
    http_timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds for management API calls.")

    @field_validator("base_path")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """
        Operation paths start with '/', so the base path must not end with one.
        """
        return v.strip().rstrip("/")


class CredentialSettings(BaseSettings):
    """
    Service-principal identity read from the conventional AZURE_* environment variables.

    Tenant id and authority host are not validated here. A malformed
    value surfaces from `acquire_token` as a ConfigurationError, before any I/O.

    Attributes:
        tenant_id (str): The identity-provider tenant.
        client_id (str): The application (client) id.
        client_secret (SecretStr): The application secret. Masked in repr and logs.
        authority_host (str): The identity-provider base URL.
    """

    model_config = SettingsConfigDict(
        env_prefix="AZURE_",
        case_sensitive=False,
    )

    tenant_id: str
    client_id: str
    client_secret: SecretStr
    authority_host: str = AuthorityHost.AZURE_PUBLIC_CLOUD.value
