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
from pydantic import ValidationError

from coreason_arm.config import (
    DEFAULT_TOKEN_CREDENTIAL_RESOURCE,
    MANAGEMENT_ENDPOINT,
    AuthorityHost,
    CredentialSettings,
    KnownTenant,
    OperationConfig,
)


def test_operation_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_VERSION", "BASE_PATH", "TOKEN_CREDENTIAL_RESOURCE", "HTTP_TIMEOUT"):
        monkeypatch.delenv(f"COREASON_ARM_{name}", raising=False)

    config = OperationConfig()
    assert config.api_version is None
    assert config.base_path == "https://management.azure.com"
    assert config.token_credential_resource == "https://management.azure.com/"
    assert config.http_timeout == 30.0


def test_operation_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COREASON_ARM_API_VERSION", "2021-04-01")
    monkeypatch.setenv("COREASON_ARM_BASE_PATH", "https://management.usgovcloudapi.net/")
    monkeypatch.setenv("COREASON_ARM_HTTP_TIMEOUT", "5")

    config = OperationConfig()
    assert config.api_version == "2021-04-01"
    assert config.base_path == "https://management.usgovcloudapi.net"
    assert config.http_timeout == 5.0


def test_operation_config_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        OperationConfig(http_timeout=0)


def test_resource_keeps_trailing_slash() -> None:
    config = OperationConfig(token_credential_resource="https://vault.azure.net/")
    assert config.token_credential_resource == "https://vault.azure.net/"


def test_constants() -> None:
    assert MANAGEMENT_ENDPOINT == "https://management.azure.com"
    assert DEFAULT_TOKEN_CREDENTIAL_RESOURCE == "https://management.azure.com/"
    assert AuthorityHost.AZURE_PUBLIC_CLOUD == "https://login.microsoftonline.com"
    assert AuthorityHost.AZURE_CHINA == "https://login.chinacloudapi.cn"
    assert AuthorityHost.AZURE_GERMANY == "https://login.microsoftonline.de"
    assert AuthorityHost.AZURE_GOVERNMENT == "https://login.microsoftonline.us"
    assert KnownTenant.COMMON == "common"
    assert KnownTenant.ADFS == "adfs"


def test_credential_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AZURE_TENANT_ID", "contoso.onmicrosoft.com")
    monkeypatch.setenv("AZURE_CLIENT_ID", "app-id")
    monkeypatch.setenv("AZURE_CLIENT_SECRET", "s3cr3t")
    monkeypatch.delenv("AZURE_AUTHORITY_HOST", raising=False)

    settings = CredentialSettings()  # type: ignore[call-arg]
    assert settings.tenant_id == "contoso.onmicrosoft.com"
    assert settings.client_secret.get_secret_value() == "s3cr3t"
    assert settings.authority_host == AuthorityHost.AZURE_PUBLIC_CLOUD
    assert "s3cr3t" not in repr(settings)


def test_credential_settings_require_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TENANT_ID", "CLIENT_ID", "CLIENT_SECRET"):
        monkeypatch.delenv(f"AZURE_{name}", raising=False)

    with pytest.raises(ValidationError):
        CredentialSettings()  # type: ignore[call-arg]
