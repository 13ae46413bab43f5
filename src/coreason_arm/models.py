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
Data models for the coreason-arm package.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class AccessToken(BaseModel):
    """
    A bearer token and the absolute UTC instant after which it is invalid.

    This model is frozen (immutable). The token itself is a SecretStr so it never
    shows up in repr, str or logs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: SecretStr = Field(..., description="The opaque bearer token. Protected from logging.")
    expires_on: datetime = Field(..., description="Absolute UTC expiry instant.")

    @field_validator("expires_on")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("expires_on must be timezone-aware")
        return v.astimezone(timezone.utc)

    def is_expired(self, now: datetime | None = None) -> bool:
        """
        Returns True once `now` has reached `expires_on`.
        A token with zero remaining lifetime is expired from the moment it is issued.
        """
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_on


class OperationResponse(BaseModel):
    """
    Success outcome of a dispatched operation.

    The status code is always kept: some operations return the same payload shape
    for 200 and 201 with different meaning to the caller.

    Attributes:
        status_code (int): The declared success status that produced this outcome.
        value (Any): The decoded payload, or None for a bodyless status.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    value: Any = None


class ErrorDetail(BaseModel):
    """A single entry of the provider-wide error envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str | None = None
    message: str | None = None
    target: str | None = None
    details: list["ErrorDetail"] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Provider-wide structured error envelope: {"error": {"code": ..., "message": ...}}.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    error: ErrorDetail
