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
Internal data models for the coreason-arm package.
These are not exposed in the public API.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthorityEndpoints(BaseModel):
    """The token and authorize endpoints derived from an authority host and tenant id."""

    model_config = ConfigDict(frozen=True)

    token_endpoint: str
    authorize_endpoint: str


class TokenResponse(BaseModel):
    """
    Successful client-credentials response from the token endpoint.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(..., min_length=1, description="The issued bearer token.")
    token_type: str | None = Field(default=None, description="Usually 'Bearer'.")
    expires_in: int | None = Field(default=None, ge=0, description="Remaining lifetime in seconds.")


class OAuth2ErrorResponse(BaseModel):
    """
    RFC 6749 section 5.2 error response.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    error: str
    error_description: str | None = None
