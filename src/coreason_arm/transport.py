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
Helpers for reading HTTP bodies from the injected transport.
"""

import httpx

from coreason_arm.exceptions import OversizedResponseError

MAX_IDP_RESPONSE_BYTES = 1_000_000


async def read_limited(response: httpx.Response, limit: int = MAX_IDP_RESPONSE_BYTES) -> bytes:
    """
    Reads a streamed response body, refusing anything larger than `limit` bytes.

    Args:
        response: A response obtained with `stream=True` (or `client.stream`).
        limit: Maximum number of body bytes accepted.

    Returns:
        The raw body.

    Raises:
        OversizedResponseError: If Content-Length or the bytes received exceed the limit.
        httpx.HTTPError: If the stream fails while reading.
    """
    content_length = response.headers.get("Content-Length")
    if content_length:
        try:
            if int(content_length) > limit:
                raise OversizedResponseError("Response too large")
        except ValueError:
            pass

    content = bytearray()
    async for chunk in response.aiter_bytes():
        content.extend(chunk)
        if len(content) > limit:
            raise OversizedResponseError("Response too large")
    return bytes(content)
