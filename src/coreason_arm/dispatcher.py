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
OperationDispatcher: the single execution routine behind every management operation.

Each call is one linear pass: acquire token, build request, send, classify the status
code against the operation's table, decode. There is no retry loop here.
"""

from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from coreason_arm.config import OperationConfig
from coreason_arm.credentials import TokenCredential
from coreason_arm.exceptions import (
    BuildRequestError,
    CoreasonArmError,
    DefaultResponseError,
    DeserializeError,
    ExecuteRequestError,
    GetTokenError,
    OperationError,
    ResponseBytesError,
    UnexpectedResponseError,
)
from coreason_arm.models import ErrorResponse, OperationResponse
from coreason_arm.utils.logger import logger

tracer = trace.get_tracer(__name__)

# Marks a declared success status that carries no payload (e.g. 202, 204).
NO_CONTENT = None

_BODYLESS_METHODS_NEEDING_LENGTH = frozenset({"POST", "PUT", "PATCH"})


class Operation(BaseModel):
    """
    Describes one management operation.

    Attributes:
        operation_id (str): Stable identifier, e.g. "StorageAccounts_Create".
        method (str): HTTP method.
        path (str): Path template relative to the base path, with `{name}` placeholders.
        responses (dict[int, Any]): Declared success statuses mapped to a payload schema,
            or NO_CONTENT for a bodyless status.
        default_error (bool): Decode every undeclared status through ErrorResponse
            instead of returning the raw body.
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str
    method: str
    path: str
    responses: dict[int, Any] = Field(..., min_length=1)
    default_error: bool = False


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter[Any]:
    return TypeAdapter(schema)


def _encode_json(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return to_json(body)


class OperationDispatcher:
    """
    Executes Operations against the management endpoint.

    Holds no per-call mutable state; one instance is safely shared by concurrent calls.

    Attributes:
        config (OperationConfig): Base path, API version and token audience.
        client (httpx.AsyncClient): The transport. Pooling is its concern.
        credential (TokenCredential | None): When set, every request carries a bearer token.
    """

    def __init__(
        self,
        config: OperationConfig,
        client: httpx.AsyncClient,
        credential: TokenCredential | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.credential = credential

    async def dispatch(
        self,
        operation: Operation,
        path_params: Mapping[str, Any] | None = None,
        query: Sequence[tuple[str, Any]] | None = None,
        body: Any = None,
    ) -> OperationResponse:
        """
        Runs `operation` and returns its success outcome.

        Emits an OpenTelemetry span named after the operation id.

        Args:
            operation: The operation descriptor.
            path_params: Values for the path template placeholders.
            query: Operation query parameters, appended after `api-version`. None values are dropped.
            body: JSON-serializable payload or pydantic model. None sends no body.

        Returns:
            OperationResponse: The declared status and its decoded payload.

        Raises:
            GetTokenError: The configured credential failed. Nothing was sent.
            BuildRequestError: The request could not be built.
            ExecuteRequestError: The transport failed to send the request.
            ResponseBytesError: The body could not be read.
            DeserializeError: The body did not match the declared schema.
            UnexpectedResponseError: The status is not declared for this operation.
            DefaultResponseError: The status is not declared and the operation decodes errors.
        """
        with tracer.start_as_current_span(operation.operation_id) as span:
            span.set_attribute("arm.operation_id", operation.operation_id)
            span.set_attribute("http.request.method", operation.method)

            try:
                headers: dict[str, str] = {}
                if self.credential is not None:
                    headers["Authorization"] = await self._authorization(operation, self.credential)

                request = self._build_request(operation, path_params, query, body, headers)
                logger.debug(f"{operation.operation_id}: {request.method} {request.url.path}")

                response = await self._send(operation, request)
                span.set_attribute("http.response.status_code", response.status_code)
                try:
                    result = await self._handle_response(operation, response)
                finally:
                    await response.aclose()
            except OperationError as e:
                span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                raise

            span.set_status(Status(StatusCode.OK))
            logger.info(f"{operation.operation_id}: completed with status {result.status_code}")
            return result

    async def _authorization(self, operation: Operation, credential: TokenCredential) -> str:
        try:
            token = await credential.acquire_token(self.config.token_credential_resource)
        except CoreasonArmError as e:
            logger.error(f"{operation.operation_id}: could not authenticate ({type(e).__name__})")
            raise GetTokenError(
                f"{operation.operation_id}: could not authenticate: {e}", operation.operation_id
            ) from e
        except Exception as e:
            # Third-party credentials may raise anything; the message is not trusted.
            logger.error(f"{operation.operation_id}: could not authenticate ({type(e).__name__})")
            raise GetTokenError(
                f"{operation.operation_id}: could not authenticate: {type(e).__name__}", operation.operation_id
            ) from e
        return f"Bearer {token.token.get_secret_value()}"

    def _build_request(
        self,
        operation: Operation,
        path_params: Mapping[str, Any] | None,
        query: Sequence[tuple[str, Any]] | None,
        body: Any,
        headers: dict[str, str],
    ) -> httpx.Request:
        if not self.config.api_version:
            raise BuildRequestError(f"{operation.operation_id}: api_version is not configured", operation.operation_id)

        try:
            url = self.config.base_path + self._expand_path(operation.path, path_params or {})
            params: list[tuple[str, Any]] = [("api-version", self.config.api_version)]
            params.extend((name, value) for name, value in query or () if value is not None)

            content: bytes | None = None
            if body is not None:
                content = _encode_json(body)
                headers["Content-Type"] = "application/json"
            elif operation.method.upper() in _BODYLESS_METHODS_NEEDING_LENGTH:
                headers["Content-Length"] = "0"

            return self.client.build_request(
                operation.method.upper(), url, params=params, headers=headers, content=content
            )
        except (KeyError, ValueError, TypeError, PydanticSerializationError, httpx.InvalidURL) as e:
            raise BuildRequestError(
                f"{operation.operation_id}: could not build request: {type(e).__name__}: {e}", operation.operation_id
            ) from e

    @staticmethod
    def _expand_path(template: str, path_params: Mapping[str, Any]) -> str:
        encoded: dict[str, str] = {}
        for name, value in path_params.items():
            text = str(value)
            if not text:
                raise ValueError(f"path parameter '{name}' must not be empty")
            segment = quote(text, safe="")
            # Dot segments are collapsed by URL normalisation and would address another resource
            if segment in (".", ".."):
                raise ValueError(f"path parameter '{name}' must not be a dot segment")
            encoded[name] = segment
        # Missing placeholders raise KeyError
        return template.format_map(encoded)

    async def _send(self, operation: Operation, request: httpx.Request) -> httpx.Response:
        try:
            return await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"{operation.operation_id}: request failed ({type(e).__name__})")
            raise ExecuteRequestError(
                f"{operation.operation_id}: request failed: {type(e).__name__}: {e}", operation.operation_id
            ) from e

    async def _read(self, operation: Operation, response: httpx.Response) -> bytes:
        try:
            return await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise ResponseBytesError(
                f"{operation.operation_id}: could not read response body: {type(e).__name__}", operation.operation_id
            ) from e

    @staticmethod
    def _decode(operation: Operation, status_code: int, schema: Any, body: bytes) -> Any:
        try:
            return _adapter(schema).validate_json(body)
        except ValidationError as e:
            raise DeserializeError(
                f"{operation.operation_id}: could not decode {status_code} response",
                operation.operation_id,
                status_code,
                body,
            ) from e

    async def _handle_response(self, operation: Operation, response: httpx.Response) -> OperationResponse:
        status_code = response.status_code

        if status_code in operation.responses:
            schema = operation.responses[status_code]
            if schema is NO_CONTENT:
                return OperationResponse(status_code=status_code)
            body = await self._read(operation, response)
            return OperationResponse(status_code=status_code, value=self._decode(operation, status_code, schema, body))

        body = await self._read(operation, response)
        if operation.default_error:
            error = self._decode(operation, status_code, ErrorResponse, body)
            logger.warning(f"{operation.operation_id}: failed with status {status_code}")
            raise DefaultResponseError(operation.operation_id, status_code, error)

        logger.warning(f"{operation.operation_id}: unexpected status {status_code}")
        raise UnexpectedResponseError(operation.operation_id, status_code, body)
