"""Transport data models."""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mochow.exceptions import DecodeError, ServerErrorCode, ServiceError, to_server_code

ModelT = TypeVar("ModelT", bound=BaseModel)

DATABASE_URI = "/v1/database"
TABLE_URI = "/v1/table"
INDEX_URI = "/v1/index"
ROW_URI = "/v1/row"
USER_URI = "/v1/user"
ROLE_URI = "/v1/role"


class ApiRequest(BaseModel):
    """A single RPC against the Mochow service.

    Attributes:
        uri: Resource path, e.g. "/v1/row".
        operation: Operation selector sent as a bare query key
            (``/v1/row?search``). Empty for plain DELETE calls.
        method: HTTP method.
        body: JSON body.
        params: Extra query parameters.
    """

    uri: str = Field(description="Resource path")
    operation: str = Field(default="", description="Operation selector")
    method: str = Field(default="POST", description="HTTP method")
    body: dict[str, Any] | None = Field(default=None, description="JSON body")
    params: dict[str, str] = Field(default_factory=dict, description="Query parameters")

    @property
    def url(self) -> str:
        """Request path including the operation selector."""
        if self.operation:
            return f"{self.uri}?{self.operation}"
        return self.uri


class ApiResponse(BaseModel):
    """Raw service response with status classification and decoding."""

    status_code: int = Field(description="HTTP status code")
    headers: dict[str, str] = Field(default_factory=dict, description="Lower-cased headers")
    content: bytes = Field(default=b"", description="Raw response body")

    @property
    def request_id(self) -> str | None:
        """Request id echoed by the service."""
        return self.headers.get("request-id") or self.headers.get("x-request-id")

    def body(self) -> dict[str, Any]:
        """Parse the body as a JSON object.

        Raises:
            DecodeError: If the body is not a JSON object.
        """
        if not self.content:
            return {}
        try:
            data = json.loads(self.content)
        except ValueError as e:
            raise DecodeError(
                f"Response body is not valid JSON: {e}",
                details={"status_code": self.status_code},
            ) from e
        if not isinstance(data, dict):
            raise DecodeError(
                "Response body is not a JSON object",
                details={"status_code": self.status_code},
            )
        return data

    def is_failure(self) -> bool:
        """Whether the service reported a non-success status."""
        if self.status_code >= 400:
            return True
        try:
            code = self.body().get("code", 0)
        except DecodeError:
            return False
        return isinstance(code, int) and code != ServerErrorCode.OK

    def service_error(self) -> ServiceError:
        """Build the structured error describing a failed response."""
        try:
            data = self.body()
        except DecodeError:
            data = {}

        raw_code = data.get("code")
        server_code: ServerErrorCode | int = ServerErrorCode.INTERNAL_ERROR
        if isinstance(raw_code, int):
            server_code = to_server_code(raw_code)
        message = data.get("msg") or data.get("message") or self.content.decode("utf-8", "replace")

        return ServiceError(
            message or f"HTTP {self.status_code}",
            status_code=self.status_code,
            server_code=server_code,
            request_id=self.request_id,
        )

    def decode_body_as(self, model: type[ModelT]) -> ModelT:
        """Validate the body into a pydantic model.

        Raises:
            DecodeError: If the body is malformed or does not match the model.
        """
        try:
            return model.model_validate(self.body())
        except PydanticValidationError as e:
            raise DecodeError(
                f"Response body does not match {model.__name__}: {e.error_count()} error(s)",
                details={"model": model.__name__, "errors": e.errors(include_url=False)},
            ) from e
