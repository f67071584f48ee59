"""Stub transport and response builders shared by the test modules."""

import json
from typing import Any

from mochow.exceptions import TransportError
from mochow.transport import ApiRequest, ApiResponse, Transport


def json_response(payload: dict[str, Any], status_code: int = 200) -> ApiResponse:
    """Build a service response with a JSON body."""
    return ApiResponse(status_code=status_code, content=json.dumps(payload).encode())


class StubTransport(Transport):
    """Transport returning queued responses and recording every request.

    Queued exceptions are raised instead of returned.
    """

    def __init__(self, *responses: ApiResponse | Exception) -> None:
        self.responses: list[ApiResponse | Exception] = list(responses)
        self.requests: list[ApiRequest] = []
        self.closed = False

    def queue(self, *responses: ApiResponse | Exception) -> None:
        self.responses.extend(responses)

    def send(self, request: ApiRequest) -> ApiResponse:
        self.requests.append(request)
        if not self.responses:
            raise TransportError("No response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [r.body or {} for r in self.requests]
