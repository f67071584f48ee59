"""Transport interface and signed HTTP implementation."""

import time
from abc import ABC, abstractmethod
from types import TracebackType

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from mochow.config import MochowSettings, get_settings
from mochow.exceptions import ErrorCode, TransportError
from mochow.logging_config import get_logger
from mochow.observability.metrics import track_request, track_retry
from mochow.transport.models import ApiRequest, ApiResponse

logger = get_logger(__name__)


class Transport(ABC):
    """Abstract base class for transports.

    Sends one signed request and returns the raw response. Failures
    reported by the service are left to the caller to classify.
    """

    @abstractmethod
    def send(self, request: ApiRequest) -> ApiResponse:
        """Send a request.

        Args:
            request: Request to send.

        Returns:
            The service response, successful or not.

        Raises:
            TransportError: If the service could not be reached.
        """
        ...

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class HTTPTransport(Transport):
    """Transport over HTTP using httpx.

    Signs every request, applies connection and request timeouts, and
    retries transient failures with exponential backoff.
    """

    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        settings: MochowSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the HTTP transport.

        Args:
            settings: Connection configuration.
            client: Existing HTTP client (for testing).

        Raises:
            ConfigurationError: If the settings are invalid.
        """
        self._settings = settings or get_settings().mochow
        self._settings.validate_for_client()
        self._client = client
        self._owns_client = client is None
        self._sleep = time.sleep

    @property
    def settings(self) -> MochowSettings:
        """Connection configuration in use."""
        return self._settings

    def _authorization(self) -> str:
        api_key = self._settings.api_key.get_secret_value() if self._settings.api_key else ""
        return f"Bearer account={self._settings.account}&api_key={api_key}"

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._settings.endpoint,
                timeout=httpx.Timeout(
                    self._settings.request_timeout_ms / 1000,
                    connect=self._settings.connection_timeout_ms / 1000,
                ),
                follow_redirects=not self._settings.redirect_disabled,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._authorization(),
            "Content-Type": "application/json",
            "User-Agent": self._settings.user_agent,
        }

    def send(self, request: ApiRequest) -> ApiResponse:
        """Send a signed request, retrying transient failures."""
        client = self._get_client()
        operation = request.operation or request.method.lower()
        start_time = time.perf_counter()

        try:
            response = self._send_with_retry(client, request, operation)

        except httpx.TimeoutException as e:
            track_request(operation, time.perf_counter() - start_time, "transport_error")
            logger.error(f"Mochow request timed out: {e}", extra={"operation": operation})
            raise TransportError(
                f"Request to Mochow timed out: {e}",
                code=ErrorCode.TRANSPORT_TIMEOUT,
                details={"uri": request.uri, "operation": operation},
            ) from e

        except httpx.TransportError as e:
            track_request(operation, time.perf_counter() - start_time, "transport_error")
            logger.error(f"Mochow connection error: {e}", extra={"operation": operation})
            raise TransportError(
                f"Failed to connect to Mochow: {e}",
                code=ErrorCode.TRANSPORT_ERROR,
                details={"uri": request.uri, "operation": operation},
            ) from e

        api_response = ApiResponse(
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            content=response.content,
        )
        status = "service_error" if api_response.is_failure() else "success"
        track_request(operation, time.perf_counter() - start_time, status)

        logger.debug(
            f"{request.method} {request.url} -> {response.status_code}",
            extra={"operation": operation, "status_code": response.status_code},
        )
        return api_response

    def _send_once(self, client: httpx.Client, request: ApiRequest) -> httpx.Response:
        return client.request(
            request.method,
            request.url,
            json=request.body,
            params=request.params or None,
            headers=self._headers(),
        )

    def _send_with_retry(
        self,
        client: httpx.Client,
        request: ApiRequest,
        operation: str,
    ) -> httpx.Response:
        if self._settings.max_retry <= 0:
            return self._send_once(client, request)

        def _before_sleep(retry_state: RetryCallState) -> None:
            track_retry(operation)
            outcome = retry_state.outcome
            reason = "exception" if outcome is not None and outcome.failed else "status"
            logger.warning(
                f"Retrying Mochow request (attempt {retry_state.attempt_number})",
                extra={"operation": operation, "reason": reason},
            )

        retrying = Retrying(
            retry=retry_if_exception_type(httpx.TransportError)
            | retry_if_result(
                lambda response: response.status_code in self.RETRYABLE_STATUS_CODES
            ),
            wait=wait_exponential(
                multiplier=self._settings.retry_base_interval_ms / 1000,
                max=self._settings.retry_max_delay_ms / 1000,
            ),
            stop=stop_after_attempt(self._settings.max_retry + 1),
            sleep=self._sleep,
            before_sleep=_before_sleep,
            # Out of attempts: hand back the last response, or re-raise the last error.
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        )
        return retrying(self._send_once, client, request)
