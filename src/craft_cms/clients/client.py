"""HTTP plumbing shared by the store clients."""

import logging
from abc import ABC, abstractmethod
from time import sleep
from typing import Any

import httpx

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

# Network failures worth another attempt when retries are enabled.
TRANSIENT_ERRORS = (httpx.ConnectError, httpx.TimeoutException)

STATUS_ERRORS: dict[int, type[APIError]] = {
    404: NotFoundError,
    429: RateLimitError,
}


class Client(ABC):
    """Base class for clients of an HTTP JSON service.

    Owns a lazily created httpx.Client and turns failures into the
    exceptions in ``clients.exceptions``: unreachable hosts and timeouts
    become ConnectionError, non-2xx responses become APIError (or one of
    its status-specific subclasses) carrying the service's own message.

    A write is attempted once unless ``retry_attempts`` says otherwise;
    callers that retry must be sure the request is safe to repeat.

    Config keys:
        base_url (required): Service root URL
        timeout: Seconds before a request is abandoned (default: 30)
        retry_attempts: Attempts per request on transient failures (default: 1)
        retry_delay: Seconds between attempts (default: 1)
        headers: Extra headers sent with every request
    """

    DEFAULTS: dict[str, Any] = {
        "timeout": 30,
        "retry_attempts": 1,
        "retry_delay": 1,
    }

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._client: httpx.Client | None = None

    def _setting(self, key: str) -> Any:
        return self._config.get(key, self.DEFAULTS[key])

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._setting("timeout"))

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self._setting("retry_attempts")))

    @property
    def retry_delay(self) -> float:
        return float(self._setting("retry_delay"))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            logger.debug(f"Opening HTTP session to {self.base_url}")
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @staticmethod
    def _error_body(response: httpx.Response) -> dict[str, Any]:
        """Decode a failed response into PostgREST error fields.

        ``message`` falls back to the raw body when the service did not
        send a JSON object with one.
        """
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text}
        if not isinstance(body, dict):
            return {"message": str(body)}
        if not body.get("message"):
            return {**body, "message": str(body)}
        return body

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Return a 2xx response; raise the matching APIError otherwise."""
        if response.is_success:
            return response

        status_code = response.status_code
        body = self._error_body(response)
        error_class = STATUS_ERRORS.get(status_code)
        if error_class is not None:
            raise error_class(f"{body['message']} ({response.url})")
        raise APIError(
            f"API error {status_code}: {body['message']}",
            status_code=status_code,
            code=body.get("code"),
            details=body.get("details"),
            hint=body.get("hint"),
        )

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request, repeating it on transient network failures.

        Raises:
            ConnectionError: If no attempt reached the service
            APIError: If the service answered with a non-2xx status
        """
        attempts = self.retry_attempts
        last_exception: Exception | None = None

        for attempt in range(1, attempts + 1):
            logger.debug(f"{method} {path} (attempt {attempt}/{attempts})")
            try:
                response = self.client.request(method, path, **kwargs)
            except TRANSIENT_ERRORS as e:
                last_exception = e
                logger.warning(
                    f"{type(e).__name__} on {method} {path} (attempt {attempt}/{attempts}): {e}"
                )
                if attempt < attempts:
                    sleep(self.retry_delay)
                continue
            return self._handle_response(response)

        raise ConnectionError(
            f"Connection failed after {attempts} attempts: {method} {path}"
        ) from last_exception

    def get(self, path: str, **kwargs) -> httpx.Response:
        return self._request("GET", path, **kwargs)

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """Fetch data from the service."""
        pass
