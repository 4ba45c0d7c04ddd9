"""
DigitalOcean API errors.

The underlying client library (now, ``aiohttp``) can be replaced in the future.
We cannot rely on embedding its exceptions all over the code in the library.
Hence, we have our own hierarchy of exceptions for the API errors.

Low-level errors, such as the network connectivity issues, SSL/HTTPS issues,
timeouts, etc, are escalated from the client library as is, since they are
related not to the domain of the API, but rather to the networking and encryption.

The original errors of the client library are chained as the causes of our own
specialised errors -- for better explainability of errors in the stack traces.

The API errors are classified coarsely by the HTTP status only, into two bands:
"the request was bad" (client errors) and "the service is broken" (server errors).
Finer-grained reasons are available via the errors' ``status`` and ``data``
(the decoded response body, if it was JSON at all; e.g. ``{"id": "not_found"}``).
"""
import enum
from typing import Any, Mapping, Optional

import aiohttp


class ErrorKind(str, enum.Enum):
    CLIENT = 'ClientError'
    SERVER = 'ServerError'


class SerializationError(Exception):
    """ Raised when a request's payload cannot be encoded as JSON (before any I/O). """


class LocalValidationError(ValueError):
    """ Raised when an action request lacks the required fields (before any I/O). """


class APIError(Exception):
    kind: ErrorKind

    def __init__(
            self,
            response: aiohttp.ClientResponse,
            *,
            text: Optional[str] = None,
            data: Optional[Any] = None,
    ) -> None:
        message = data.get('message') if isinstance(data, dict) else None
        super().__init__(message or f"{response.status} {response.reason or ''}".strip())
        self._response = response
        self._text = text
        self._data = data

    @property
    def response(self) -> aiohttp.ClientResponse:
        return self._response

    @property
    def status(self) -> int:
        return self._response.status

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def text(self) -> Optional[str]:
        return self._text

    @property
    def data(self) -> Optional[Any]:
        return self._data


class APIClientError(APIError):
    kind = ErrorKind.CLIENT


class APIServerError(APIError):
    kind = ErrorKind.SERVER


def check_response(
        response: aiohttp.ClientResponse,
        *,
        text: Optional[str],
        data: Optional[Any],
) -> None:
    """
    Check the already read response for errors, and raise the classified ones.

    The body must be read & decoded before the check, since the original
    ``aiohttp`` error releases the connection, so the body is lost afterwards.
    """
    if response.status > 400:
        cls = APIServerError if response.status > 500 else APIClientError

        # Raise the library-specific error while keeping the original error in scope.
        try:
            response.raise_for_status()
        except aiohttp.ClientResponseError as e:
            raise cls(response, text=text, data=data) from e

        # Unreachable: aiohttp treats all statuses above 400 as errors, but be explicit.
        raise cls(response, text=text, data=data)
