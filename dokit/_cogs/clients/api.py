import dataclasses
import json
import logging
from typing import Any, Mapping, Optional

import aiohttp

from dokit._cogs.clients import auth, errors
from dokit._cogs.helpers import typedefs

logger = logging.getLogger('dokit.clients')

# Only these methods carry a JSON content type. DELETE can have a payload, but not the type.
WRITE_METHODS = frozenset({'PUT', 'POST', 'PATCH'})
SUPPORTED_METHODS = frozenset({'HEAD', 'GET', 'PUT', 'POST', 'PATCH', 'DELETE'})


@dataclasses.dataclass(frozen=True)
class Result:
    """
    A successful response: its status & headers, the raw text, the decoded data.

    The ``data`` is whatever JSON was in the body, or ``None`` if the body
    is empty or is not a valid JSON; the ``text`` is preserved in that case.
    The ``text`` is ``None`` only if the body could not be decoded as text.
    """
    response: aiohttp.ClientResponse
    text: Optional[str]
    data: Optional[Any]

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def headers(self) -> Mapping[str, str]:
        return self.response.headers


def serialize(payload: object) -> bytes:
    try:
        return json.dumps(payload).encode('utf-8')
    except (TypeError, ValueError) as e:  # ValueError: e.g. on circular references.
        raise errors.SerializationError(f"The payload is not JSON-serializable: {e}") from e


def deserialize(text: Optional[str]) -> Optional[Any]:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:  # incl. json.JSONDecodeError
        return None


async def request(
        method: str,
        url: str,  # relative to the server/api root.
        *,
        payload: Optional[object] = None,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    """
    Perform one request, read & decode its response, and classify the failures.

    There are no retries: a single failed call surfaces immediately.
    The query strings (if any) must already be in the URL.
    """
    method = method.upper()
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")
    if payload is not None and method in {'GET', 'HEAD'}:
        raise ValueError(f"{method} requests cannot carry a payload.")

    # Serialize before any I/O, so that unserializable payloads never reach the network.
    data = serialize(payload) if payload is not None else None

    if '://' not in url:
        url = context.server.rstrip('/') + '/' + url.lstrip('/')

    all_headers = dict(headers or {})
    if method in WRITE_METHODS:
        all_headers['Content-Type'] = 'application/json'

    logger.debug(f"Requesting: {method} {url}")
    response = await context.session.request(
        method=method,
        url=url,
        data=data,
        headers=all_headers,
        # Otherwise, aiohttp adds its own content type for any binary data, e.g. in DELETE.
        skip_auto_headers=() if method in WRITE_METHODS else ('Content-Type',),
    )
    async with response:
        try:
            text: Optional[str] = await response.text()
        except UnicodeDecodeError:
            text = None
    logger.debug(f"Response: {method} {url} -> {response.status}")

    # Decode exactly once. An undecodable body is not an error by itself.
    decoded = deserialize(text)
    errors.check_response(response, text=text, data=decoded)
    return Result(response=response, text=text, data=decoded)


async def head(
        url: str,  # relative to the server/api root.
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('head', url, headers=headers, context=context, logger=logger)


async def get(
        url: str,  # relative to the server/api root.
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('get', url, headers=headers, context=context, logger=logger)


async def put(
        url: str,  # relative to the server/api root.
        payload: Optional[object] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('put', url, payload=payload, headers=headers,
                         context=context, logger=logger)


async def post(
        url: str,  # relative to the server/api root.
        payload: Optional[object] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('post', url, payload=payload, headers=headers,
                         context=context, logger=logger)


async def patch(
        url: str,  # relative to the server/api root.
        payload: Optional[object] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('patch', url, payload=payload, headers=headers,
                         context=context, logger=logger)


async def delete(
        url: str,  # relative to the server/api root.
        payload: Optional[object] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = logger,
) -> Result:
    return await request('delete', url, payload=payload, headers=headers,
                         context=context, logger=logger)
