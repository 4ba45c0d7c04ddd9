import dataclasses
import io
import logging
import re
import sys
from typing import Any, List, Optional

import aiohttp.web
import pytest
from multidict import CIMultiDict

from dokit._cogs.clients.auth import APIContext
from dokit._cogs.configs.configuration import ClientSettings
from dokit._cogs.structs.credentials import ConnectionInfo
from dokit._core.engines.loggers import ResourcePrefixingTextFormatter, configure


@pytest.fixture()
def hostname():
    """ A fake hostname to be used in all aiohttp/aresponses tests. """
    return 'fake-host'


@pytest.fixture()
def token():
    return 'fake-token'


@pytest.fixture()
def info(hostname, token):
    return ConnectionInfo(token=token, server=f'https://{hostname}')


@pytest.fixture()
def settings():
    return ClientSettings()


# Note: `aresponses` is requested to ensure that no real network calls are made.
@pytest.fixture()
async def context(info, settings, aresponses):
    async with APIContext(info, settings=settings) as context:
        yield context


#
# Mocks for the DigitalOcean API. Reasons:
# 1. No external calls must be made under any circumstances.
#    The unit-tests must be fully isolated from the environment.
# 2. The requests must be asserted after they are made (but `aresponses`
#    allows reading the requests' bodies only inside of the handlers).
#

@dataclasses.dataclass(frozen=True)
class RecordedRequest:
    method: str
    path: str
    path_qs: str
    headers: CIMultiDict
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode('utf-8')


@pytest.fixture()
def api_mock(aresponses, hostname):
    """
    A factory of server-side handlers for `aresponses`, which remember the requests.

    The value of the fixture is a function, which registers a handler for one
    request (`aresponses` excludes a response once it is matched) and returns
    a list, where the request will be put when it is handled.

    Sample usage::

        def test_me(api_mock):
            requests = api_mock('get', '/path', json={'a': 'b'})
            await do_something()
            assert len(requests) == 1
            assert requests[0].headers['Authorization'] == 'Bearer fake-token'
    """
    def add(
            method: str,
            path: str,
            *,
            status: int = 200,
            json: Optional[Any] = None,
            text: Optional[str] = None,
            body: Optional[bytes] = None,
            content_type: Optional[str] = None,
            match_querystring: bool = False,
    ) -> List[RecordedRequest]:
        requests: List[RecordedRequest] = []

        async def handler(request: aiohttp.web.Request) -> aiohttp.web.StreamResponse:
            requests.append(RecordedRequest(
                method=request.method,
                path=request.path,
                path_qs=request.path_qs,
                headers=CIMultiDict(request.headers),
                body=await request.read(),
            ))
            if json is not None:
                return aiohttp.web.json_response(json, status=status)
            elif body is not None:
                return aiohttp.web.Response(status=status, body=body,
                                            content_type=content_type or 'text/plain',
                                            charset='utf-8')
            else:
                return aiohttp.web.Response(status=status, text=text,
                                            content_type=content_type or 'text/plain')

        aresponses.add(hostname, path, method, handler, match_querystring=match_querystring)
        return requests
    return add


def make_raw_action(id=9, status='in-progress', type='attach', **kwargs):
    raw = {
        'id': id,
        'status': status,
        'type': type,
        'started_at': '2020-11-12T16:53:31Z',
        'completed_at': None,
        'resource_id': None,
        'resource_type': 'volume',
        'region_slug': 'nyc1',
    }
    raw.update(kwargs)
    return raw


@pytest.fixture()
def raw_action():
    return make_raw_action


#
# Helpers for the logging checks.
#


@pytest.fixture()
def logstream(caplog):
    """ Prefixing is done at the final output. We have to intercept it. """

    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    quieted = {name: logging.getLogger(name).propagate for name in ['asyncio', 'dokit.clients']}

    # Setup all log levels of sub-libraries. A side-effect: the handlers are also added.
    configure(verbose=True)

    # Remove any stream handlers added in the step above. But keep the caplog's handlers.
    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
            logger.removeHandler(handler)

    # Inject our stream-intercepting handler.
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    formatter = ResourcePrefixingTextFormatter('prefix %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    try:
        with caplog.at_level(logging.DEBUG):
            yield stream
    finally:
        logger.removeHandler(handler)
        logger.handlers[:] = handlers  # undo `configure()`
        logger.setLevel(level)
        for name, propagate in quieted.items():
            logging.getLogger(name).propagate = propagate
            logging.getLogger(name).handlers[:] = []


@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    def assert_logs_fn(patterns, prohibited=[], strict=False):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            # The expected pattern is at position 0.
            # Looking-ahead: if one of the following patterns matches, while the
            # 0th does not, then the log message is missing, and we fail the test.
            for idx, pattern in enumerate(remaining_patterns):
                m = re.search(pattern, message)
                if m:
                    if idx == 0:
                        remaining_patterns[:1] = []
                        break  # out of `remaining_patterns` cycle
                    else:
                        skipped_patterns = remaining_patterns[:idx]
                        raise AssertionError(f"Few patterns were skipped: {skipped_patterns!r}")
                elif strict:
                    raise AssertionError(f"Unexpected log message: {message!r}")

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                m = re.search(pattern, message)
                if m:
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        # If all patterns have been matched in order, we are done.
        # if some are left, but the messages are over, then we fail.
        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn
