from types import TracebackType
from typing import Optional, Type

import aiohttp

from dokit._cogs.configs import configuration
from dokit._cogs.helpers import versions
from dokit._cogs.structs import credentials

ACCEPT = 'application/json, text/plain, */*'


class APIContext:
    """
    A container for an aiohttp session and the read-only client configuration.

    The context is constructed once per set of credentials, and is then passed
    explicitly to every API call. It is never mutated after construction,
    so it is safe to share it between concurrently running calls.
    Multiple contexts with different credentials can coexist in one process.

    Usage::

        async with APIContext(ConnectionInfo(token='...')) as context:
            result = await api.get('/account', context=context)

    A user-provided ``aiohttp.ClientSession`` can be used instead of the default
    one (e.g. with custom connectors); it is then closed with the context too.
    """

    # The main contained object used by the API methods.
    session: aiohttp.ClientSession

    # Contextual information for URL building and tuning.
    server: str
    settings: configuration.ClientSettings

    def __init__(
            self,
            info: credentials.ConnectionInfo,
            *,
            settings: Optional[configuration.ClientSettings] = None,
            session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        super().__init__()
        self.info = info
        self.server = info.server
        self.settings = settings if settings is not None else configuration.ClientSettings()
        self.session = session if session is not None else self.make_aiohttp_session(info)

        # The credentials are always of this context, even with a user-provided session.
        self.session.headers['Authorization'] = info.authorization
        self.session.headers['Accept'] = ACCEPT

        # It is a good practice to self-identify a bit, even with a user-provided session.
        if self.session.headers.get('User-Agent') is None:
            self.session.headers['User-Agent'] = f'dokit/{versions.version or "unknown"}'

    def make_aiohttp_session(self, info: credentials.ConnectionInfo) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(
            total=self.settings.networking.request_timeout,
            sock_connect=self.settings.networking.connect_timeout,
        )
        return aiohttp.ClientSession(
            headers={
                'Authorization': info.authorization,
                'Accept': ACCEPT,
            },
            timeout=timeout,
        )

    @property
    def closed(self) -> bool:
        return self.session.closed

    async def close(self) -> None:
        await self.session.close()

    async def __aenter__(self) -> "APIContext":
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()
