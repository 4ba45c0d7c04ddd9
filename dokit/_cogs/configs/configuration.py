"""
All configuration flags, options, settings to fine-tune the client.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are optional, some are not (but all of them
have reasonable defaults). The connection itself (the server & the token)
is not a setting: see :class:`dokit.ConnectionInfo`.
"""
import dataclasses
from typing import Optional


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: Optional[float] = None
    """
    A timeout for the whole request (connection + sending + receiving), in seconds.

    ``None`` means no client-side timeout at all: a request that hangs forever
    must be abandoned by the caller (e.g. via ``asyncio.wait_for()``).
    """

    connect_timeout: Optional[float] = None
    """
    A timeout for establishing the connection only, in seconds.
    ``None`` means no separate connection timeout.
    """


@dataclasses.dataclass
class PollingSettings:
    """
    Defaults for waiting until the actions reach their terminal states.

    These are used only when the polling routines are called without
    the explicit interval/attempts. The API itself prescribes no cadence.
    """

    interval: float = 5.0
    """
    How long to sleep between two consecutive fetches of an action, in seconds.
    """

    attempts: Optional[int] = 120
    """
    How many times to fetch an action before giving up on waiting for it.
    The default (with the default interval) is 10 minutes.

    ``None`` means polling until the action is terminal, however long it takes.
    """


@dataclasses.dataclass
class ClientSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    polling: PollingSettings = dataclasses.field(default_factory=PollingSettings)
