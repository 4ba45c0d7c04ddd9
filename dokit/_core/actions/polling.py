"""
Waiting for the actions to reach their terminal states.

The API prescribes no cadence of polling, so the interval and the limit
of attempts are the caller's policy (with the defaults in the settings).
The fetching itself is also the caller's: any coroutine function that returns
a fresh :class:`Action` snapshot, e.g. a ``functools.partial`` of
:func:`dokit.get_volume_action` or a lambda.

The terminal ``errored`` state is a normal outcome of waiting, not an error:
it is returned (or yielded) the same way as ``completed``. Only the failures
of fetching (e.g. API errors) and the client-side give-ups are raised.
"""
import asyncio
import enum
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

from dokit._cogs.aiokits import aiotime
from dokit._cogs.configs import configuration
from dokit._cogs.helpers import typedefs
from dokit._cogs.structs import actions, references
from dokit._core.engines import loggers

ActionFetcher = Callable[[], Awaitable[actions.Action]]


class _UNSET(enum.Enum):
    token = enum.auto()


class ActionPollingError(Exception):
    """ Raised when the waiting for an action is given up before it is terminal. """

    def __init__(self, message: str, *, action: Optional[actions.Action]) -> None:
        super().__init__(message)
        self.action = action


class ActionPollingExhausted(ActionPollingError):
    """ Raised when the action is still not terminal after all polling attempts. """


class ActionPollingStopped(ActionPollingError):
    """ Raised when the waiting is stopped from outside before the action is terminal. """


async def iter_action_states(
        fetch: ActionFetcher,
        *,
        interval: Optional[float] = None,
        attempts: Union[None, int, _UNSET] = _UNSET.token,
        settings: Optional[configuration.ClientSettings] = None,
        stopper: Optional[asyncio.Event] = None,
        logger: Optional[typedefs.Logger] = None,
) -> AsyncIterator[actions.Action]:
    """
    Fetch the action repeatedly and yield every snapshot, the terminal one last.

    The first fetch happens immediately; every next fetch happens after
    the interval. If the stopper is set, the sleep is interrupted and
    the waiting is stopped. If the action is not terminal after the specified
    number of attempts (fetches), the waiting is given up; ``attempts=None``
    means no limit, and an omitted ``attempts`` means the settings' default.
    In both cases, the remote action is not affected in any way: there is
    no way to cancel it, it just is not watched anymore.

    Without an explicit logger, the messages go to a :class:`ResourceLogger`
    of the fetched action's resource, so they are prefixed with it.
    """
    settings = settings if settings is not None else configuration.ClientSettings()
    interval = interval if interval is not None else settings.polling.interval
    limit = settings.polling.attempts if isinstance(attempts, _UNSET) else attempts
    if limit is not None and limit < 1:
        raise ValueError(f"At least one polling attempt is needed; got {limit!r}.")

    attempt = 0
    while True:
        attempt += 1
        action = await fetch()
        logger = logger if logger is not None else make_action_logger(action)
        logger.debug(f"Action {action.type!r} is {action.status.value} (attempt #{attempt}).")
        yield action

        if action.terminal:
            return
        if limit is not None and attempt >= limit:
            raise ActionPollingExhausted(
                f"Action {action.id} is still {action.status.value} after {attempt} attempts.",
                action=action)

        unslept = await aiotime.sleep(interval, wakeup=stopper)
        if unslept is not None or (stopper is not None and stopper.is_set()):
            raise ActionPollingStopped(
                f"Waiting for action {action.id} is stopped while {action.status.value}.",
                action=action)


async def wait_for_action(
        fetch: ActionFetcher,
        *,
        interval: Optional[float] = None,
        attempts: Union[None, int, _UNSET] = _UNSET.token,
        settings: Optional[configuration.ClientSettings] = None,
        stopper: Optional[asyncio.Event] = None,
        logger: Optional[typedefs.Logger] = None,
) -> actions.Action:
    """
    Poll the action until it is terminal, and return its last (terminal) snapshot.
    """
    action: Optional[actions.Action] = None
    async for action in iter_action_states(fetch, interval=interval, attempts=attempts,
                                           settings=settings, stopper=stopper, logger=logger):
        pass

    if action is None:  # for type-checking: the iterator always yields or raises.
        raise RuntimeError("Polling has finished without fetching the action.")

    logger = logger if logger is not None else make_action_logger(action)
    if action.status is actions.ActionStatus.ERRORED:
        logger.warning(f"Action {action.id} ({action.type!r}) has errored.")
    else:
        logger.info(f"Action {action.id} ({action.type!r}) has completed.")
    return action


def make_action_logger(action: actions.Action) -> loggers.ResourceLogger:
    """ A logger prefixed with the action's own resource, e.g. ``[volume/v1#9]``. """
    scope = (references.ActionScope(action.resource_type, action.resource_id)
             if action.resource_type else references.ACCOUNT)
    return loggers.ResourceLogger(scope=scope, action_id=action.id)
