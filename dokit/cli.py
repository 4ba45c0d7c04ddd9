import asyncio
import dataclasses
import functools
import json
from typing import Any, Awaitable, Callable, Collection, Dict, Optional, TypeVar

import click
import yaml

from dokit._cogs.clients import actions as actions_api
from dokit._cogs.clients import auth, errors
from dokit._cogs.configs import configuration
from dokit._cogs.structs import actions, credentials, references
from dokit._core.actions import polling
from dokit._core.engines import loggers

_T = TypeVar('_T')

SCOPES = ['account', 'volumes', 'floating_ips', 'images']


@dataclasses.dataclass()
class CLIControls:
    """ Controls which are impossible to pass via CLI, e.g. in tests. """
    info: Optional[credentials.ConnectionInfo] = None
    settings: Optional[configuration.ClientSettings] = None


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        if isinstance(value, loggers.LogFormat):
            return value
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: Optional[bool] = None,
                log_refkey: Optional[str] = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


def connection_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to add the connection options and to pass the resulting controls. """
    @click.option('--token', type=str, envvar='DIGITALOCEAN_TOKEN')
    @click.option('--server', type=str, default=credentials.DEFAULT_SERVER, show_default=True)
    @click.option('-o', '--output', type=click.Choice(['json', 'yaml']), default='json')
    @click.make_pass_decorator(CLIControls, ensure=True)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(__controls: CLIControls, token: Optional[str], server: str,
                *args: Any, **kwargs: Any) -> Any:
        info = __controls.info
        if info is None and not token:
            raise click.UsageError("The API token is required: use --token or DIGITALOCEAN_TOKEN.")
        elif info is None:
            info = credentials.ConnectionInfo(token=token or '', server=server)
        settings = __controls.settings or configuration.ClientSettings()
        return fn(*args, info=info, settings=settings, **kwargs)

    return wrapper


def scope_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    @click.option('--scope', type=click.Choice(SCOPES), default='account', show_default=True)
    @click.option('--resource-id', type=str, default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(scope: str, resource_id: Optional[str], *args: Any, **kwargs: Any) -> Any:
        if scope == 'account' and resource_id is not None:
            raise click.UsageError("--resource-id makes no sense for the account-wide actions.")
        if scope != 'account' and resource_id is None:
            raise click.UsageError(f"--resource-id is required for the {scope} actions.")
        action_scope = (references.ACCOUNT if scope == 'account' else
                        references.ActionScope(scope, resource_id))
        return fn(*args, scope=action_scope, **kwargs)

    return wrapper


def execute(
        fn: Callable[[auth.APIContext], Awaitable[_T]],
        *,
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
) -> _T:
    async def _execute() -> _T:
        async with auth.APIContext(info, settings=settings) as context:
            return await fn(context)

    try:
        return asyncio.run(_execute())
    except errors.APIError as e:
        raise click.ClickException(f"{e.kind.value} {e.status}: {e}")


def dump(
        data: Any,
        *,
        output: str,
) -> None:
    if output == 'yaml':
        click.echo(yaml.safe_dump(data, sort_keys=False).rstrip())
    else:
        click.echo(json.dumps(data, indent=2))


def as_raw(action: actions.Action) -> Any:
    if action.raw is not None:
        return dict(action.raw)
    return {
        'id': action.id,
        'status': action.status.value,
        'type': action.type,
        'started_at': action.started_at.isoformat() if action.started_at else None,
        'completed_at': action.completed_at.isoformat() if action.completed_at else None,
        'resource_id': action.resource_id,
        'resource_type': action.resource_type,
        'region_slug': action.region,
    }


@click.version_option(prog_name='dokit')
@click.group(name='dokit', context_settings=dict(
    auto_envvar_prefix='DOKIT',
))
def main() -> None:
    pass


@main.group(name='actions')
def actions_group() -> None:
    """ Inspect and wait for the actions on the account or its resources. """


@actions_group.command(name='list')
@logging_options
@connection_options
@scope_options
@click.option('--page', type=int, default=references.DEFAULT_PAGE, show_default=True)
@click.option('--per-page', type=int, default=references.DEFAULT_PER_PAGE, show_default=True)
def list_(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        output: str,
        scope: references.ActionScope,
        page: int,
        per_page: int,
) -> None:
    """ List the actions, one page at a time. """
    fn = functools.partial(actions_api.list_actions, scope=scope, page=page, per_page=per_page)
    items: Collection[actions.Action] = execute(
        lambda context: fn(context=context),
        info=info,
        settings=settings,
    )
    dump([as_raw(action) for action in items], output=output)


@actions_group.command(name='get')
@logging_options
@connection_options
@scope_options
@click.argument('action_id', type=int)
def get_(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        output: str,
        scope: references.ActionScope,
        action_id: int,
) -> None:
    """ Show a single action. """
    action: actions.Action = execute(
        lambda context: actions_api.read_action(
            references.ActionId(action_id), scope=scope, context=context),
        info=info,
        settings=settings,
    )
    dump(as_raw(action), output=output)


@actions_group.command(name='wait')
@logging_options
@connection_options
@scope_options
@click.option('-i', '--interval', type=float, default=None)
@click.option('-n', '--attempts', type=click.IntRange(min=0), default=None,
              help='How many times to fetch the action; 0 for no limit.')
@click.argument('action_id', type=int)
def wait(
        info: credentials.ConnectionInfo,
        settings: configuration.ClientSettings,
        output: str,
        scope: references.ActionScope,
        interval: Optional[float],
        attempts: Optional[int],
        action_id: int,
) -> None:
    """ Wait until the action is completed or errored. """
    logger = loggers.ResourceLogger(scope=scope, action_id=action_id)

    limits: Dict[str, Any] = {} if attempts is None else {'attempts': attempts or None}

    async def _wait(context: auth.APIContext) -> actions.Action:
        return await polling.wait_for_action(
            lambda: actions_api.read_action(
                references.ActionId(action_id), scope=scope, context=context),
            interval=interval,
            settings=settings,
            logger=logger,
            **limits,
        )

    try:
        action: actions.Action = execute(_wait, info=info, settings=settings)
    except polling.ActionPollingError as e:
        raise click.ClickException(str(e))

    dump(as_raw(action), output=output)
    if action.status is actions.ActionStatus.ERRORED:
        raise click.ClickException(f"Action {action.id} has errored.")
