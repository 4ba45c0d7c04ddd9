"""
The main dokit module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the library's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from dokit._cogs.configs.configuration import (
    ClientSettings,
    NetworkingSettings,
    PollingSettings,
)
from dokit._cogs.helpers.typedefs import (
    Logger,
    Envelope,
)
from dokit._cogs.helpers.versions import (
    version as __version__,
)
from dokit._cogs.structs.credentials import (
    DEFAULT_SERVER,
    ConnectionInfo,
)
from dokit._cogs.structs.actions import (
    Action,
    ActionRequest,
    ActionStatus,
    RawAction,
    RawRegion,
    parse_action,
    parse_actions,
)
from dokit._cogs.structs.references import (
    ActionId,
    ActionScope,
    ResourceId,
)
from dokit._cogs.clients.auth import (
    APIContext,
)
from dokit._cogs.clients.errors import (
    ErrorKind,
    APIError,
    APIClientError,
    APIServerError,
    SerializationError,
    LocalValidationError,
)
from dokit._cogs.clients.api import (
    Result,
    request,
    head,
    get,
    put,
    post,
    patch,
    delete,
)
from dokit._cogs.clients.actions import (
    list_actions,
    read_action,
    create_action,
)
from dokit._cogs.clients.volumes import (
    attach_volume,
    attach_volume_by_name,
    detach_volume,
    detach_volume_by_name,
    resize_volume,
    list_volume_actions,
    get_volume_action,
)
from dokit._cogs.clients.floating_ips import (
    assign_floating_ip,
    unassign_floating_ip,
    list_floating_ip_actions,
    get_floating_ip_action,
)
from dokit._cogs.clients.images import (
    transfer_image,
    convert_image_to_snapshot,
    get_image_action,
)
from dokit._core.actions.polling import (
    ActionFetcher,
    ActionPollingError,
    ActionPollingExhausted,
    ActionPollingStopped,
    iter_action_states,
    wait_for_action,
)
from dokit._core.engines.loggers import (
    LogFormat,
    ResourceLogger,
    configure,
)

__all__ = [
    'ClientSettings', 'NetworkingSettings', 'PollingSettings',
    'Logger', 'Envelope',
    'DEFAULT_SERVER', 'ConnectionInfo',
    'Action', 'ActionRequest', 'ActionStatus', 'RawAction', 'RawRegion',
    'parse_action', 'parse_actions',
    'ActionId', 'ActionScope', 'ResourceId',
    'APIContext',
    'ErrorKind', 'APIError', 'APIClientError', 'APIServerError',
    'SerializationError', 'LocalValidationError',
    'Result', 'request', 'head', 'get', 'put', 'post', 'patch', 'delete',
    'list_actions', 'read_action', 'create_action',
    'attach_volume', 'attach_volume_by_name',
    'detach_volume', 'detach_volume_by_name',
    'resize_volume', 'list_volume_actions', 'get_volume_action',
    'assign_floating_ip', 'unassign_floating_ip',
    'list_floating_ip_actions', 'get_floating_ip_action',
    'transfer_image', 'convert_image_to_snapshot', 'get_image_action',
    'ActionFetcher', 'ActionPollingError', 'ActionPollingExhausted', 'ActionPollingStopped',
    'iter_action_states', 'wait_for_action',
    'LogFormat', 'ResourceLogger', 'configure',
]
