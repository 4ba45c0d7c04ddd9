from typing import Collection, Optional

from dokit._cogs.clients import actions as actions_api
from dokit._cogs.clients import api, auth
from dokit._cogs.helpers import typedefs
from dokit._cogs.structs import actions, references


async def assign_floating_ip(
        address: str,
        droplet_id: int,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Assign a floating IP address to a droplet.
    """
    request: actions.ActionRequest = {'type': 'assign', 'droplet_id': droplet_id}
    return await actions_api.create_action(
        request,
        scope=references.floating_ip(address),
        context=context,
        logger=logger,
    )


async def unassign_floating_ip(
        address: str,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Unassign a floating IP address from whatever droplet it is assigned to.
    """
    request: actions.ActionRequest = {'type': 'unassign'}
    return await actions_api.create_action(
        request,
        scope=references.floating_ip(address),
        context=context,
        logger=logger,
    )


async def list_floating_ip_actions(
        address: str,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> Collection[actions.Action]:
    return await actions_api.list_actions(
        scope=references.floating_ip(address),
        page=page,
        per_page=per_page,
        context=context,
        logger=logger,
    )


async def get_floating_ip_action(
        address: str,
        action_id: references.ActionId,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    return await actions_api.read_action(
        action_id,
        scope=references.floating_ip(address),
        context=context,
        logger=logger,
    )
