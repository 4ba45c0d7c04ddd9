from typing import Collection, Optional

from dokit._cogs.clients import api, auth
from dokit._cogs.helpers import typedefs
from dokit._cogs.structs import actions, references


async def list_actions(
        *,
        scope: references.ActionScope = references.ACCOUNT,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> Collection[actions.Action]:
    """
    List the actions executed on the account or on a specific resource.

    Limited to 25 actions per page unless specified otherwise.
    """
    params = references.page_params(page=page, per_page=per_page)
    result = await api.get(
        url=scope.get_url(params=params),
        context=context,
        logger=logger,
    )
    return actions.parse_actions(result.data)


async def read_action(
        action_id: references.ActionId,
        *,
        scope: references.ActionScope = references.ACCOUNT,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Fetch a fresh snapshot of an action, either account-wide or per-resource.
    """
    result = await api.get(
        url=scope.get_url(action_id),
        context=context,
        logger=logger,
    )
    return actions.parse_action(result.data)


async def create_action(
        request: actions.ActionRequest,
        *,
        scope: references.ActionScope,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Initiate an action on a resource. The returned action is usually in progress.
    """
    result = await api.post(
        url=scope.get_url(),
        payload=request,
        context=context,
        logger=logger,
    )
    return actions.parse_action(result.data)

