from dokit._cogs.clients import actions as actions_api
from dokit._cogs.clients import api, auth
from dokit._cogs.helpers import typedefs
from dokit._cogs.structs import actions, references


async def transfer_image(
        image_id: int,
        region: str,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Transfer an image to another region (by the region's slug, e.g. ``nyc2``).
    """
    request: actions.ActionRequest = {'type': 'transfer', 'region': region}
    return await actions_api.create_action(
        request,
        scope=references.image(image_id),
        context=context,
        logger=logger,
    )


async def convert_image_to_snapshot(
        image_id: int,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    request: actions.ActionRequest = {'type': 'convert'}
    return await actions_api.create_action(
        request,
        scope=references.image(image_id),
        context=context,
        logger=logger,
    )


async def get_image_action(
        image_id: int,
        action_id: references.ActionId,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    return await actions_api.read_action(
        action_id,
        scope=references.image(image_id),
        context=context,
        logger=logger,
    )
