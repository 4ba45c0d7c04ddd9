"""
Actions of the block storage volumes: attaching, detaching, resizing.

The requests are validated locally before sending: an invalid request
raises :class:`LocalValidationError` and never reaches the network.
"""
from typing import Collection, Optional

from dokit._cogs.clients import actions as actions_api
from dokit._cogs.clients import api, auth
from dokit._cogs.helpers import typedefs
from dokit._cogs.structs import actions, references


async def attach_volume(
        volume_id: str,
        request: actions.ActionRequest,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Attach a volume to a droplet, e.g. ``{type: attach, droplet_id: 123, region: nyc1}``.
    """
    actions.check_attach_request(request)
    return await actions_api.create_action(
        request,
        scope=references.volume(volume_id),
        context=context,
        logger=logger,
    )


async def attach_volume_by_name(
        request: actions.ActionRequest,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Attach a volume to a droplet, with the volume addressed by its ``volume_name``.
    """
    actions.check_attach_by_name_request(request)
    return await actions_api.create_action(
        request,
        scope=references.volume(),
        context=context,
        logger=logger,
    )


async def detach_volume(
        volume_id: str,
        request: actions.ActionRequest,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    actions.check_attach_request(request)
    return await actions_api.create_action(
        request,
        scope=references.volume(volume_id),
        context=context,
        logger=logger,
    )


async def detach_volume_by_name(
        request: actions.ActionRequest,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    actions.check_attach_by_name_request(request)
    return await actions_api.create_action(
        request,
        scope=references.volume(),
        context=context,
        logger=logger,
    )


async def resize_volume(
        volume_id: str,
        request: actions.ActionRequest,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    """
    Resize a volume, e.g. ``{type: resize, size_gigabytes: 100, region: nyc1}``.
    """
    actions.check_resize_request(request)
    return await actions_api.create_action(
        request,
        scope=references.volume(volume_id),
        context=context,
        logger=logger,
    )


async def list_volume_actions(
        volume_id: str,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> Collection[actions.Action]:
    return await actions_api.list_actions(
        scope=references.volume(volume_id),
        page=page,
        per_page=per_page,
        context=context,
        logger=logger,
    )


async def get_volume_action(
        volume_id: str,
        action_id: references.ActionId,
        *,
        context: auth.APIContext,
        logger: typedefs.Logger = api.logger,
) -> actions.Action:
    return await actions_api.read_action(
        action_id,
        scope=references.volume(volume_id),
        context=context,
        logger=logger,
    )
