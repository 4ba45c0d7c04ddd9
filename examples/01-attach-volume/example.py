import asyncio
import functools
import os
import sys

import dokit


async def main(volume_id: str, droplet_id: int, region: str) -> int:
    dokit.configure(verbose=True)
    info = dokit.ConnectionInfo(token=os.environ['DIGITALOCEAN_TOKEN'])
    settings = dokit.ClientSettings()
    settings.polling.interval = 2.0

    async with dokit.APIContext(info, settings=settings) as context:
        action = await dokit.attach_volume(
            volume_id,
            {'type': 'attach', 'droplet_id': droplet_id, 'region': region},
            context=context,
        )
        fetch = functools.partial(dokit.get_volume_action, volume_id, action.id, context=context)
        logger = dokit.ResourceLogger(scope=dokit.ActionScope('volumes', volume_id),
                                      action_id=action.id)
        action = await dokit.wait_for_action(fetch, settings=settings, logger=logger)

    return 0 if action.status is dokit.ActionStatus.COMPLETED else 1


if __name__ == '__main__':
    volume_id, droplet_id, region = sys.argv[1:4]
    sys.exit(asyncio.run(main(volume_id, int(droplet_id), region)))
