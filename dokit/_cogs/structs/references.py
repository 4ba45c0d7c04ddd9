import dataclasses
import urllib.parse
from typing import Mapping, NewType, Optional, Union

# Volume ids are UUIDs, image ids are numbers, floating IPs are addresses; all go to the URLs as is.
ResourceId = Union[str, int]
ActionId = NewType('ActionId', int)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 25


@dataclasses.dataclass(frozen=True)
class ActionScope:
    """
    A collection of actions: either account-wide, or of one specific resource.

    The account-wide actions are at ``/actions``, the per-resource actions are
    at e.g. ``/volumes/{id}/actions``, and some actions are addressed by other
    means than the id (e.g. by name), so they are ``/volumes/actions``.
    """
    plural: Optional[str] = None  # e.g. "volumes", "floating_ips", "images"; or None for the account.
    id: Optional[ResourceId] = None

    def __str__(self) -> str:
        if self.plural is None:
            return 'account'
        elif self.id is None:
            return f'{self.plural}'
        else:
            return f'{self.plural}/{self.id}'

    def get_url(
            self,
            action_id: Optional[ActionId] = None,
            *,
            params: Optional[Mapping[str, object]] = None,
    ) -> str:
        parts = [
            '',
            self.plural,
            urllib.parse.quote(str(self.id), safe='') if self.id is not None else None,
            'actions',
            str(action_id) if action_id is not None else None,
        ]
        query = urllib.parse.urlencode({key: val for key, val in (params or {}).items()
                                        if val is not None})
        path = '/'.join(part for part in parts if part is not None)
        return path if not query else f'{path}?{query}'


def page_params(page: Optional[int] = None, per_page: Optional[int] = None) -> Mapping[str, int]:
    """ Offset pagination as the API expects it, with the API's own defaults echoed. """
    return {
        'page': page or DEFAULT_PAGE,
        'per_page': per_page or DEFAULT_PER_PAGE,
    }


ACCOUNT = ActionScope()


def volume(id: Optional[ResourceId] = None) -> ActionScope:
    return ActionScope('volumes', id)


def floating_ip(address: ResourceId) -> ActionScope:
    return ActionScope('floating_ips', address)


def image(id: ResourceId) -> ActionScope:
    return ActionScope('images', id)
