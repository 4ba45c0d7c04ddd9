"""
Actions: the records of asynchronously completing operations.

Mutating calls on long-lived infrastructure (volumes, floating IPs, images,
droplets, clusters) do not return the mutated resource. Instead, the API accepts
the request and returns an action in the ``in-progress`` state (occasionally,
already ``completed`` for fast operations). The action's id is the only handle
the client keeps; the caller then re-fetches the action until it is terminal::

    in-progress ──> completed
         │
         └────────> errored

There are no transitions out of the terminal states, and there is no way
to cancel an action: it runs to its end, or the client stops watching it.

The actions are never mutated locally: every fetch gives a fresh snapshot.
"""
import dataclasses
import datetime
import enum
from typing import Any, Collection, Mapping, Optional, Union

import iso8601
from typing_extensions import TypedDict

from dokit._cogs.clients import errors


class ActionStatus(str, enum.Enum):
    IN_PROGRESS = 'in-progress'
    COMPLETED = 'completed'
    ERRORED = 'errored'

    @property
    def terminal(self) -> bool:
        return self is not ActionStatus.IN_PROGRESS


class RawRegion(TypedDict, total=False):
    name: str
    slug: str
    available: bool
    sizes: Collection[str]
    features: Collection[str]


# https://docs.digitalocean.com/reference/api/api-reference/#tag/Actions
class RawAction(TypedDict, total=False):
    id: int
    status: str
    type: str
    started_at: str
    completed_at: Optional[str]
    resource_id: Optional[int]
    resource_type: str
    region: Union[RawRegion, str, None]
    region_slug: Optional[str]


class ActionRequest(TypedDict, total=False):
    type: str
    droplet_id: int
    volume_name: str
    region: str
    size_gigabytes: int
    tags: Collection[str]


@dataclasses.dataclass(frozen=True)
class Action:
    id: int
    status: ActionStatus
    type: str
    started_at: Optional[datetime.datetime] = None
    completed_at: Optional[datetime.datetime] = None
    resource_id: Optional[int] = None
    resource_type: Optional[str] = None
    region: Optional[str] = None  # a slug, e.g. "nyc1"
    raw: Optional[RawAction] = dataclasses.field(default=None, repr=False, compare=False)

    @property
    def terminal(self) -> bool:
        return self.status.terminal

    @classmethod
    def from_raw(cls, raw: RawAction) -> "Action":
        return cls(
            id=raw['id'],
            status=ActionStatus(raw['status']),
            type=raw.get('type', ''),
            started_at=parse_timestamp(raw.get('started_at')),
            completed_at=parse_timestamp(raw.get('completed_at')),
            resource_id=raw.get('resource_id'),
            resource_type=raw.get('resource_type'),
            region=_get_region_slug(raw),
            raw=raw,
        )


def parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    return iso8601.parse_date(value) if value else None


def _get_region_slug(raw: RawAction) -> Optional[str]:
    region = raw.get('region')
    if raw.get('region_slug'):
        return raw['region_slug']
    elif isinstance(region, Mapping):
        return region.get('slug')
    elif isinstance(region, str):
        return region
    else:
        return None


def parse_action(envelope: Optional[Mapping[str, Any]]) -> Action:
    """ Project a single action out of an envelope: ``{"action": {...}}``. """
    if not isinstance(envelope, Mapping) or not isinstance(envelope.get('action'), Mapping):
        raise ValueError(f"The response contains no action: {envelope!r}")
    return Action.from_raw(envelope['action'])


def parse_actions(envelope: Optional[Mapping[str, Any]]) -> Collection[Action]:
    """ Project a list of actions out of an envelope: ``{"actions": [...], "links": ...}``. """
    if not isinstance(envelope, Mapping) or not isinstance(envelope.get('actions'), list):
        raise ValueError(f"The response contains no actions: {envelope!r}")
    return [Action.from_raw(raw) for raw in envelope['actions']]


#
# Local validation of the action requests. Never reaches the network.
#

def check_attach_request(request: ActionRequest) -> None:
    if not request.get('type') or not request.get('droplet_id'):
        raise errors.LocalValidationError("Required fields missing from the action request: "
                                          "type, droplet_id.")


def check_attach_by_name_request(request: ActionRequest) -> None:
    check_attach_request(request)
    if not request.get('volume_name'):
        raise errors.LocalValidationError("Required fields missing from the action request: "
                                          "volume_name.")


def check_resize_request(request: ActionRequest) -> None:
    if not request.get('type') or not request.get('size_gigabytes'):
        raise errors.LocalValidationError("Required fields missing from the action request: "
                                          "type, size_gigabytes.")
