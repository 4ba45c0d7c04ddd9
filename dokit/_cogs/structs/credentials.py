"""
Connection-related structures.

Only the static bearer token is supported as an authentication method:
there are no login flows, no token refreshing, no alternative schemes.

The connection info is an explicit immutable object: it is constructed once
and then passed by reference to every API context that needs it. There is no
process-wide client configuration, so multiple contexts with different
credentials (e.g. different teams' tokens) can coexist in the same process.
"""
import dataclasses

DEFAULT_SERVER = 'https://api.digitalocean.com/v2'


@dataclasses.dataclass(frozen=True)
class ConnectionInfo:
    """
    A single endpoint with the credentials to use for it.
    """
    token: str = dataclasses.field(repr=False)  # never dumped to logs
    server: str = DEFAULT_SERVER  # e.g. "https://api.digitalocean.com/v2"
    scheme: str = 'Bearer'  # RFC-7235/5.1

    @property
    def authorization(self) -> str:
        return f'{self.scheme} {self.token}'
