import hashlib
from dataclasses import dataclass, field

from .cache import QueryCache
from .notifications.base import BaseNotifier
from .upstream.client import UpstreamClient

FORWARDED_HEADERS = ("Authorization", "Cookie")


@dataclass
class ConsoleContext:
    """Collaborators every console operation works with, built once per request."""

    client: UpstreamClient
    cache: QueryCache
    notifier: BaseNotifier
    headers: dict[str, str] = field(default_factory=dict)   # forwarded to upstream

    @property
    def scope(self) -> str:
        # reads made with different credentials never share cache entries
        credentials = "|".join(self.headers.get(k, "") for k in FORWARDED_HEADERS)
        return hashlib.sha1(credentials.encode("utf-8")).hexdigest() if credentials.strip("|") else ""

    def read(self, path: str, *, params: dict | None = None, root: str | None = None):
        """Cached GET against the upstream API."""
        return self.cache.fetch(
            path,
            lambda: self.client.get(path, params=params, headers=self.headers or None),
            params=params,
            root=root,
            scope=self.scope,
        )

    def write(self, method: str, path: str, **kwargs):
        return self.client.send(method, path, headers=self.headers or None, **kwargs)
