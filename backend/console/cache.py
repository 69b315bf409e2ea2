"""
Query cache for upstream reads.

Entries are keyed by endpoint path + query params and grouped under a root
(e.g. "/api/tickets" holds the ticket list and every ticket detail).
Invalidation bumps the root's generation, so every entry under it is stale
and the next read refetches. Entries are never patched in place.
"""

import hashlib
import logging
from urllib.parse import urlencode

from django.conf import settings
from django.core.cache import cache as default_cache

logger = logging.getLogger(__name__)

KEY_PREFIX = "console"


class QueryCache:

    def __init__(self, backend=None, ttl: int | None = None):
        self.backend = backend or default_cache
        self.ttl = ttl if ttl is not None else getattr(settings, "CONSOLE_QUERY_TTL", 60)

    @staticmethod
    def query_key(path: str, params: dict | None = None) -> str:
        clean = sorted((k, str(v)) for k, v in (params or {}).items() if v not in (None, ""))
        return f"{path}?{urlencode(clean)}" if clean else path

    def _generation_key(self, root: str) -> str:
        return f"{KEY_PREFIX}:gen:{root}"

    def generation(self, root: str) -> int:
        return self.backend.get(self._generation_key(root), 0)

    def _entry_key(self, root: str, query_key: str, scope: str = "") -> str:
        digest = hashlib.sha1(f"{scope}|{query_key}".encode("utf-8")).hexdigest()
        return f"{KEY_PREFIX}:q:{root}:{self.generation(root)}:{digest}"

    def fetch(self, path: str, loader, *, params: dict | None = None, root: str | None = None,
              scope: str = ""):
        """
        Return the cached read for path/params, calling loader() on a miss.

        scope separates callers that must not share reads (one per credential).
        loader failures propagate and nothing is stored.
        """
        root = root or path
        entry_key = self._entry_key(root, self.query_key(path, params), scope)

        hit = self.backend.get(entry_key)
        if hit is not None:
            logger.debug("[QueryCache] hit %s", path)
            return hit["data"]

        logger.debug("[QueryCache] miss %s", path)
        data = loader()
        self.backend.set(entry_key, {"data": data}, self.ttl)
        return data

    def invalidate(self, *roots: str) -> None:
        for root in roots:
            key = self._generation_key(root)
            self.backend.set(key, self.generation(root) + 1, None)
            logger.info("[QueryCache] invalidated %s", root)
