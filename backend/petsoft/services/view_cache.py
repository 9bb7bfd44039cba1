"""
PetSoft Backend — View Cache
==============================

What:  In-process cache of rendered listing views, keyed by view path.
How:   Paths form a tree ("/app/pets/<user_id>" lives under "/app").
       `invalidate_tree(prefix)` drops the prefix and everything beneath it,
       so the next read re-fetches from the database.
Who:   Read by the dashboard listing; invalidated once after every
       successful pet mutation.

Read/Write Overlap:
    Every invalidation bumps `generation`. A reader captures the generation
    before it queries and stores its result with `set_if_current()`; if a
    write invalidated in the meantime, the result is not cached.

Scope:
    Single-process only, like the rate limiter. Each uvicorn worker keeps
    its own cache; a worker that did not perform a write will still serve
    its stale entry until its own next invalidation. At most `max_entries`
    views are kept; the least recently used one is evicted first.
"""

import logging
from collections import OrderedDict
from typing import Any, Optional

from petsoft.config import settings

logger = logging.getLogger(__name__)

# Every dashboard view lives under this path
APP_VIEW_ROOT = "/app"


class ViewCache:
    """Path-keyed LRU cache with subtree invalidation."""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries or settings.view_cache_max_entries
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, path: str) -> Optional[Any]:
        if path not in self._entries:
            return None
        self._entries.move_to_end(path)
        return self._entries[path]

    def set(self, path: str, value: Any) -> None:
        self._entries[path] = value
        self._entries.move_to_end(path)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached view %s", evicted)

    def set_if_current(self, path: str, value: Any, generation: int) -> bool:
        """
        Store `value` only if nothing was invalidated since `generation`
        was read. Returns whether the value was stored.
        """
        if generation != self._generation:
            logger.debug("Discarded stale view for %s (generation %d → %d)",
                         path, generation, self._generation)
            return False
        self.set(path, value)
        return True

    def invalidate_tree(self, prefix: str) -> int:
        """
        Mark `prefix` and every path beneath it as stale.

        Returns the number of entries dropped.
        """
        self._generation += 1
        root = prefix.rstrip("/")
        stale = [
            path for path in self._entries
            if path == root or path.startswith(root + "/")
        ]
        for path in stale:
            del self._entries[path]
        logger.debug("Invalidated %d cached view(s) under %s", len(stale), root or "/")
        return len(stale)

    def clear(self) -> None:
        self._generation += 1
        self._entries.clear()


# ── Singleton Instance ────────────────────────────────────────────────────
view_cache = ViewCache()
