import hashlib
import json
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


DEFAULT_MAX_ENTRIES = 256

_lock = threading.Lock()
_cache: Dict[str, Tuple[float, Any, Optional[str]]] = {}


def payload_key(prefix: str, payload: Any) -> str:
    body = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return f"{prefix}:{hashlib.sha256(body.encode('utf-8')).hexdigest()}"


def _prune(now: float, scope: Optional[str], max_entries: int) -> None:
    # Caller holds _lock. Drops stale entries, then the oldest until there is room for one more.
    stale = [
        key
        for key, (expires_at, _, cached_scope) in _cache.items()
        if expires_at <= now or cached_scope != scope
    ]
    for key in stale:
        del _cache[key]
    while _cache and len(_cache) >= max_entries:
        del _cache[next(iter(_cache))]


def get_or_set(
    key: str,
    ttl_seconds: int,
    scope: Optional[str],
    compute: Callable[[], Any],
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> Any:
    """Return the cached value for key while fresh and computed under the same scope.

    Storing a value evicts expired entries, entries from another scope and,
    past ``max_entries``, the oldest stored entries.
    """
    now = time.time()
    with _lock:
        entry = _cache.get(key)
    if entry:
        expires_at, value, cached_scope = entry
        if expires_at > now and cached_scope == scope:
            return value
    value = compute()
    with _lock:
        _cache.pop(key, None)
        _prune(now, scope, max(1, max_entries))
        _cache[key] = (now + ttl_seconds, value, scope)
    return value


def size() -> int:
    with _lock:
        return len(_cache)


def clear() -> None:
    with _lock:
        _cache.clear()
