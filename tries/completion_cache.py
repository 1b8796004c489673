"""
Completion cache for prefix autocomplete.

A `CompletionCache` maps a query prefix to the ordered list of complete
strings found under that prefix. It is the only synchronized piece of the
radix index: a single `threading.Lock` guards every read, write, patch and
clear, always taken with a `with` block.

Scope
-----
Each `RadixTree` builds its own cache unless one is injected. Passing the same
instance to several trees shares completions between them on purpose;
`CompletionCache.shared()` returns the process-wide instance for callers that
want every tree in the process to read and write one cache.

Invalidation
------------
- `patch(word)` appends `word` to every key that shares a non-empty common
  prefix with it and is no longer than it. Lists are not re-sorted or
  de-duplicated and the tree is not consulted.
- `discard(key)` drops exactly one key. Lists under other keys that mention
  the deleted string are left alone, so a cached list may over-report after a
  delete.
"""

import logging
import threading

log = logging.getLogger("tries")

_shared = None
_shared_guard = threading.Lock()


def _shares_prefix(a, b):
  return bool(a) and bool(b) and a[0] == b[0]


class CompletionCache:
  __slots__ = ("_entries", "_lock")

  def __init__(self):
    self._entries = {}
    self._lock = threading.Lock()


  @classmethod
  def shared(cls):
    """Return the process-wide cache, creating it on first use."""
    global _shared
    with _shared_guard:
      if _shared is None:
        _shared = cls()
      return _shared


  def get(self, key):
    """Return a copy of the list cached under `key`, or None."""
    with self._lock:
      hit = self._entries.get(key)
      return None if hit is None else list(hit)


  def put(self, key, values):
    with self._lock:
      self._entries[key] = list(values)


  def discard(self, key):
    """Drop `key` if cached; return True if it was."""
    with self._lock:
      return self._entries.pop(key, None) is not None


  def patch(self, word):
    """Append `word` to every cached list it could extend.

    A key qualifies when it shares a non-empty common prefix with `word`
    (same first character) and `len(key) <= len(word)`.

    Returns
    -------
    int
        Number of keys patched.
    """
    patched = 0
    with self._lock:
      for key, values in self._entries.items():
        if _shares_prefix(key, word) and len(key) <= len(word):
          values.append(word)
          patched += 1
    if patched:
      log.debug("cache patch: %r appended to %d entries", word, patched)
    return patched


  def clear(self):
    with self._lock:
      self._entries.clear()


  def keys(self):
    with self._lock:
      return sorted(self._entries)


  def __contains__(self, key):
    with self._lock:
      return key in self._entries


  def __len__(self):
    with self._lock:
      return len(self._entries)
