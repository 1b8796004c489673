"""
Radix Tree (compressed trie) with cached prefix autocomplete.

Edges carry string fragments instead of single characters, so chains of
single-child nodes collapse into one labelled edge. On top of the structural
operations the tree offers prefix autocomplete backed by a `CompletionCache`
that memoizes the completions found under every subtree it visits.

Classes
-------
RadixNode
    Edge-labelled node. Holds `children` (dict label -> RadixNode) and
    `is_terminal`. Iteration over children is lexicographic by label.
RadixTree
    Public API: insert / delete / contains / enumerate / node_count /
    autocomplete, plus batch helpers and cache maintenance.

Conventions & invariants
------------------------
- **Radix invariant:** two children of the same node never share a non-empty
  common prefix, i.e. their labels start with different characters. The edit
  algorithms keep it; `RadixNode` does not check it.
- **Edge labels** are never empty. A string that ends where an edge is split
  marks the intermediate node terminal.
- **Empty string:** `""` is represented by `root.is_terminal`.
- **Size:** `size` counts distinct stored strings. Re-inserting a stored
  string or deleting an absent one leaves it unchanged.
- **No re-merge on delete:** pruning removes non-terminal leaves only. A node
  left with a single child keeps it, so the tree may be less compressed than
  a freshly built one holding the same strings.
- **Iterative traversals:** descent, enumeration and subtree collection use
  explicit stacks, so depth is bounded by memory rather than the recursion
  limit.

Concurrency
-----------
Only the completion cache is locked. Node structure and `size` are not
synchronized; concurrent `insert`/`delete` on one tree must be serialized by
the caller. Concurrent `autocomplete` calls on a tree that is not being
mutated are safe.

Complexity (typical)
--------------------
Let L be the input length and d the fan-out of a node.
- insert / delete / contains: O(L · d)
- autocomplete: O(L · d) descent + O(subtree) on a cache miss, O(k) on a hit.
- enumerate / node_count: O(#nodes)
"""

import logging
from itertools import groupby

from tries.completion_cache import CompletionCache

log = logging.getLogger("tries")


class RadixNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self, is_terminal=False):
    self.children = {}
    self.is_terminal = is_terminal


  def add_child(self, label, child=False):
    """Attach `child` under `label`, replacing an edge with the same label.

    `child` is either an existing `RadixNode` or a terminal flag for a fresh
    node. Returns the attached node.
    """
    if not isinstance(child, RadixNode):
      child = RadixNode(bool(child))
    self.children[label] = child
    return child


  def remove_child(self, label):
    self.children.pop(label, None)


  def get_child(self, label):
    return self.children.get(label)


  def child_starting_with(self, ch):
    """Return (label, child) for the edge whose label starts with ch, or None."""
    for label, child in self.children.items():
      if label[0] == ch:
        return label, child
    return None


  def iter_children(self):
    """Yield (label, child) in lexicographic label order."""
    children = self.children
    for label in sorted(children):
      yield label, children[label]


  def is_leaf(self):
    return not self.children


  def degree(self):
    return len(self.children)




#### ===================================================  ####
#    Radix Tree with completion cache
#### ===================================================  ####

class RadixTree:
  __slots__ = ("root", "size", "_cache")

  def __init__(self, cache=None):
    """Create an empty tree.

    Parameters
    ----------
    cache : CompletionCache | None
        Cache to read and populate during autocomplete. A private cache is
        created when omitted; pass `CompletionCache.shared()` (or any instance
        handed to several trees) to share completions between trees.
    """
    self.root = RadixNode()
    self.size = 0
    self._cache = CompletionCache() if cache is None else cache


  @property
  def cache(self):
    return self._cache


  @staticmethod
  def _lcp(a, b):
    """Return the length of the longest common prefix of a and b."""
    i = 0
    n = min(len(a), len(b))
    while i < n and a[i] == b[i]:
      i += 1
    return i


  @staticmethod
  def _prepare_batch(words, normalize=None, dedup=True, presorted=False):
    """Normalize, and optionally sort/deduplicate, a batch of strings.

    Parameters
    ----------
    words : Iterable[str]
        Incoming strings.
    normalize : Callable[[str], str] | None
        Applied to each element; None keeps strings verbatim.
    dedup : bool, default=True
        Remove duplicates within the batch.
    presorted : bool, default=False
        If True, `words` is already sorted under the same `normalize` rule and
        deduplication is a stable O(n) pass.

    Returns
    -------
    list[str]
    """
    if normalize is not None:
      words = map(normalize, words)
    if presorted:
      # equal strings sit next to each other
      return [w for w, _ in groupby(words)] if dedup else list(words)
    return sorted(set(words) if dedup else words)


  ## ----- Structural edits ----- ##

  def insert(self, word, normalize=None):
    """Store `word`, splitting an edge when it diverges mid-label.

    Before the tree is touched the completion cache is patched: `word` is
    appended to every cached list whose key shares a non-empty prefix with it
    and is not longer than it. The patch runs even when `word` is already
    stored.

    Descent rules at each node, with `rem` the unconsumed part of `word`:
    - a child label equals `rem`: mark that child terminal;
    - `rem` starts with a child label: descend with the remainder;
    - a child label shares a proper prefix `p` with `rem`: split it into an
      intermediate node under `p` holding the old tail and the new tail (or
      marked terminal itself when `rem == p`);
    - otherwise: attach `rem` as a new terminal edge.

    Args:
        word (str): String to store.
        normalize (Callable[[str], str] | None): Optional normalizer.

    Returns:
        bool: True if `word` was not stored before.
    """
    if normalize is not None:
      word = normalize(word)
    self._cache.patch(word)

    added = self._insert(word)
    if added:
      self.size += 1
    return added


  def _insert(self, word):
    node = self.root
    rem = word

    while rem:
      hit = node.child_starting_with(rem[0])
      if hit is None:
        node.add_child(rem, True)
        return True

      label, child = hit
      if rem == label:
        fresh = not child.is_terminal
        child.is_terminal = True
        return fresh

      i = self._lcp(rem, label)
      if i == len(label):
        rem = rem[i:]
        node = child
        continue

      shared = label[:i]
      node.remove_child(label)
      mid = node.add_child(shared, i == len(rem))
      mid.add_child(label[i:], child)
      if i < len(rem):
        mid.add_child(rem[i:], True)
      log.debug("split edge %r at %r", label, shared)
      return True

    fresh = not node.is_terminal
    node.is_terminal = True
    return fresh


  def delete(self, word, normalize=None):
    """Remove `word` and prune nodes left as non-terminal leaves.

    The cache entry keyed exactly by `word` is dropped whether or not the word
    was stored. Lists cached under other keys may still mention it.

    Returns:
        bool: True if `word` was stored and has been removed.
    """
    if normalize is not None:
      word = normalize(word)
    self._cache.discard(word)

    if self._delete(word):
      self.size -= 1
      return True
    return False


  def _delete(self, word):
    if word == "":
      if self.root.is_terminal:
        self.root.is_terminal = False
        return True
      return False

    node = self.root
    rem = word
    frames = []

    while rem:
      hit = node.child_starting_with(rem[0])
      if hit is None:
        return False
      label, child = hit
      if not rem.startswith(label):
        return False
      frames.append((node, label))
      node = child
      rem = rem[len(label):]

    if not node.is_terminal:
      return False
    node.is_terminal = False

    while frames:
      parent, label = frames.pop()
      child = parent.get_child(label)
      if child.is_terminal or not child.is_leaf():
        break
      parent.remove_child(label)
      log.debug("pruned edge %r", label)
    return True


  def batch_insert(self, words, *, normalize=None, dedup=True, presorted=False):
    """Insert many strings; returns how many were newly added."""
    words = self._prepare_batch(words, normalize, dedup, presorted)
    return sum(1 for w in words if self.insert(w))


  def batch_delete(self, words, *, normalize=None, dedup=True, presorted=False):
    """Delete many strings; returns (deleted_count, missing_count)."""
    words = self._prepare_batch(words, normalize, dedup, presorted)
    deleted = sum(map(self.delete, words))
    return deleted, len(words) - deleted


  def clear(self):
    """Drop every stored string and empty the completion cache."""
    self.root = RadixNode()
    self.size = 0
    self._cache.clear()


  def clear_cache(self):
    self._cache.clear()


  ## ----- Lookup & traversal ----- ##

  def _find(self, word):
    """Return the node whose path is exactly `word`, or None."""
    node = self.root
    rem = word
    while rem:
      hit = node.child_starting_with(rem[0])
      if hit is None:
        return None
      label, child = hit
      if not rem.startswith(label):
        return None
      node = child
      rem = rem[len(label):]
    return node


  def contains(self, word, normalize=None):
    if normalize is not None:
      word = normalize(word)
    node = self._find(word)
    return node is not None and node.is_terminal


  def enumerate(self):
    """Yield every stored string in lexicographic order."""
    stack = [(self.root, "")]
    while stack:
      node, path = stack.pop()
      if node.is_terminal:
        yield path
      for label, child in reversed(list(node.iter_children())):
        stack.append((child, path + label))


  def node_count(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If True, return `sum(len(children)) / (# internal nodes)` instead.

    Returns
    -------
    int | float
        Total nodes including the root (an empty tree has 1), or the average
        out-degree (0.0 for a tree without internal nodes).
    """
    nodes = edges = parents = 0
    pending = [self.root]
    while pending:
      node = pending.pop()
      nodes += 1
      if node.is_leaf():
        continue
      parents += 1
      edges += node.degree()
      pending.extend(child for _, child in node.iter_children())

    if not get_avg_branch_factor:
      return nodes
    return edges / parents if parents else 0.0


  ## ----- Autocomplete ----- ##

  def autocomplete(self, prefix, limit=None, normalize=None):
    """Return up to `limit` stored strings that start with `prefix`.

    - An exact cache hit on `prefix` is returned directly (truncated, never
      padded).
    - Otherwise the prefix is walked down from the root. If nothing below the
      root matches (or the prefix is empty) every stored string is collected
      and filtered. If the prefix diverges from an edge deeper down there are
      no completions. Otherwise the reached subtree is collected: the node's
      own string first, then its descendants in label order.
    - Subtree collection consults and populates the cache under the key of
      each subtree's full path.

    Args:
        prefix (str): Query prefix ("" lists the whole tree).
        limit (int | None): Maximum results; None for all, <= 0 for none.
        normalize (Callable[[str], str] | None): Optional normalizer.

    Returns:
        list[str]
    """
    if normalize is not None:
      prefix = normalize(prefix)
    if limit is not None and limit <= 0:
      return []

    hit = self._cache.get(prefix)
    if hit is not None:
      return self._trim(hit, limit)

    node, path = self._descend(prefix)
    if node is None:
      return []
    if node is self.root:
      found = [w for w in self._collect(node, "", store=False) if w.startswith(prefix)]
    else:
      found = self._collect(node, path)
    return self._trim(found, limit)


  def _descend(self, prefix):
    """Walk `prefix` from the root.

    Returns `(node, path)` where `path` is the full label path of `node`; it
    runs past `prefix` when the prefix ends inside an edge. `(root, "")` means
    nothing below the root was matched; `(None, "")` means the prefix diverged
    from an edge below the root.
    """
    node = self.root
    path = ""
    rem = prefix
    while rem:
      hit = node.child_starting_with(rem[0])
      if hit is None:
        return (self.root, "") if node is self.root else (None, "")
      label, child = hit
      if label.startswith(rem):
        return child, path + label
      if not rem.startswith(label):
        return None, ""
      node = child
      path += label
      rem = rem[len(label):]
    return node, path


  def _collect(self, node, path, store=True):
    """Return every stored string in the subtree at `node`, cache-aware.

    Post-order over an explicit stack. Each finished subtree is stored in the
    cache under its path; subtrees already cached are spliced in without
    descending. With `store=False` the starting node itself is neither looked
    up nor stored (used for the root).
    """
    cache = self._cache
    if store:
      hit = cache.get(path)
      if hit is not None:
        return hit

    stack = [(path, node.iter_children(), [path] if node.is_terminal else [], store)]
    while True:
      cur_path, children, found, keep = stack[-1]
      nxt = next(children, None)
      if nxt is not None:
        label, child = nxt
        child_path = cur_path + label
        hit = cache.get(child_path)
        if hit is not None:
          found.extend(hit)
        else:
          start = [child_path] if child.is_terminal else []
          stack.append((child_path, child.iter_children(), start, True))
        continue

      stack.pop()
      if keep:
        cache.put(cur_path, found)
      if not stack:
        return found
      stack[-1][2].extend(found)


  @staticmethod
  def _trim(values, limit):
    if limit is None or len(values) <= limit:
      return values
    return values[:limit]


  ## ----- Dunder helpers ----- ##

  def __len__(self):
    return self.size

  def __contains__(self, word):
    return self.contains(word)

  def __iter__(self):
    return self.enumerate()
