"""
Keeps the dashboard's tree alive across Streamlit reruns.

Streamlit re-executes the whole script on every widget change. The built
tree is parked in a mapping (``st.session_state`` in the app, a plain dict
in tests) together with the key of the workload it was built from, and is
only rebuilt when that key changes or the caller drops it. Deletes made
through the dashboard therefore stick until the workload changes.
"""

import logging

from components.bench import build_tree

log = logging.getLogger("components")

STATE_KEY = "radix_tree"


def workload_key(source, words, casefold=False):
  """Identity of a workload: its source, its strings and the case rule."""
  return (source, bool(casefold), len(words), hash(tuple(words)))


def get_tree(state, key, words, normalize=None):
  """Return ``(tree, build_seconds)`` for `key`, building it on a miss."""
  held = state.get(STATE_KEY)
  if held is not None and held[0] == key:
    return held[1], held[2]

  tree, elapsed = build_tree(words, normalize=normalize)
  state[STATE_KEY] = (key, tree, elapsed)
  return tree, elapsed


def drop_tree(state):
  """Forget the stored tree so the next `get_tree` rebuilds it."""
  if state.pop(STATE_KEY, None) is not None:
    log.info("Dropped stored tree")
