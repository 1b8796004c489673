"""
Autocomplete micro-benchmark.

`time_autocomplete` replays a list of query prefixes against a tree several
times. The completion cache is cleared first, so pass 1 ("cold") pays for
subtree collection and every later pass ("warm") is served mostly from the
cache. Results come back as a pandas DataFrame for the dashboard and for ad
hoc analysis.
"""

import logging
import time

import numpy as np
import pandas as pd

from tries.radix_tree import RadixTree

log = logging.getLogger("components")

COLUMNS = ["prefix", "pass", "seconds", "results"]


def build_tree(words, normalize=None):
  """Insert `words` into a fresh tree; returns (tree, seconds)."""
  tree = RadixTree()
  t0 = time.perf_counter()
  for w in words:
    tree.insert(w, normalize=normalize)
  elapsed = time.perf_counter() - t0
  log.info("Built tree: %d strings, %d nodes in %.3fs", len(tree), tree.node_count(), elapsed)
  return tree, elapsed


def time_autocomplete(tree, prefixes, limit=10, repeats=2):
  """Time every prefix query `repeats` times, cold cache first.

  Returns
  -------
  pandas.DataFrame
      Columns: prefix, pass ("cold" | "warm"), seconds, results.
  """
  if repeats < 1:
    raise ValueError("repeats must be at least 1")
  tree.clear_cache()

  rows = []
  for r in range(repeats):
    label = "cold" if r == 0 else "warm"
    for p in prefixes:
      t0 = time.perf_counter()
      found = tree.autocomplete(p, limit)
      rows.append((p, label, time.perf_counter() - t0, len(found)))
  log.info("Timed %d queries x %d passes", len(prefixes), repeats)
  return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df):
  """Per-pass latency summary (mean, median, p95 in microseconds)."""
  grouped = df.groupby("pass", sort=False)["seconds"]
  out = pd.DataFrame({
    "queries": grouped.size(),
    "mean_us": grouped.mean() * 1e6,
    "median_us": grouped.median() * 1e6,
    "p95_us": grouped.agg(lambda s: np.percentile(s.to_numpy(), 95)) * 1e6,
  })
  return out.reset_index()
