"""
Delimiter-separated word files.

A word file holds stored strings separated by a field delimiter (default
`|`), several per line:

    hello|no|yes|maybe|hey
    over here

Loading feeds every non-empty field to `RadixTree.insert`; saving writes
`RadixTree.enumerate()` back out `words_per_line` at a time. Fields are not
escaped, so a string containing the delimiter splits into several words on
the next load.

I/O errors (missing file, permissions, decoding) propagate to the caller and
are never retried.
"""

import logging
from dataclasses import dataclass

log = logging.getLogger("components")

DEFAULT_DELIMITER = "|"
WORDS_IN_LINE = 5


## === Config Class === ##

@dataclass
class WordFileFormat:
  """
  Layout of a word file
      delimiter: str, separator between words on a line
      words_per_line: int, words written per line when saving
      encoding: str, text encoding for reads and writes
  """
  delimiter: str = DEFAULT_DELIMITER
  words_per_line: int = WORDS_IN_LINE
  encoding: str = "utf-8"

  def __post_init__(self):
    if not self.delimiter:
      raise ValueError("delimiter must be a non-empty string")
    if "\n" in self.delimiter or "\r" in self.delimiter:
      raise ValueError("delimiter cannot contain line breaks")
    if self.words_per_line < 1:
      raise ValueError("words_per_line must be at least 1")


def split_fields(lines, fmt=None):
  """Yield every non-empty field of an iterable of text lines."""
  fmt = fmt or WordFileFormat()
  for line in lines:
    for word in line.rstrip("\r\n").split(fmt.delimiter):
      if word:
        yield word


def read_words(path, fmt=None):
  """Yield every non-empty field of the file at `path`."""
  fmt = fmt or WordFileFormat()
  with open(path, "r", encoding=fmt.encoding) as f:
    yield from split_fields(f, fmt)


def load_into(tree, path, fmt=None, normalize=None):
  """Insert every word of the file at `path` into `tree`.

  Returns
  -------
  int
      Number of words read (duplicates included).
  """
  count = 0
  for word in read_words(path, fmt):
    tree.insert(word, normalize=normalize)
    count += 1
  log.info("Loaded %s words from %s", f"{count:,}", path)
  return count


def save_from(tree, path, fmt=None):
  """Write every string stored in `tree` to `path`.

  Returns
  -------
  int
      Number of words written.
  """
  fmt = fmt or WordFileFormat()
  count = 0
  batch = []
  with open(path, "w", encoding=fmt.encoding) as f:
    for word in tree.enumerate():
      batch.append(word)
      count += 1
      if len(batch) == fmt.words_per_line:
        f.write(fmt.delimiter.join(batch) + "\n")
        batch = []
    if batch:
      f.write(fmt.delimiter.join(batch) + "\n")
  log.info("Saved %s words to %s", f"{count:,}", path)
  return count
