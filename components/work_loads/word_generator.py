import random
import math
from collections import defaultdict

from faker.providers.lorem.en_US import Provider as LoremProvider

# English vocabulary shipped with Faker's lorem provider
WORDS_BROAD = list(dict.fromkeys(w.lower() for w in LoremProvider.word_list if w.isalpha()))
WORDS_COMMON = [w for w in WORDS_BROAD if 3 <= len(w) <= 8]


## Words bucketed by their first two letters so that
## prefix-heavy workloads can draw runs of related words
prefix_bucket = defaultdict(list)
for word in WORDS_BROAD:
  prefix_bucket[word[:2]].append(word)
prefixes = list(prefix_bucket.keys())
prefix_weights = [len(prefix_bucket[p]) for p in prefixes]


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from WORDS_COMMON.
  - unique=False: sample with replacement (allows duplicates)
  - unique=True: sample without replacement (requires n <= len(WORDS_COMMON))
  """
  word_list = WORDS_COMMON
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def _p_eff_log(x, max_mean=100):
  """Logarithmic mapping of prefix frequency [0, 1] onto a repeat probability."""
  if x < 0 or x > 1:
    raise ValueError("Prefix frequency must be between 0 and 1")
  x = max(0.0, min(0.999999, x))
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generate words where a higher prefix_freq yields longer runs sharing a 2-letter prefix.

  After each sampled word another word from the same prefix bucket follows with
  probability `_p_eff_log(prefix_freq)`, repeatedly.
  """
  p_repeat = _p_eff_log(prefix_freq)

  max_unique = len(WORDS_BROAD)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  out = []
  seen = set()
  while len(out) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    options = prefix_bucket[prefix]
    if unique:
      options = [w for w in options if w not in seen]
      if not options:
        continue
    word = rng.choice(options)
    out.append(word)
    seen.add(word)

    while len(out) < num_words and rng.random() < p_repeat:
      if unique:
        options = [w for w in options if w not in seen]
        if not options:
          break
      word = rng.choice(options)
      out.append(word)
      seen.add(word)
  return out


def sample_prefixes(words, num_prefixes, min_len=1, max_len=4, seed=None):
  """Cut `num_prefixes` query prefixes out of randomly chosen `words`."""
  if num_prefixes < 1:
    raise ValueError("num_prefixes must be positive")
  if min_len < 1 or max_len < min_len:
    raise ValueError("need 1 <= min_len <= max_len")
  pool = [w for w in words if w]
  if not pool:
    raise ValueError("words must contain at least one non-empty string")
  rng = random.Random(seed)
  out = []
  for _ in range(num_prefixes):
    w = rng.choice(pool)
    out.append(w[:rng.randint(min_len, max(min_len, min(max_len, len(w))))])
  return out
