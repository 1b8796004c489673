import ipaddress
import os
import sys
import unittest
from urllib.parse import urlparse

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from components.work_loads.word_generator import (
    WORDS_BROAD, WORDS_COMMON, generate_random_words,
    gen_words_with_prefix_freq, sample_prefixes)
from components.work_loads.net_generator import NetConfig, NetGenerator
from components.workload import WorkLoad
from components.bench import build_tree, time_autocomplete, summarize, COLUMNS


def neighbor_same_prefix_ratio(words):
    """Fraction of positions i>0 where the 2-char prefix equals that of i-1."""
    if len(words) < 2:
        return 0.0
    same = sum(1 for a, b in zip(words, words[1:]) if a[:2] == b[:2])
    return same / (len(words) - 1)


# ---------------------------------- Tests ----------------------------------
class TestWordGenerators(unittest.TestCase):
    def test_vocabulary_loaded(self):
        self.assertGreater(len(WORDS_BROAD), 100)
        self.assertTrue(all(w.isalpha() and w == w.lower() for w in WORDS_BROAD))
        self.assertTrue(set(WORDS_COMMON) <= set(WORDS_BROAD))

    def test_random_words_length_and_reproducibility(self):
        a = generate_random_words(500, seed=999)
        b = generate_random_words(500, seed=999)
        c = generate_random_words(500, seed=1000)
        self.assertEqual(len(a), 500)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_random_words_unique(self):
        words = generate_random_words(50, seed=42, unique=True)
        self.assertEqual(len(set(words)), 50)

    def test_random_words_invalid(self):
        with self.assertRaises(ValueError):
            generate_random_words(0)
        with self.assertRaises(ValueError):
            generate_random_words(len(WORDS_COMMON) + 1, unique=True)

    def test_prefix_freq_clusters(self):
        low = gen_words_with_prefix_freq(5_000, prefix_freq=0.0, seed=123)
        high = gen_words_with_prefix_freq(5_000, prefix_freq=0.8, seed=123)
        self.assertEqual(len(low), 5_000)
        self.assertEqual(len(high), 5_000)
        self.assertGreater(neighbor_same_prefix_ratio(high),
                           neighbor_same_prefix_ratio(low) + 0.15)

    def test_prefix_freq_unique(self):
        words = gen_words_with_prefix_freq(100, prefix_freq=0.5, seed=9, unique=True)
        self.assertEqual(len(words), 100)
        self.assertEqual(len(set(words)), 100)

    def test_prefix_freq_invalid(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.5)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(len(WORDS_BROAD) + 1, unique=True)

    def test_sample_prefixes(self):
        words = ["apple", "banana", "kiwi", "fig"]
        out = sample_prefixes(words, 200, min_len=1, max_len=3, seed=5)
        self.assertEqual(len(out), 200)
        for p in out:
            self.assertTrue(1 <= len(p) <= 3)
            self.assertTrue(any(w.startswith(p) for w in words), p)
        self.assertEqual(out, sample_prefixes(words, 200, min_len=1, max_len=3, seed=5))

    def test_sample_prefixes_invalid(self):
        with self.assertRaises(ValueError):
            sample_prefixes(["a"], 0)
        with self.assertRaises(ValueError):
            sample_prefixes(["a"], 1, min_len=3, max_len=2)
        with self.assertRaises(ValueError):
            sample_prefixes(["", ""], 1)


class TestNetGenerator(unittest.TestCase):
    def test_config_validation(self):
        with self.assertRaises(ValueError):
            NetConfig(https_share=1.5)
        with self.assertRaises(ValueError):
            NetConfig(private_weights={'a': 1.0})
        with self.assertRaises(ValueError):
            NetConfig(private_weights={'a': 0, 'b': 0, 'c': 0})
        with self.assertRaises(ValueError):
            NetConfig(max_depth=-1)

    def test_urls_are_parseable(self):
        urls = NetGenerator(NetConfig(seed=3)).urls(200)
        self.assertEqual(len(urls), 200)
        for u in urls:
            parsed = urlparse(u)
            self.assertIn(parsed.scheme, ("http", "https"))
            self.assertTrue(parsed.netloc)
            self.assertTrue(parsed.path.startswith("/"))

    def test_ips_are_ipv4(self):
        ips = NetGenerator(NetConfig(seed=3, public_share=0.5)).ips(200)
        for ip in ips:
            self.assertEqual(ipaddress.ip_address(ip).version, 4)

    def test_seed_reproducibility(self):
        a = NetGenerator(NetConfig(seed=11)).urls(50)
        b = NetGenerator(NetConfig(seed=11)).urls(50)
        self.assertEqual(a, b)

    def test_non_positive_batch_raises(self):
        gen = NetGenerator(NetConfig(seed=1))
        with self.assertRaises(ValueError):
            gen.urls(0)
        with self.assertRaises(ValueError):
            gen.ips(-1)


class TestWorkLoad(unittest.TestCase):
    def test_facade(self):
        wl = WorkLoad(seed=1)
        self.assertEqual(len(wl.words(100)), 100)
        self.assertEqual(len(wl.words(100, p_freq=0.5)), 100)
        self.assertEqual(len(wl.urls(10)), 10)
        self.assertEqual(len(wl.ips(10)), 10)
        prefixes = wl.prefixes(["hello", "world"], 5)
        self.assertEqual(len(prefixes), 5)


class TestBench(unittest.TestCase):
    def test_build_tree(self):
        words = ["car", "cart", "card", "car"]
        tree, seconds = build_tree(words)
        self.assertEqual(len(tree), 3)
        self.assertGreaterEqual(seconds, 0.0)

    def test_time_autocomplete_frame(self):
        tree, _ = build_tree(WorkLoad(seed=4).words(300))
        prefixes = ["a", "b", "co", "zzz"]
        df = time_autocomplete(tree, prefixes, limit=5, repeats=3)
        self.assertEqual(list(df.columns), COLUMNS)
        self.assertEqual(len(df), 12)
        self.assertEqual(list(df["pass"][:4]), ["cold"] * 4)
        self.assertEqual(set(df["pass"][4:]), {"warm"})
        for p, n in zip(df["prefix"], df["results"]):
            self.assertEqual(n, len(tree.autocomplete(p, 5)))
        self.assertTrue((df["seconds"] >= 0).all())

    def test_summarize(self):
        tree, _ = build_tree(["car", "cart", "dog"])
        df = time_autocomplete(tree, ["c", "d"], repeats=2)
        summary = summarize(df)
        self.assertEqual(list(summary["pass"]), ["cold", "warm"])
        self.assertEqual(list(summary["queries"]), [2, 2])
        for col in ("mean_us", "median_us", "p95_us"):
            self.assertIn(col, summary.columns)

    def test_repeats_must_be_positive(self):
        tree, _ = build_tree(["a"])
        with self.assertRaises(ValueError):
            time_autocomplete(tree, ["a"], repeats=0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
