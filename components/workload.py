#!/usr/bin/env python3
from components.work_loads.word_generator import (
  generate_random_words, gen_words_with_prefix_freq, sample_prefixes)
from components.work_loads.net_generator import NetConfig, NetGenerator


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        else:
            return generate_random_words(num_words, self.seed, unique)

    def urls(self, num_urls):
        return NetGenerator(NetConfig(seed=self.seed)).urls(num_urls)

    def ips(self, num_ips):
        return NetGenerator(NetConfig(seed=self.seed)).ips(num_ips)

    def prefixes(self, words, num_prefixes, min_len=1, max_len=4):
        return sample_prefixes(words, num_prefixes, min_len, max_len, self.seed)
