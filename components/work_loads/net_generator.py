import random
from typing import Dict, Optional
from dataclasses import dataclass
from faker import Faker

from components.work_loads.word_generator import WORDS_COMMON

## === Config Class === ##

@dataclass
class NetConfig:
    """
    Configuration for NetGenerator
        https_share: float, proportion of https URLs
        max_depth: int, maximum number of path segments in a URL
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        seed: int, seed for random number generator
    """
    https_share: float = 0.88
    max_depth: int = 4
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("https_share", "public_share"):
            share = getattr(self, name)
            if share < 0 or share > 1:
                raise ValueError(f"{name} must be between 0 and 1")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
        else:
            missing = [k for k in ('a', 'b', 'c') if k not in self.private_weights]
            if missing:
                raise ValueError(f"private_weights missing keys: {missing}")
            if any(self.private_weights[k] < 0 for k in ('a', 'b', 'c')):
                raise ValueError("private_weights must be non-negative")
            if sum(self.private_weights[k] for k in ('a', 'b', 'c')) == 0:
                raise ValueError("Sum of private_weights must be > 0")
            self.private_weights = {cls: self.private_weights[cls] for cls in ('a', 'b', 'c')}


class NetGenerator:
    """URLs and IPv4 addresses: string sets with long shared prefixes."""

    def __init__(self, config: NetConfig = None):
        self.config = config or NetConfig()
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())
        # A small host pool keeps URL prefixes shared, as real crawls do
        self.hosts = [self.fake.domain_name() for _ in range(32)]

    def _path(self):
        depth = self.rng.randint(0, self.config.max_depth)
        segs = [self.rng.choice(WORDS_COMMON) for _ in range(depth)]
        return "/" + "/".join(segs)

    def url(self):
        scheme = "https" if self.rng.random() < self.config.https_share else "http"
        host = self.rng.choice(self.hosts)
        return f"{scheme}://{host}{self._path()}"

    def ip(self):
        if self.rng.random() > self.config.public_share:
            cls = self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]
            return self.fake.ipv4_private(address_class=cls)
        return self.fake.ipv4_public()

    def urls(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.url() for _ in range(n)]

    def ips(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.ip() for _ in range(n)]
