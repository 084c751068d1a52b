# MIT License
# Copyright (c) 2025 Hashborn

"""
Stake-weighted selection of the next block producer and its validators.

Candidates are sorted by ascending weight and laid out as a cumulative
distribution; one uniform draw r in [0, 1) picks the first candidate whose
cumulative share exceeds r.
"""

import random
from typing import Callable, List, Optional, Sequence, Tuple
from ...protocol.types.account import Account
from ...protocol.config.params import DEFAULT_MINER

RandomSource = Callable[[], float]
Distribution = List[Tuple[str, float]]   # (address, cumulative share), ascending

class StakeSelector:
    def __init__(self, rng: Optional[RandomSource] = None, default_address: str = DEFAULT_MINER):
        """
        Args:
            rng: Source of uniform floats in [0, 1). Inject a seeded one for
                 reproducible selections.
            default_address: Returned when there are no candidates.
        """
        self.rng = rng or random.random
        self.default_address = default_address

    @staticmethod
    def build_distribution(accounts: Sequence[Account],
                           weight: Callable[[Account], int] = Account.weight_as_miner) -> Distribution:
        """
        Cumulative distribution over `accounts`.

        When the total weight is 0 every candidate gets the same share, so
        the scan degrades to a uniform choice instead of dividing by zero.
        """
        ordered = sorted(accounts, key=lambda a: (weight(a), a.address))
        if not ordered:
            return []

        total = sum(weight(a) for a in ordered)
        n = len(ordered)
        if total == 0:
            return [(a.address, (i + 1) / n) for i, a in enumerate(ordered)]

        distribution = []
        running = 0
        for a in ordered:
            running += weight(a)
            distribution.append((a.address, running / total))
        return distribution

    def pick(self, distribution: Distribution) -> str:
        if not distribution:
            return self.default_address

        r = self.rng()
        for address, share in distribution:
            if share > r:
                return address
        # Rounding left the last share just below r: take the heaviest
        return distribution[-1][0]

    def select_miner(self, accounts: Sequence[Account]) -> str:
        return self.pick(self.build_distribution(accounts, Account.weight_as_miner))

    @staticmethod
    def validator_count(accounts: Sequence[Account], next_miner: str, network_size: int) -> int:
        """
        A heavily staked producer needs fewer corroborating validators.

        raw = max stake - producer stake; capped at the network size,
        otherwise raw + 1.
        """
        next_miner_staked = next((a.staked for a in accounts if a.address == next_miner), 0)
        max_staked = max((a.staked for a in accounts), default=0)
        raw = max_staked - next_miner_staked
        if raw > network_size:
            return network_size
        return raw + 1

    def select_validators(self, accounts: Sequence[Account], next_miner: str, network: Sequence[str]) -> List[str]:
        """Independent draws with replacement; duplicates are expected."""
        count = self.validator_count(accounts, next_miner, len(network))
        distribution = self.build_distribution(accounts, Account.weight_as_validator)
        return [self.pick(distribution) for _ in range(count)]
