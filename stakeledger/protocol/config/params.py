# MIT License
# Copyright (c) 2025 Hashborn

import os
from typing import Dict, Optional

# Global Constants
DIFFICULTY_PREFIX = "0"
INITIAL_TOKENS = 20
RACK_PRICE = 10
DEFAULT_MINER = "Camper"   # Producer when the chain has no accounts

NETWORK_ENV = "STAKELEDGER_NETWORK"

class LedgerConfig:
    def __init__(self,
                 network_id: str,
                 difficulty_prefix: str = DIFFICULTY_PREFIX,
                 initial_tokens: int = INITIAL_TOKENS,
                 default_miner: str = DEFAULT_MINER,
                 # Nonce search hardening
                 max_nonce_attempts: Optional[int] = 1_000_000,  # None = unbounded
                 progress_interval: int = 100_000,
                 mining_timeout_sec: Optional[float] = 30.0):
        # Each extra "0" multiplies expected work by 256 (binary text is not padded)
        if not difficulty_prefix or set(difficulty_prefix) != {"0"}:
            raise ValueError(f"Difficulty prefix must be a run of '0' characters, got {difficulty_prefix!r}")
        if max_nonce_attempts is not None and max_nonce_attempts <= 0:
            raise ValueError("max_nonce_attempts must be positive")
        if progress_interval <= 0:
            raise ValueError("progress_interval must be positive")

        self.network_id = network_id
        self.difficulty_prefix = difficulty_prefix
        self.initial_tokens = initial_tokens
        self.default_miner = default_miner
        self.max_nonce_attempts = max_nonce_attempts
        self.progress_interval = progress_interval
        self.mining_timeout_sec = mining_timeout_sec

    def __repr__(self) -> str:
        return f"LedgerConfig(network_id={self.network_id!r}, difficulty_prefix={self.difficulty_prefix!r})"

NETWORKS: Dict[str, LedgerConfig] = {
    "devnet": LedgerConfig(
        network_id="devnet",
        difficulty_prefix="0",
        max_nonce_attempts=1_000_000,
        progress_interval=100_000,
        mining_timeout_sec=30.0,
    ),
    "testnet": LedgerConfig(
        network_id="testnet",
        difficulty_prefix="00",   # ~65k attempts on average
        max_nonce_attempts=50_000_000,
        progress_interval=100_000,
        mining_timeout_sec=300.0,
    ),
}

# Default to devnet for now
CURRENT_NETWORK = NETWORKS["devnet"]

def get_network(name: Optional[str] = None) -> LedgerConfig:
    """Returns the preset named `name`, or the one selected by STAKELEDGER_NETWORK."""
    name = name or os.environ.get(NETWORK_ENV) or CURRENT_NETWORK.network_id
    try:
        return NETWORKS[name]
    except KeyError:
        raise ValueError(f"Unknown network '{name}'. Available: {', '.join(sorted(NETWORKS))}")
