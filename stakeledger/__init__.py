# MIT License
# Copyright (c) 2025 Hashborn

"""
StakeLedger

Single-node proof-of-stake ledger simulation: stake-weighted producer
selection, nonce-sealed blocks and batch transaction processing.
"""

__version__ = "0.1.0"
