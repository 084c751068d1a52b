# MIT License
# Copyright (c) 2025 Hashborn

"""
Prometheus Metrics Exporter

Metrics:
- Chain height, sealed blocks
- Nonce search effort (attempts, duration, aborts)
- Transaction outcomes per event kind, rejected batches
- Block validation results
"""

from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry

# Create registry for metrics
metrics_registry = CollectorRegistry()

# ═══════════════════════════════════════════════════════════════════
# CHAIN METRICS
# ═══════════════════════════════════════════════════════════════════

chain_height = Gauge(
    'stakeledger_chain_height',
    'Id of the last sealed block',
    registry=metrics_registry
)

blocks_sealed_total = Counter(
    'stakeledger_blocks_sealed_total',
    'Total number of blocks sealed',
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# MINING METRICS
# ═══════════════════════════════════════════════════════════════════

nonce_attempts_total = Counter(
    'stakeledger_nonce_attempts_total',
    'Total number of nonces tried',
    registry=metrics_registry
)

mining_duration_seconds = Histogram(
    'stakeledger_mining_duration_seconds',
    'Wall time of a successful nonce search',
    buckets=[0.001, 0.01, 0.1, 0.5, 1, 5, 30, 120],
    registry=metrics_registry
)

mining_aborted_total = Counter(
    'stakeledger_mining_aborted_total',
    'Nonce searches stopped before a block was sealed',
    ['reason'],
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# TRANSACTION METRICS
# ═══════════════════════════════════════════════════════════════════

transactions_total = Counter(
    'stakeledger_transactions_total',
    'Transactions processed, by event kind and outcome',
    ['event', 'status'],
    registry=metrics_registry
)

batches_rejected_total = Counter(
    'stakeledger_batches_rejected_total',
    'Batches rejected without changing the chain',
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# VALIDATION METRICS
# ═══════════════════════════════════════════════════════════════════

validations_total = Counter(
    'stakeledger_validations_total',
    'Adjacent-block validations, by result',
    ['result'],
    registry=metrics_registry
)


def update_block_metrics(block, attempts: int, duration: float):
    """
    Update block-related metrics after a block is sealed.

    Args:
        block: The sealed Block
        attempts: Nonces tried to seal it
        duration: Seconds spent in the nonce search
    """
    blocks_sealed_total.inc()
    chain_height.set(block.id)
    nonce_attempts_total.inc(attempts)
    mining_duration_seconds.observe(duration)
