# MIT License
# Copyright (c) 2025 Hashborn

"""
Observability Module

Prometheus metrics for mining, batch processing and validation.
"""

from .metrics import metrics_registry, update_block_metrics

__all__ = ['metrics_registry', 'update_block_metrics']
