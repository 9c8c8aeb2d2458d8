# -*- coding: utf-8 -*-
"""
Equal Distribution - Spread discrete items equally across named bins.

After rebalancing every bin holds either floor(total/n) or ceil(total/n)
items. The rebalancer only sees counts and delegates the actual moves to a
caller-supplied transfer operation, so the items may live in memory, in a
database or behind an API.
"""

from .aggregates import (
    BinDistributionSummary,
    dump_bins,
    high_per_bin,
    is_balanced,
    low_per_bin,
    summarize_bins,
    total_items,
)
from .assignment import assign_missing, least_populated_bin
from .config import DistributionConfig, get_config, reset_config
from .exceptions import (
    DuplicateBinError,
    EmptyBinSetError,
    EqualDistributionError,
    InconsistentBinStateError,
    TransferContractError,
    TransferTimeoutError,
    UnknownBinError,
)
from .in_memory import distribute_items_equally
from .rebalancer import BinRebalancer, RebalanceReport, rebalance, rebalance_sync
from .records import BinCount, TransferRecord, records_from_bins, records_from_counts

__all__ = [
    "BinCount",
    "TransferRecord",
    "records_from_bins",
    "records_from_counts",
    "total_items",
    "low_per_bin",
    "high_per_bin",
    "is_balanced",
    "summarize_bins",
    "BinDistributionSummary",
    "dump_bins",
    "assign_missing",
    "least_populated_bin",
    "BinRebalancer",
    "RebalanceReport",
    "rebalance",
    "rebalance_sync",
    "distribute_items_equally",
    "DistributionConfig",
    "get_config",
    "reset_config",
    "EqualDistributionError",
    "EmptyBinSetError",
    "DuplicateBinError",
    "UnknownBinError",
    "InconsistentBinStateError",
    "TransferContractError",
    "TransferTimeoutError",
]
