# -*- coding: utf-8 -*-
"""
Aggregate Functions - Totals, bounds and distribution statistics.

The bounds of a balanced distribution are derived from the total item
count: every bin must end up holding either floor(total/n) or
ceil(total/n) items.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Hashable, List, Mapping, Optional, Sequence, Sized

import numpy as np

from .records import BinCount

logger = logging.getLogger(__name__)


def total_items(records: Sequence[BinCount]) -> int:
    """Sum of all counts; 0 for an empty record set."""
    return sum(record.count for record in records)


def low_per_bin(records: Sequence[BinCount]) -> int:
    """Minimum number of items per bin once the distribution is equal."""
    return total_items(records) // len(records)


def high_per_bin(records: Sequence[BinCount]) -> int:
    """Maximum number of items per bin once the distribution is equal."""
    return -(-total_items(records) // len(records))


def is_balanced(records: Sequence[BinCount]) -> bool:
    """True when every bin holds exactly low or high items."""
    if not records:
        return True
    low = low_per_bin(records)
    high = high_per_bin(records)
    return all(record.count in (low, high) for record in records)


@dataclass
class BinDistributionSummary:
    """Summary of how items are spread over the bins."""
    total_items: int
    bin_count: int
    low: int
    high: int
    mean: float
    std_dev: float
    min_count: int
    max_count: int
    imbalance_ratio: float
    out_of_bounds: List[Hashable] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        return not self.out_of_bounds


def summarize_bins(records: Sequence[BinCount]) -> BinDistributionSummary:
    """
    Calculate distribution statistics for a record set.

    Args:
        records: Bin count records

    Returns:
        Distribution summary
    """
    if not records:
        return BinDistributionSummary(
            total_items=0,
            bin_count=0,
            low=0,
            high=0,
            mean=0.0,
            std_dev=0.0,
            min_count=0,
            max_count=0,
            imbalance_ratio=0.0,
        )

    counts = np.array([record.count for record in records], dtype=np.int64)
    low = low_per_bin(records)
    high = high_per_bin(records)

    mean = float(np.mean(counts))
    min_count = int(np.min(counts))
    max_count = int(np.max(counts))

    # How far the extremes are apart relative to the average
    imbalance = (max_count - min_count) / mean if mean > 0 else 0.0

    return BinDistributionSummary(
        total_items=int(np.sum(counts)),
        bin_count=len(records),
        low=low,
        high=high,
        mean=mean,
        std_dev=float(np.std(counts)),
        min_count=min_count,
        max_count=max_count,
        imbalance_ratio=float(imbalance),
        out_of_bounds=[r.identifier for r in records if r.count < low or r.count > high],
    )


def _ordered_keys(bins: Mapping[Hashable, Sized]) -> List[Hashable]:
    try:
        return sorted(bins)
    except TypeError:
        return list(bins)


def dump_bins(
    bins: Mapping[Hashable, Sized],
    dumper: Optional[Callable[[str], None]] = None
) -> None:
    """
    Write a summary line and the item count of every bin.

    Args:
        bins: Mapping of bin identifier -> collection of items
        dumper: Receives each formatted line (defaults to logger.info)
    """
    dumper = dumper or logger.info
    keys = _ordered_keys(bins)
    total = sum(len(items) for items in bins.values())
    average = total / len(bins) if bins else 0.0

    dumper(
        f"Bins: {len(bins)}, Keys: {', '.join(str(k) for k in keys)}, "
        f"Total Items in bins: {total}, Average: {average}"
    )
    for key in keys:
        dumper(f"Bin {key}: {len(bins[key])} items")
