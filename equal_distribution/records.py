# -*- coding: utf-8 -*-
"""
Bin count records - snapshots of per-bin item counts.

A record pairs a bin identifier with the number of items the bin holds.
Records are built right before a rebalance run, mutated in place while
transfers are applied and thrown away afterwards.
"""

from dataclasses import dataclass
from typing import Hashable, Iterable, List, Mapping, Sized, Tuple, Union


@dataclass
class BinCount:
    """Current item count of a single bin."""
    identifier: Hashable
    count: int = 0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Bin {self.identifier!r} cannot hold a negative count ({self.count})")

    def __str__(self) -> str:
        return f"{self.identifier}=>{self.count}"


@dataclass(frozen=True)
class TransferRecord:
    """One transfer request issued during a rebalance run."""
    source: Hashable
    target: Hashable
    requested: int
    moved: int

    @property
    def is_stall(self) -> bool:
        return self.moved <= 0


def records_from_bins(bins: Mapping[Hashable, Sized]) -> List[BinCount]:
    """
    Snapshot the sizes of in-memory bins.

    Args:
        bins: Mapping of bin identifier -> collection of items

    Returns:
        One record per bin, in mapping order
    """
    return [BinCount(identifier=key, count=len(items)) for key, items in bins.items()]


def records_from_counts(
    counts: Union[Mapping[Hashable, int], Iterable[Tuple[Hashable, int]]]
) -> List[BinCount]:
    """
    Build records from precomputed counts.

    Accepts either a mapping or an iterable of (identifier, count) pairs,
    such as the rows of a grouped database query.
    """
    pairs = counts.items() if isinstance(counts, Mapping) else counts
    return [BinCount(identifier=key, count=int(count)) for key, count in pairs]
