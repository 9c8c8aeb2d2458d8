# -*- coding: utf-8 -*-
"""
In-Memory Distribution - Equalizes items held in in-memory bins.

Combines the assignment phase with the rebalancer, using a transfer
operation that physically moves items between the bin collections.
Suited to data that is already loaded; for data living in a database use
rebalance() with a transfer that updates the store directly.
"""

import logging
from typing import Any, Callable, Hashable, Iterable, List, Optional, Tuple

from .aggregates import dump_bins
from .assignment import Bins, PlacementPolicy, assign_missing
from .bin_storage import Equality, insert_item, take_item
from .config import DistributionConfig, get_config
from .rebalancer import BinRebalancer
from .records import records_from_bins

logger = logging.getLogger(__name__)


async def distribute_items_equally(
    items: Iterable[Any],
    bin_selector: Callable[[Any], Hashable],
    bins: Bins,
    equality: Optional[Equality] = None,
    placement: Optional[PlacementPolicy] = None,
    config: Optional[DistributionConfig] = None
) -> List[Tuple[Any, Hashable]]:
    """
    Place all items into bins and spread them equally.

    1.) items not held by any bin are added (see assign_missing)
    2.) items are moved between bins until every bin holds low or high items

    Afterwards some items sit in a bin that does not match the identifier
    their selector returns; those are reported so the caller can persist
    the new identifier.

    Args:
        items: Source of items
        bin_selector: Returns the bin identifier an item currently claims
        bins: Mapping of bin identifier -> mutable collection (may be preloaded)
        equality: Item comparison for duplicate detection (defaults to ==)
        placement: Policy for items whose identifier matches no bin
        config: Distribution configuration

    Returns:
        (item, new_identifier) for every item whose bin differs from its
        selector value, one entry per placement; items left in such a bin
        by an earlier run are reported again until the caller persists them
    """
    config = config or get_config()

    if config.log_bins:
        dump_bins(bins)

    # Phase 1: add the items not assigned to any bin
    assign_missing(items, bin_selector, bins, equality=equality, placement=placement)

    def transfer(count: int, source: Hashable, target: Hashable) -> int:
        source_bin = bins[source]
        target_bin = bins[target]
        moved = 0
        for _ in range(count):
            if len(source_bin) == 0:
                break
            insert_item(target_bin, take_item(source_bin))
            moved += 1
        return moved

    # Phase 2: equally distribute items
    rebalancer = BinRebalancer(config)
    await rebalancer.rebalance(records_from_bins(bins), transfer)

    if config.log_bins:
        dump_bins(bins)

    # one entry per placement, so a bin holding the same object twice reports it twice
    changed = [
        (item, key)
        for key, held in bins.items()
        for item in held
        if bin_selector(item) != key
    ]
    logger.info(f"{len(changed)} items must take the identifier of their new bin")
    return changed
