# -*- coding: utf-8 -*-
"""
Bin Assignment - Places items that are not yet held by any bin.

Items whose selector value names an existing bin go into that bin; all
other items are handed to a placement policy, by default the bin that
currently holds the fewest items.
"""

import logging
from typing import Any, Callable, Collection, Hashable, Iterable, List, Mapping, Optional, Tuple

from .bin_storage import Equality, contains_item, insert_item
from .exceptions import EmptyBinSetError, UnknownBinError

logger = logging.getLogger(__name__)

Bins = Mapping[Hashable, Collection]
PlacementPolicy = Callable[[Bins, Any], Hashable]


def least_populated_bin(bins: Bins, item: Any) -> Hashable:
    """
    Default placement policy: the bin with the fewest items.

    Ties go to the first such bin in mapping order.
    """
    return min(bins, key=lambda key: len(bins[key]))


def _held_by_any_bin(bins: Bins, item: Any, equality: Optional[Equality]) -> bool:
    return any(contains_item(items, item, equality) for items in bins.values())


def assign_missing(
    items: Iterable[Any],
    bin_selector: Callable[[Any], Hashable],
    bins: Bins,
    equality: Optional[Equality] = None,
    placement: Optional[PlacementPolicy] = None
) -> List[Tuple[Any, Hashable]]:
    """
    Make sure every item is held by some bin.

    Nothing already in a bin is moved or removed; the call only adds, so
    running it again with the same items changes nothing.

    Args:
        items: Items to place
        bin_selector: Returns the bin identifier an item currently claims
        bins: Mapping of bin identifier -> mutable collection of items
        equality: Item comparison used to skip items already present
                  (defaults to ==)
        placement: Picks the bin for items whose identifier matches no bin
                   (defaults to least_populated_bin)

    Returns:
        (item, identifier) pairs for the items placed by the policy
    """
    placement = placement or least_populated_bin
    placed: List[Tuple[Any, Hashable]] = []
    matched = 0

    for item in items:
        key = bin_selector(item)

        if key in bins:
            # an item may sit in another bin while its own identifier is stale
            if contains_item(bins[key], item, equality) or _held_by_any_bin(bins, item, equality):
                continue
            insert_item(bins[key], item)
            matched += 1
            continue

        if not bins:
            raise EmptyBinSetError("No bin available to place an unassigned item")

        if _held_by_any_bin(bins, item, equality):
            continue

        target = placement(bins, item)
        if target not in bins:
            raise UnknownBinError(target)

        insert_item(bins[target], item)
        placed.append((item, target))

    logger.debug(f"Assigned {matched} items to their own bin, {len(placed)} to fallback bins")
    return placed
