# -*- coding: utf-8 -*-
"""
Bin Rebalancer - Equalizes item counts across bins.

Works on counts only. The actual relocation of items is delegated to a
caller-supplied transfer operation:

    transfer(amount, source_id, target_id) -> number of items actually moved

which may be a plain function or return an awaitable (database update,
remote API call, ...). Transfers are issued one at a time, and every
counterpart bin is chosen from the live counts left by the previous
transfer.
"""

import asyncio
import inspect
import logging
import numbers
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Optional, Sequence, Union

from .aggregates import high_per_bin, is_balanced, low_per_bin, total_items
from .config import DistributionConfig, get_config
from .exceptions import (
    DuplicateBinError,
    EmptyBinSetError,
    InconsistentBinStateError,
    TransferContractError,
    TransferTimeoutError,
)
from .records import BinCount, TransferRecord

logger = logging.getLogger(__name__)

TransferFunc = Callable[[int, Hashable, Hashable], Union[int, Awaitable[int]]]

_count = attrgetter("count")


@dataclass
class RebalanceReport:
    """Outcome of a single rebalance run."""
    bin_count: int
    total_items: int
    low: int
    high: int
    transfers: List[TransferRecord] = field(default_factory=list)
    stalled_bins: List[Hashable] = field(default_factory=list)
    total_moved: int = 0
    balanced: bool = False

    @property
    def transfer_count(self) -> int:
        return len(self.transfers)


class BinRebalancer:
    """
    Drives a transfer operation until every bin holds low or high items.

    low and high are computed once from the initial counts. Each bin is
    visited once, in input order: an overfilled bin pushes items to the
    currently emptiest bin, an underfilled bin pulls items from the
    currently fullest bin.
    """

    def __init__(self, config: Optional[DistributionConfig] = None):
        """
        Initialize rebalancer.

        Args:
            config: Distribution configuration (defaults to the environment)
        """
        self.config = config or get_config()
        self._last_report: Optional[RebalanceReport] = None
        self._runs = 0
        self._total_moved = 0

    @property
    def last_report(self) -> Optional[RebalanceReport]:
        return self._last_report

    async def rebalance(self, bins: Sequence[BinCount], transfer: TransferFunc) -> int:
        """
        Rebalance the given records in place.

        Args:
            bins: Bin count records; mutated as transfers are applied
            transfer: Moves up to `amount` items and reports how many moved

        Returns:
            Total number of items actually moved
        """
        records = list(bins)
        self._validate(records)

        low = low_per_bin(records)
        high = high_per_bin(records)
        report = RebalanceReport(
            bin_count=len(records),
            total_items=total_items(records),
            low=low,
            high=high,
        )
        self._last_report = report
        self._runs += 1

        logger.info(
            f"Rebalancing {report.bin_count} bins holding {report.total_items} items "
            f"(low={low}, high={high})"
        )

        for record in records:
            # too many?
            while record.count > high:
                target = min(records, key=_count)
                if target is record:
                    break
                amount = min(high - target.count, record.count - low)
                if amount <= 0:
                    raise InconsistentBinStateError(record.identifier, record.count, low, high, target.identifier)

                moved = await self._move(transfer, amount, record, target, report)
                if moved <= 0:
                    self._stall(report, record)
                    break

            # too few?
            while record.count < low:
                source = max(records, key=_count)
                if source is record:
                    break
                amount = min(low - record.count, source.count - low)
                if amount <= 0:
                    raise InconsistentBinStateError(record.identifier, record.count, low, high, source.identifier)

                moved = await self._move(transfer, amount, source, record, report)
                if moved <= 0:
                    self._stall(report, record)
                    break

        report.balanced = is_balanced(records)
        self._total_moved += report.total_moved

        logger.info(
            f"Rebalance finished: {report.total_moved} items moved in "
            f"{report.transfer_count} transfers, balanced={report.balanced}"
        )
        return report.total_moved

    def _validate(self, records: List[BinCount]) -> None:
        if not records:
            raise EmptyBinSetError()

        seen = set()
        for record in records:
            if record.identifier in seen:
                raise DuplicateBinError(record.identifier)
            seen.add(record.identifier)

    async def _move(
        self,
        transfer: TransferFunc,
        amount: int,
        source: BinCount,
        target: BinCount,
        report: RebalanceReport
    ) -> int:
        """
        Request a transfer and apply the reported amount to both records.

        Returns:
            Items reported as moved (<= 0 means nothing moved)
        """
        logger.debug(f"Requesting {amount} items from {source.identifier} to {target.identifier}")

        moved = await self._call_transfer(transfer, amount, source.identifier, target.identifier)

        if isinstance(moved, bool) or not isinstance(moved, numbers.Integral):
            raise TransferContractError(amount, moved, f"Transfer must report an integer, got {moved!r}")
        moved = int(moved)
        if moved > amount:
            raise TransferContractError(amount, moved)

        if moved > 0:
            source.count -= moved
            target.count += moved
            report.total_moved += moved

        report.transfers.append(TransferRecord(
            source=source.identifier,
            target=target.identifier,
            requested=amount,
            moved=max(moved, 0),
        ))
        return moved

    async def _call_transfer(
        self,
        transfer: TransferFunc,
        amount: int,
        source: Hashable,
        target: Hashable
    ) -> Any:
        result = transfer(amount, source, target)
        if not inspect.isawaitable(result):
            return result

        timeout = self.config.transfer_timeout_sec
        if timeout is None:
            return await result

        try:
            return await asyncio.wait_for(result, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise TransferTimeoutError(source, target, timeout) from e

    def _stall(self, report: RebalanceReport, record: BinCount) -> None:
        report.stalled_bins.append(record.identifier)
        logger.warning(
            f"Transfer made no progress for bin {record.identifier} "
            f"({record.count} items, bounds {report.low}..{report.high})"
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get rebalancer statistics."""
        last = self._last_report
        return {
            "runs": self._runs,
            "total_items_moved": self._total_moved,
            "last_run": {
                "bins": last.bin_count,
                "total_items": last.total_items,
                "low": last.low,
                "high": last.high,
                "transfers": last.transfer_count,
                "items_moved": last.total_moved,
                "stalled_bins": list(last.stalled_bins),
                "balanced": last.balanced,
            } if last else None,
            "config": {
                "transfer_timeout_sec": self.config.transfer_timeout_sec,
            },
        }


async def rebalance(
    bins: Sequence[BinCount],
    transfer: TransferFunc,
    config: Optional[DistributionConfig] = None
) -> int:
    """
    Rebalance bin counts through a transfer operation.

    Args:
        bins: Bin count records; mutated as transfers are applied
        transfer: (amount, source_id, target_id) -> items actually moved
        config: Distribution configuration

    Returns:
        Total number of items actually moved
    """
    return await BinRebalancer(config).rebalance(bins, transfer)


def rebalance_sync(
    bins: Sequence[BinCount],
    transfer: TransferFunc,
    config: Optional[DistributionConfig] = None
) -> int:
    """Run rebalance() on a fresh event loop."""
    return asyncio.run(rebalance(bins, transfer, config))
