# -*- coding: utf-8 -*-
"""
Equal distribution configuration.

Every setting can be overridden through an environment variable:

- EQDIST_TRANSFER_TIMEOUT_SEC: per-transfer timeout in seconds (unset = no timeout)
- EQDIST_LOG_BINS: dump bin state before and after in-memory distribution
- EQDIST_LOG_LEVEL: default logging level of the command line
"""
import os
from dataclasses import dataclass, field
from typing import Optional


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    timeout = float(value)
    return timeout if timeout > 0 else None


@dataclass
class DistributionConfig:
    """Runtime settings for rebalancing runs"""
    transfer_timeout_sec: Optional[float] = field(
        default_factory=lambda: _parse_timeout(os.getenv("EQDIST_TRANSFER_TIMEOUT_SEC"))
    )
    log_bins: bool = field(
        default_factory=lambda: os.getenv("EQDIST_LOG_BINS", "false").lower() == "true"
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("EQDIST_LOG_LEVEL", "INFO").upper()
    )

    def __post_init__(self):
        if self.transfer_timeout_sec is not None and self.transfer_timeout_sec <= 0:
            self.transfer_timeout_sec = None


_config: Optional[DistributionConfig] = None


def get_config() -> DistributionConfig:
    """Return the process-wide configuration, reading the environment once."""
    global _config
    if _config is None:
        _config = DistributionConfig()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (used by tests)."""
    global _config
    _config = None
