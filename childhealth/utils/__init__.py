"""Utility functions."""

from childhealth.utils.time import epoch_ms, from_epoch_ms, utc_now

__all__ = ["utc_now", "epoch_ms", "from_epoch_ms"]
