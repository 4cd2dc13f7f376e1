"""
Pointer Sample Parser

Decodes 24-byte sample records (see PointerSample) and screens out values
the filter cannot use. Out-of-order timestamps are passed through with a
warning; the filter clamps them to dt = 0.
"""

import logging
import math
import struct
from typing import Optional

from src import DEBUG
from src.shared.types import PointerSample

logger = logging.getLogger(__name__)


class SampleParser:
    """Parses raw sample records into PointerSample objects."""

    RECORD_SIZE = PointerSample.SIZE

    def __init__(self):
        self._samples_parsed = 0
        self._invalid_samples = 0
        self._out_of_order = 0
        self._last_timestamp: Optional[float] = None

    def parse_sample(self, data: bytes) -> Optional[PointerSample]:
        """
        Parse one sample record.

        Returns PointerSample, or None if the record is short or holds
        non-finite values.
        """
        if len(data) < self.RECORD_SIZE:
            logger.warning(f"Sample record too short: {len(data)} < {self.RECORD_SIZE}")
            self._invalid_samples += 1
            return None

        try:
            sample = PointerSample.from_bytes(data)
        except struct.error as e:
            logger.warning(f"Failed to unpack sample: {e}")
            self._invalid_samples += 1
            return None

        if not all(math.isfinite(v) for v in (sample.x, sample.y, sample.timestamp)):
            logger.warning(f"Non-finite sample dropped: {sample}")
            self._invalid_samples += 1
            return None

        if self._last_timestamp is not None and sample.timestamp < self._last_timestamp:
            logger.warning(
                f"Timestamp went backwards: {sample.timestamp:.4f} < {self._last_timestamp:.4f}"
            )
            self._out_of_order += 1
        self._last_timestamp = sample.timestamp

        self._samples_parsed += 1
        if DEBUG:
            print(sample)
        return sample

    def reset(self):
        """Forget the previous timestamp (e.g. when a new recording starts)."""
        self._last_timestamp = None

    @property
    def stats(self) -> dict:
        """Return parsing statistics."""
        return {
            'samples_parsed': self._samples_parsed,
            'invalid_samples': self._invalid_samples,
            'out_of_order': self._out_of_order,
        }
