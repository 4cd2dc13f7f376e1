"""
Shared type definitions for the pointer stabilizer.
"""

import struct
from dataclasses import dataclass


@dataclass
class PointerSample:
    """
    One raw pointer sample as delivered by the input hook.

    Units:
        x, y: screen points
        timestamp: seconds
    """

    FORMAT = '<ddd'
    SIZE = struct.calcsize(FORMAT)  # 24

    x: float = 0.0
    y: float = 0.0
    timestamp: float = 0.0

    def to_bytes(self) -> bytes:
        """Pack sample into 24 bytes for a recording file."""
        return struct.pack(self.FORMAT, self.x, self.y, self.timestamp)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PointerSample':
        """Unpack sample from 24 bytes."""
        values = struct.unpack(cls.FORMAT, data[:cls.SIZE])
        return cls(*values)

    def __str__(self):
        return f"PointerSample(x={self.x:.2f}, y={self.y:.2f}, t={self.timestamp:.4f})"


@dataclass
class FilteredPoint:
    """Filtered pointer position, stamped with the source sample time."""

    x: float
    y: float
    timestamp: float

    def to_csv_row(self) -> str:
        return f"{self.x:.6f},{self.y:.6f},{self.timestamp:.6f}"

    def __str__(self):
        return f"FilteredPoint(x={self.x:.2f}, y={self.y:.2f}, t={self.timestamp:.4f})"
