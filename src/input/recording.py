"""
Pointer Recordings

Binary file layout:
    '<I'   sample count
    '<ddd' x, y, timestamp   (repeated count times, 24 bytes each)
"""

import logging
import struct
from typing import Iterable, List

from src.shared.types import PointerSample

logger = logging.getLogger(__name__)

COUNT_FORMAT = '<I'
COUNT_SIZE = struct.calcsize(COUNT_FORMAT)


class RecordingError(ValueError):
    """Recording file is truncated or malformed."""


def load_recording(input_file: str) -> List[bytes]:
    """Load raw sample records from a recording file."""
    records = []

    with open(input_file, 'rb') as f:
        header = f.read(COUNT_SIZE)
        if len(header) < COUNT_SIZE:
            raise RecordingError(f"{input_file}: missing sample count header")
        count = struct.unpack(COUNT_FORMAT, header)[0]

        for i in range(count):
            data = f.read(PointerSample.SIZE)
            if len(data) < PointerSample.SIZE:
                raise RecordingError(
                    f"{input_file}: truncated at sample {i} of {count}"
                )
            records.append(data)

    logger.info(f"Loaded {len(records)} samples from {input_file}")
    return records


def write_recording(output_file: str, samples: Iterable[PointerSample]) -> int:
    """Write samples to a recording file. Returns the number written."""
    samples = list(samples)

    with open(output_file, 'wb') as f:
        f.write(struct.pack(COUNT_FORMAT, len(samples)))
        for sample in samples:
            f.write(sample.to_bytes())

    logger.info(f"Saved {len(samples)} samples to {output_file}")
    return len(samples)
