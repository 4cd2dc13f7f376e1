"""
Synthetic Tremor Recording

Writes a pointer recording with a slow sweep plus hand tremor and sensor
jitter, for replaying through the stabilizer without an input hook.

Usage:
    python tools/tremor_synth.py --output recordings/tremor.bin
    python tools/tremor_synth.py --output tremor.bin --tremor-hz 6 --amplitude 4 --duration 10
"""

import argparse
import math
import os
import random
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.input.recording import write_recording
from src.shared.types import PointerSample


def synthesize(duration: float = 5.0, rate_hz: float = 60.0, tremor_hz: float = 8.0,
               amplitude: float = 3.0, jitter: float = 0.5, seed: int = 0) -> list:
    """Generate samples: a diagonal sweep from (100, 100) to (500, 300) plus tremor."""
    rng = random.Random(seed)
    count = int(duration * rate_hz)
    samples = []

    for i in range(count):
        t = i / rate_hz
        progress = t / duration
        base_x = 100.0 + 400.0 * progress
        base_y = 100.0 + 200.0 * progress

        tremor = amplitude * math.sin(2.0 * math.pi * tremor_hz * t)
        x = base_x + tremor + rng.gauss(0.0, jitter)
        y = base_y + 0.6 * tremor + rng.gauss(0.0, jitter)
        samples.append(PointerSample(x, y, t))

    return samples


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a synthetic tremor recording")
    parser.add_argument("--output", "-o", default="tremor_recording.bin", help="Output file")
    parser.add_argument("--duration", "-d", type=float, default=5.0, help="Duration (seconds)")
    parser.add_argument("--rate", "-r", type=float, default=60.0, help="Sample rate (Hz)")
    parser.add_argument("--tremor-hz", type=float, default=8.0, help="Tremor frequency (Hz)")
    parser.add_argument("--amplitude", "-a", type=float, default=3.0, help="Tremor amplitude (points)")
    parser.add_argument("--jitter", "-j", type=float, default=0.5, help="Jitter std dev (points)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    samples = synthesize(args.duration, args.rate, args.tremor_hz,
                         args.amplitude, args.jitter, args.seed)
    count = write_recording(args.output, samples)
    print(f"Saved {count} samples to {args.output}")
