"""
Pointer Tremor Stabilizer - Main Entry Point

Replays a pointer recording through the One Euro Filter and writes the
filtered path as CSV. The live host (input hook, cursor output, settings UI)
drives the same PointerStabilizer class sample by sample.

Flow:
    Recording -> Sample Parser -> One Euro Filter -> CSV output

Usage:
    python -m src.main --input recordings/tremor.bin
    python -m src.main --input recordings/tremor.bin --preset aggressive --output out.csv
    python -m src.main --input recordings/tremor.bin --slider 0.25
"""

import argparse
import logging
import sys
import time
from collections import deque
from typing import List, Optional, TextIO

from src.filter.one_euro import FilterParameters, OneEuroFilter
from src.filter.presets import Preset, parameters_for_slider, preset_parameters
from src.input.recording import load_recording
from src.input.sample_parser import SampleParser
from src.shared.types import FilteredPoint, PointerSample
from src.utils.config import load_config

logger = logging.getLogger(__name__)


class PointerStabilizer:
    """
    Wires the sample parser and filter together and tracks processing latency.

    Like the filter it owns, this is meant to be driven from one thread.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config if config is not None else load_config()

        self.parser: Optional[SampleParser] = None
        self.filter: Optional[OneEuroFilter] = None

        pipeline_config = self.config.get("pipeline", {})
        self._latency_warn_ms = pipeline_config.get("latency_warn_ms", 5.0)
        self._max_latency_samples = pipeline_config.get("max_latency_samples", 1000)
        self._latency_samples = deque(maxlen=self._max_latency_samples)

    def setup(self):
        """Build the filter from config. A slider position wins over a preset."""
        filter_config = self.config["filter"]
        frequency = float(filter_config.get("frequency", 60.0))
        slider = filter_config.get("slider_position")

        if slider is not None:
            cutoffs = parameters_for_slider(float(slider))
            source = f"slider {float(slider):.2f}"
        else:
            preset = Preset.from_name(filter_config.get("preset", "balanced"))
            cutoffs = preset_parameters(preset)
            source = f"preset {preset.value}"

        self.parser = SampleParser()
        self.filter = OneEuroFilter(FilterParameters(frequency, *cutoffs))
        logger.info(f"Setup complete. {frequency:.0f} Hz, {source}: {cutoffs}")

    def process(self, sample: PointerSample) -> FilteredPoint:
        """Filter one sample."""
        if self.filter is None:
            self.setup()

        start_time = time.perf_counter()
        x, y = self.filter.update(sample.x, sample.y, sample.timestamp)
        self._record_latency((time.perf_counter() - start_time) * 1000)
        return FilteredPoint(x, y, sample.timestamp)

    def apply_preset(self, name: str):
        """Retune the live filter from a preset name."""
        if self.filter is None:
            self.setup()

        preset = Preset.from_name(name)
        self.filter.apply_preset(preset)
        logger.info(f"Switched to preset {preset.value}")

    def apply_slider_position(self, position: float):
        """Retune the live filter from a slider position in [0, 1]."""
        if self.filter is None:
            self.setup()

        self.filter.apply_slider_position(position)
        logger.info(f"Switched to slider position {position:.2f}")

    def run(self, recording_path: str, output: Optional[TextIO] = None) -> List[FilteredPoint]:
        """
        Filter every sample in a recording.

        Args:
            recording_path: Recording file (see src.input.recording)
            output: Text stream to receive "x,y,timestamp" rows, or None

        Returns:
            Filtered points, in recording order
        """
        if self.filter is None:
            self.setup()

        records = load_recording(recording_path)
        self.parser.reset()

        points = []
        for data in records:
            sample = self.parser.parse_sample(data)
            if sample is None:
                continue

            point = self.process(sample)
            points.append(point)
            if output is not None:
                output.write(point.to_csv_row() + "\n")

        logger.info(f"Filtered {len(points)} samples. Parser stats: {self.parser.stats}")
        self._log_latency_stats()
        return points

    def _record_latency(self, latency_ms: float):
        self._latency_samples.append(latency_ms)

        if latency_ms > self._latency_warn_ms:
            logger.warning(f"Slow sample: {latency_ms:.3f}ms > {self._latency_warn_ms}ms")

    @property
    def latency_stats(self) -> dict:
        samples = self._latency_samples
        if not samples:
            return {'samples': 0, 'avg_ms': 0.0, 'max_ms': 0.0, 'over_threshold_pct': 0.0}

        over = sum(1 for s in samples if s > self._latency_warn_ms)
        return {
            'samples': len(samples),
            'avg_ms': sum(samples) / len(samples),
            'max_ms': max(samples),
            'over_threshold_pct': 100.0 * over / len(samples),
        }

    def _log_latency_stats(self):
        stats = self.latency_stats
        if stats['samples'] == 0:
            return
        logger.info(
            f"Latency: {stats['avg_ms']:.4f}ms avg, {stats['max_ms']:.4f}ms max, "
            f"{stats['over_threshold_pct']:.1f}% over {self._latency_warn_ms}ms"
        )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pointer Tremor Stabilizer")
    parser.add_argument("--input", "-i", required=True, help="Input recording file")
    parser.add_argument("--output", "-o", help="Output CSV file (default: stdout)")
    parser.add_argument("--config", "-c", help="Config file (default: config/settings.yaml)")
    tuning = parser.add_mutually_exclusive_group()
    tuning.add_argument(
        "--preset", "-p",
        choices=[p.value for p in Preset],
        help="Filter preset (overrides config)"
    )
    tuning.add_argument(
        "--slider", "-s", type=float,
        help="Slider position 0.0-1.0 (overrides config)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    config = load_config(args.config)
    if args.preset:
        config["filter"]["preset"] = args.preset
        config["filter"]["slider_position"] = None
    elif args.slider is not None:
        config["filter"]["slider_position"] = args.slider

    stabilizer = PointerStabilizer(config)
    stabilizer.setup()

    if args.output:
        with open(args.output, 'w') as f:
            stabilizer.run(args.input, f)
    else:
        stabilizer.run(args.input, sys.stdout)


if __name__ == "__main__":
    main()
