"""
Pipeline Integration Tests

Tests that recording, parser, filter and output work together.

Test Design Techniques Used:
    - Use case testing (replay a recording, retune mid-stream)
    - Error guessing (corrupt samples inside a recording, unknown preset)

Run: pytest tests/integration/test_pipeline.py -v
"""

import copy
import io
import math
import pytest

from src.filter.one_euro import FilterParameters, OneEuroFilter
from src.shared.types import PointerSample
from src.utils.config import DEFAULT_CONFIG


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def config():
    """Default configuration (fresh copy)."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def stabilizer(config):
    """Create a PointerStabilizer with default config, set up."""
    from src.main import PointerStabilizer
    s = PointerStabilizer(config)
    s.setup()
    return s


def make_samples(count=30, rate_hz=60.0):
    """Pointer moving right with a small alternating jitter."""
    return [
        PointerSample(100.0 + i * 2.0 + (1.0 if i % 2 else -1.0), 200.0, i / rate_hz)
        for i in range(count)
    ]


# =============================================================================
# SETUP TESTS
# =============================================================================

class TestSetup:
    """Tests for building the filter from config."""

    def test_preset_from_config(self, stabilizer):
        """Test default config builds a balanced filter at 60 Hz."""
        assert stabilizer.filter.parameters == FilterParameters(60.0, 2.0, 0.3, 2.0)

    def test_slider_overrides_preset(self, config):
        """Test a slider position wins over the preset name."""
        from src.main import PointerStabilizer
        config["filter"]["preset"] = "aggressive"
        config["filter"]["slider_position"] = 0.0
        s = PointerStabilizer(config)
        s.setup()
        assert s.filter.parameters.min_cutoff == pytest.approx(1.0)

    def test_frequency_from_config(self, config):
        """Test configured frequency reaches the filter."""
        from src.main import PointerStabilizer
        config["filter"]["frequency"] = 125
        s = PointerStabilizer(config)
        s.setup()
        assert s.filter.parameters.frequency == 125.0

    def test_unknown_preset_raises(self, config):
        """Test setup rejects an unknown preset name."""
        from src.main import PointerStabilizer
        config["filter"]["preset"] = "turbo"
        with pytest.raises(ValueError):
            PointerStabilizer(config).setup()

    def test_null_preset_in_settings_raises(self, tmp_path):
        """Test `preset: null` in a settings file is rejected as an unknown preset."""
        from src.main import PointerStabilizer
        from src.utils.config import load_config
        path = tmp_path / 'settings.yaml'
        path.write_text("filter:\n  preset: null\n")
        with pytest.raises(ValueError, match="Unknown preset"):
            PointerStabilizer(load_config(str(path))).setup()


# =============================================================================
# PROCESSING TESTS
# =============================================================================

class TestProcess:
    """Tests for process() and live retuning."""

    def test_process_matches_filter(self, stabilizer):
        """Test the pipeline output equals a bare filter fed the same samples."""
        reference = OneEuroFilter(FilterParameters(60.0, 2.0, 0.3, 2.0))
        for sample in make_samples(10):
            point = stabilizer.process(sample)
            assert (point.x, point.y) == reference.update(sample.x, sample.y, sample.timestamp)
            assert point.timestamp == sample.timestamp

    def test_apply_preset_by_name(self, stabilizer):
        """Test retuning with a config-style name."""
        stabilizer.apply_preset("fineControl")
        assert stabilizer.filter.parameters.min_cutoff == 1.0

    def test_apply_slider_position(self, stabilizer):
        """Test retuning with a slider position."""
        stabilizer.apply_slider_position(1.0)
        assert stabilizer.filter.parameters.min_cutoff == pytest.approx(3.0)

    def test_retune_keeps_state(self, stabilizer):
        """Test retuning mid-stream keeps the running state."""
        for sample in make_samples(5):
            stabilizer.process(sample)
        before = stabilizer.filter.state
        stabilizer.apply_preset("aggressive")
        assert stabilizer.filter.state == before

    def test_latency_recorded(self, stabilizer):
        """Test each processed sample adds a latency measurement."""
        for sample in make_samples(4):
            stabilizer.process(sample)
        stats = stabilizer.latency_stats
        assert stats['samples'] == 4
        assert stats['max_ms'] >= stats['avg_ms'] >= 0.0

    def test_latency_window_bounded(self, config):
        """Test the latency window keeps only the newest samples."""
        from src.main import PointerStabilizer
        config["pipeline"]["max_latency_samples"] = 3
        s = PointerStabilizer(config)
        s.setup()
        for sample in make_samples(10):
            s.process(sample)
        assert s.latency_stats['samples'] == 3

    def test_empty_latency_stats(self, stabilizer):
        """Test stats before any sample."""
        assert stabilizer.latency_stats['samples'] == 0


# =============================================================================
# RECORDING REPLAY TESTS
# =============================================================================

class TestRun:
    """Tests for run() over a recording file."""

    def test_run_writes_csv(self, stabilizer, make_recording):
        """Test every sample produces one CSV row."""
        samples = make_samples(30)
        path = make_recording(samples)
        out = io.StringIO()

        points = stabilizer.run(path, out)

        rows = out.getvalue().splitlines()
        assert len(points) == 30
        assert len(rows) == 30
        x, y, t = (float(v) for v in rows[-1].split(','))
        assert x == pytest.approx(points[-1].x, abs=1e-6)
        assert y == pytest.approx(points[-1].y, abs=1e-6)
        assert t == pytest.approx(samples[-1].timestamp, abs=1e-6)

    def test_run_outputs_finite(self, stabilizer, make_recording):
        """Test the filtered path is finite."""
        points = stabilizer.run(make_recording(make_samples(120)))
        assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in points)

    def test_run_follows_pointer(self, stabilizer, make_recording):
        """Test the filtered path ends near the raw path."""
        samples = make_samples(120)
        points = stabilizer.run(make_recording(samples))
        assert points[-1].x == pytest.approx(samples[-1].x, abs=5.0)
        assert points[-1].y == pytest.approx(200.0, abs=1.0)

    def test_run_skips_corrupt_samples(self, stabilizer, make_recording):
        """Test NaN samples inside a recording are dropped."""
        samples = make_samples(10)
        samples[4] = PointerSample(math.nan, 200.0, samples[4].timestamp)
        points = stabilizer.run(make_recording(samples))
        assert len(points) == 9
        assert stabilizer.parser.stats['invalid_samples'] == 1

    def test_run_without_setup(self, config, make_recording):
        """Test run() sets up on demand."""
        from src.main import PointerStabilizer
        s = PointerStabilizer(config)
        assert len(s.run(make_recording(make_samples(5)))) == 5

    def test_process_without_setup(self, config):
        """Test process() sets up on demand."""
        from src.main import PointerStabilizer
        s = PointerStabilizer(config)
        point = s.process(PointerSample(0.0, 0.0, 0.0))
        assert (point.x, point.y) == (0.0, 0.0)
        assert s.filter.parameters == FilterParameters(60.0, 2.0, 0.3, 2.0)

    def test_apply_preset_without_setup(self, config):
        """Test apply_preset() sets up on demand, then retunes."""
        from src.main import PointerStabilizer
        s = PointerStabilizer(config)
        s.apply_preset("aggressive")
        assert s.filter.parameters == FilterParameters(60.0, 3.0, 0.5, 3.0)

    def test_apply_slider_without_setup(self, config):
        """Test apply_slider_position() sets up on demand, then retunes."""
        from src.main import PointerStabilizer
        s = PointerStabilizer(config)
        s.apply_slider_position(0.0)
        assert s.filter.parameters.min_cutoff == pytest.approx(1.0)


# =============================================================================
# CLI TESTS
# =============================================================================

class TestMain:
    """Tests for the command line entry point."""

    def test_cli_writes_output_file(self, make_recording, tmp_path):
        """Test --input/--output/--preset end to end."""
        from src.main import main
        path = make_recording(make_samples(20))
        out = tmp_path / 'out.csv'
        main(['--input', path, '--output', str(out), '--preset', 'fine_control'])
        assert len(out.read_text().splitlines()) == 20

    def test_cli_slider_and_preset_exclusive(self, make_recording):
        """Test --preset and --slider cannot be combined."""
        from src.main import main
        path = make_recording(make_samples(2))
        with pytest.raises(SystemExit):
            main(['--input', path, '--preset', 'balanced', '--slider', '0.5'])

    def test_cli_stdout(self, make_recording, capsys):
        """Test rows go to stdout when no output file is given."""
        from src.main import main
        path = make_recording(make_samples(6))
        main(['--input', path, '--slider', '0.5'])
        assert len(capsys.readouterr().out.splitlines()) == 6
