"""
Pytest Configuration - Shared Fixtures

This file contains shared fixtures used across all test modules.
"""

import pytest
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def default_parameters():
    """Baseline filter parameters (60 Hz, fine control)."""
    from src.filter.one_euro import FilterParameters
    return FilterParameters(frequency=60.0, min_cutoff=1.0, beta=0.1, derivative_cutoff=1.0)


@pytest.fixture
def make_recording(tmp_path):
    """Factory: write PointerSamples to a recording file and return its path."""
    from src.input.recording import write_recording

    def _make(samples, name='recording.bin'):
        path = str(tmp_path / name)
        write_recording(path, samples)
        return path

    return _make
