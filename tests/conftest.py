"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the treatment-network engine.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ --quick            # Skip slow statistical tests
"""

import pytest
from pathlib import Path
from typing import List

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from treatment_network.core.models import TreatmentComparison, TreatmentEffect


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Comparison Fixtures
# =============================================================================

def make_comparisons(*rows) -> List[TreatmentComparison]:
    """Build comparisons from (study_id, treatment_a, treatment_b) tuples."""
    return [TreatmentComparison(study_id=s, treatment_a=a, treatment_b=b) for s, a, b in rows]


@pytest.fixture
def triangle_comparisons() -> List[TreatmentComparison]:
    """A-B, B-C, A-C from three two-arm studies (closed loop)."""
    return make_comparisons(("S1", "A", "B"), ("S2", "B", "C"), ("S3", "A", "C"))


@pytest.fixture
def star_comparisons() -> List[TreatmentComparison]:
    """Hub A compared with each of B, C, D in separate studies."""
    return make_comparisons(("S1", "A", "B"), ("S2", "A", "C"), ("S3", "A", "D"))


@pytest.fixture
def disconnected_comparisons() -> List[TreatmentComparison]:
    """Two islands: A-B and C-D."""
    return make_comparisons(("S1", "A", "B"), ("S2", "C", "D"))


@pytest.fixture
def well_connected_comparisons() -> List[TreatmentComparison]:
    """Four treatments, every pair compared by two studies."""
    pairs = [("A", "B"), ("A", "C"), ("A", "D"), ("B", "C"), ("B", "D"), ("C", "D")]
    rows = []
    for i, (a, b) in enumerate(pairs):
        rows.append((f"S{2 * i + 1}", a, b))
        rows.append((f"S{2 * i + 2}", b, a))
    return make_comparisons(*rows)


# =============================================================================
# Effect Fixtures
# =============================================================================

@pytest.fixture
def clear_winner_effects() -> List[TreatmentEffect]:
    return [
        TreatmentEffect("Drug A", 10.0, 0.01),
        TreatmentEffect("Placebo", 0.0, 0.01, is_reference=True),
    ]


@pytest.fixture
def overlapping_effects() -> List[TreatmentEffect]:
    return [
        TreatmentEffect("Placebo", 0.0, 0.0, is_reference=True),
        TreatmentEffect("Drug A", 0.4, 0.2),
        TreatmentEffect("Drug B", 0.5, 0.25),
        TreatmentEffect("Drug C", -0.1, 0.3),
    ]


@pytest.fixture
def indistinguishable_effects() -> List[TreatmentEffect]:
    return [
        TreatmentEffect("A", 0.0, 1.0),
        TreatmentEffect("B", 0.0, 1.0),
        TreatmentEffect("C", 0.0, 1.0),
    ]
