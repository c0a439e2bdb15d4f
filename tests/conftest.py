"""
Shared pytest fixtures for the lime softening test suite.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.schemas import RawWaterSample
from tools.softening_calculation import compute_cached


# =============================================================================
# STANDARD WATER FIXTURES
# =============================================================================

@pytest.fixture
def reference_water():
    """Moderately hard groundwater softened with excess lime."""
    return {
        "ph": 7.8,
        "calcium_mg_l": 80,
        "magnesium_mg_l": 25,
        "alkalinity_mg_l": 220,
        "conductivity_us_cm": 650,
        "sulphate_mg_l": 45,
        "temperature_celsius": 20,
        "target_calcium_mg_l": 40,
        "target_magnesium_mg_l": 10,
    }


@pytest.fixture
def reference_sample(reference_water):
    return RawWaterSample(**reference_water)


@pytest.fixture
def high_sulfate_water():
    """Non-carbonate hardness dominated water (soda ash required)."""
    return {
        "ph": 7.2,
        "calcium_mg_l": 200,
        "magnesium_mg_l": 80,
        "alkalinity_mg_l": 120,
        "conductivity_us_cm": 1800,
        "sulphate_mg_l": 250,
        "temperature_celsius": 15,
        "target_calcium_mg_l": 50,
        "target_magnesium_mg_l": 60,
    }


@pytest.fixture
def high_alkalinity_water():
    """All hardness is carbonate hardness."""
    return {
        "ph": 8.0,
        "calcium_mg_l": 40,
        "magnesium_mg_l": 20,
        "alkalinity_mg_l": 300,
        "conductivity_us_cm": 700,
        "sulphate_mg_l": 20,
        "temperature_celsius": 25,
        "target_calcium_mg_l": 35,
        "target_magnesium_mg_l": 10,
    }


@pytest.fixture(autouse=True)
def clear_outcome_cache():
    """Keep memoized results from leaking between tests."""
    compute_cached.cache_clear()
    yield
    compute_cached.cache_clear()
