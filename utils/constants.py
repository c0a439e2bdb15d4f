"""
Constants for lime-soda softening calculations.

All hardness and alkalinity balances are carried in mg/L as CaCO3.
"""
from typing import NamedTuple

# Elemental mg/L -> mg/L as CaCO3 (ratio of equivalent weights)
CA_TO_CACO3 = 2.497
MG_TO_CACO3 = 4.118

# Molecular weights (g/mol)
MOLECULAR_WEIGHTS = {
    'CaCO3': 100.08,
    'Ca(OH)2': 74.09,   # Hydrated lime
    'Na2CO3': 105.99,   # Soda ash
    'Mg(OH)2': 58.3,    # Brucite, reported as sludge solids
}

CACO3_MW = MOLECULAR_WEIGHTS['CaCO3']
CAOH2_MW = MOLECULAR_WEIGHTS['Ca(OH)2']
NA2CO3_MW = MOLECULAR_WEIGHTS['Na2CO3']
MGOH2_MW = MOLECULAR_WEIGHTS['Mg(OH)2']

# First dissociation constant of carbonic acid (pK1)
CARBONIC_ACID_PK1 = 6.35

# Practical minimum alkalinity left in lime-softened effluent (mg/L as CaCO3)
MIN_FINISHED_ALKALINITY = 20.0

# Conductivity (uS/cm) -> TDS (mg/L)
TDS_PER_CONDUCTIVITY = 0.65

KELVIN_OFFSET = 273.15

# Modified Langelier correlation coefficients
LSI_BASE = 9.3
LSI_TEMPERATURE_SLOPE = -13.12
LSI_TEMPERATURE_INTERCEPT = 34.55
LSI_CALCIUM_OFFSET = 0.4


class SofteningRegime(NamedTuple):
    """Process set-points for one treatment regime."""
    name: str
    excess_lime: float      # mg/L as CaCO3 added on top of stoichiometric demand
    finished_ph: float


# Magnesium targets below this (mg/L as CaCO3) need excess-lime treatment
EXCESS_LIME_MG_THRESHOLD = 40.0

# Excess lime drives pH to ~10.6 for Mg(OH)2 precipitation; otherwise the
# plant runs at ordinary/split-treatment pH.
EXCESS_LIME_REGIME = SofteningRegime(name='excess_lime', excess_lime=30.0, finished_ph=10.6)
SPLIT_TREATMENT_REGIME = SofteningRegime(name='split_treatment', excess_lime=0.0, finished_ph=9.8)

# LSI status bands shown next to the index
LSI_SCALING_LIMIT = 0.5
LSI_CORROSIVE_LIMIT = -0.5

# Advice generator
ADVICE_KEY_REQUIRED = "ERROR_KEY_REQUIRED"
ADVICE_EMPTY = "No insights generated."
ADVICE_ERROR_PREFIX = "Error generating insights: "
