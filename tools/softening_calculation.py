"""
Stoichiometric lime-soda softening engine.

Four stages run strictly in order on one RawWaterSample:

1. speciate                 - Ca/Mg to CaCO3 equivalents, free CO2 estimate
2. calculate_dosage         - lime and soda ash demand
3. project_finished_water   - finished Ca, Mg, hardness, alkalinity, pH, sludge
4. calculate_stability      - Langelier Saturation Index and CCPP

All intermediate balances are in mg/L as CaCO3. Quantities obtained by
subtraction are floored at zero, so unreachable targets give zero demand
rather than negative doses.
"""

import functools
import logging
import math
from typing import NamedTuple

from utils.constants import (
    CACO3_MW,
    CAOH2_MW,
    CARBONIC_ACID_PK1,
    EXCESS_LIME_MG_THRESHOLD,
    EXCESS_LIME_REGIME,
    KELVIN_OFFSET,
    LSI_BASE,
    LSI_CALCIUM_OFFSET,
    LSI_TEMPERATURE_INTERCEPT,
    LSI_TEMPERATURE_SLOPE,
    MGOH2_MW,
    MIN_FINISHED_ALKALINITY,
    NA2CO3_MW,
    SPLIT_TREATMENT_REGIME,
    TDS_PER_CONDUCTIVITY,
    SofteningRegime,
)
from utils.exceptions import ComputationDomainError
from .schemas import RawWaterSample, SofteningOutcome

logger = logging.getLogger(__name__)


class Speciation(NamedTuple):
    raw_calcium_eq: float
    raw_magnesium_eq: float
    raw_hardness: float
    co2_eq: float


class Dosage(NamedTuple):
    regime: SofteningRegime
    carbonate_hardness: float
    calcium_carbonate_hardness: float
    magnesium_carbonate_hardness: float
    magnesium_noncarbonate_removal: float
    lime_demand_eq: float
    soda_ash_demand_eq: float
    lime_dose: float
    soda_ash_dose: float


class Projection(NamedTuple):
    finished_calcium: float
    finished_magnesium: float
    finished_hardness: float
    finished_alkalinity: float
    finished_ph: float
    sludge: float


class Stability(NamedTuple):
    tds: float
    ph_saturation: float
    lsi: float
    ccpp: float


def select_regime(target_magnesium: float) -> SofteningRegime:
    """
    Picks the treatment regime for a magnesium target (mg/L as CaCO3).

    The same entry sets both the excess-lime margin and the finished pH.
    """
    if target_magnesium < EXCESS_LIME_MG_THRESHOLD:
        return EXCESS_LIME_REGIME
    return SPLIT_TREATMENT_REGIME


def speciate(sample: RawWaterSample) -> Speciation:
    raw_ca = sample.raw_calcium_eq
    raw_mg = sample.raw_magnesium_eq
    # [CO2] = [Alk] * 10^(pK1 - pH), valid near neutral pH
    co2_eq = sample.alkalinity_mg_l * math.pow(10, CARBONIC_ACID_PK1 - sample.ph)
    return Speciation(
        raw_calcium_eq=raw_ca,
        raw_magnesium_eq=raw_mg,
        raw_hardness=raw_ca + raw_mg,
        co2_eq=co2_eq,
    )


def calculate_dosage(sample: RawWaterSample, speciation: Speciation) -> Dosage:
    """
    Lime and soda ash demand by stoichiometric balancing.

    Lime demand (as CaCO3) is the sum of:
    - free CO2 (1:1)
    - calcium carbonate hardness (1:1)
    - magnesium carbonate hardness (2:1, Mg ends up as Mg(OH)2)
    - non-carbonate magnesium still above the magnesium target (1:1)
    - the regime's excess lime

    Soda ash covers the hardness removal that alkalinity cannot balance.
    """
    raw_ca = speciation.raw_calcium_eq
    raw_mg = speciation.raw_magnesium_eq
    raw_hardness = speciation.raw_hardness
    alkalinity = sample.alkalinity_mg_l
    target_mg = sample.target_magnesium_mg_l
    regime = select_regime(target_mg)

    carbonate_hardness = min(raw_hardness, alkalinity)
    ca_ch = min(raw_ca, carbonate_hardness)
    mg_ch = max(0.0, carbonate_hardness - ca_ch)

    mg_to_remove = max(0.0, raw_mg - target_mg)
    mg_nch = max(0.0, raw_mg - mg_ch)
    # Inner term may go negative when the target is met within carbonate hardness
    mg_nch_removal = max(0.0, mg_nch - (target_mg - max(0.0, mg_ch - mg_to_remove)))

    lime_demand = speciation.co2_eq + ca_ch + 2 * mg_ch + mg_nch_removal + regime.excess_lime
    lime_dose = lime_demand / CACO3_MW * CAOH2_MW

    soda_ash_demand = max(
        0.0, (raw_hardness - sample.target_calcium_mg_l - target_mg) - alkalinity
    )
    soda_ash_dose = soda_ash_demand / CACO3_MW * NA2CO3_MW

    logger.debug(
        f"Dosage: CH={carbonate_hardness:.2f}, CaCH={ca_ch:.2f}, MgCH={mg_ch:.2f}, "
        f"MgNCH removal={mg_nch_removal:.2f}, lime demand={lime_demand:.2f} as CaCO3, "
        f"soda ash demand={soda_ash_demand:.2f} as CaCO3, regime={regime.name}"
    )

    return Dosage(
        regime=regime,
        carbonate_hardness=carbonate_hardness,
        calcium_carbonate_hardness=ca_ch,
        magnesium_carbonate_hardness=mg_ch,
        magnesium_noncarbonate_removal=mg_nch_removal,
        lime_demand_eq=lime_demand,
        soda_ash_demand_eq=soda_ash_demand,
        lime_dose=lime_dose,
        soda_ash_dose=soda_ash_dose,
    )


def project_finished_water(
    sample: RawWaterSample, speciation: Speciation, dosage: Dosage
) -> Projection:
    """
    Finished water chemistry. The targets are the control variables, so
    finished Ca and Mg equal them exactly.
    """
    finished_ca = sample.target_calcium_mg_l
    finished_mg = sample.target_magnesium_mg_l
    finished_hardness = finished_ca + finished_mg

    hardness_removed = speciation.raw_hardness - finished_hardness
    finished_alk = max(
        MIN_FINISHED_ALKALINITY,
        sample.alkalinity_mg_l + dosage.soda_ash_demand_eq - hardness_removed,
    )

    # CaCO3 removed 1:1, Mg removed reported as Mg(OH)2 mass
    calcium_sludge = max(0.0, speciation.raw_calcium_eq - finished_ca)
    magnesium_sludge = max(0.0, speciation.raw_magnesium_eq - finished_mg) * (MGOH2_MW / CACO3_MW)

    return Projection(
        finished_calcium=finished_ca,
        finished_magnesium=finished_mg,
        finished_hardness=finished_hardness,
        finished_alkalinity=finished_alk,
        finished_ph=dosage.regime.finished_ph,
        sludge=calcium_sludge + magnesium_sludge,
    )


def _log10(quantity: str, value: float) -> float:
    if not (math.isfinite(value) and value > 0):
        raise ComputationDomainError(
            f"Cannot evaluate stability index: {quantity} must be positive, got {value}",
            quantity=quantity,
            value=value,
        )
    return math.log10(value)


def calculate_stability(sample: RawWaterSample, projection: Projection) -> Stability:
    """
    Langelier Saturation Index and CCPP via the modified Langelier correlation.

    Raises:
        ComputationDomainError: If TDS, finished calcium or finished
            alkalinity is not strictly positive.
    """
    tds = sample.conductivity_us_cm * TDS_PER_CONDUCTIVITY
    temperature_k = sample.temperature_celsius + KELVIN_OFFSET

    a = (_log10("tds", tds) - 1) / 10
    b = LSI_TEMPERATURE_SLOPE * math.log10(temperature_k) + LSI_TEMPERATURE_INTERCEPT
    c = _log10("finished_calcium", projection.finished_calcium) - LSI_CALCIUM_OFFSET
    d = _log10("finished_alkalinity", projection.finished_alkalinity)

    ph_saturation = (LSI_BASE + a + b) - (c + d)
    lsi = projection.finished_ph - ph_saturation

    if lsi > 0:
        ccpp = projection.finished_alkalinity * (1 - math.pow(10, -lsi))
    else:
        ccpp = 0.0

    return Stability(tds=tds, ph_saturation=ph_saturation, lsi=lsi, ccpp=ccpp)


def compute(sample: RawWaterSample) -> SofteningOutcome:
    """
    Runs the full softening calculation for one raw water sample.

    Args:
        sample: Raw water analysis and residual hardness targets

    Returns:
        SofteningOutcome with reagent doses, finished water quality,
        sludge production and stability indices

    Raises:
        ComputationDomainError: If a stability-index logarithm is undefined
    """
    speciation = speciate(sample)
    dosage = calculate_dosage(sample, speciation)
    projection = project_finished_water(sample, speciation, dosage)
    stability = calculate_stability(sample, projection)

    return SofteningOutcome(
        lime_dose_mg_l=dosage.lime_dose,
        soda_ash_dose_mg_l=dosage.soda_ash_dose,
        finished_ph=projection.finished_ph,
        finished_calcium_mg_l=projection.finished_calcium,
        finished_magnesium_mg_l=projection.finished_magnesium,
        finished_hardness_mg_l=projection.finished_hardness,
        finished_alkalinity_mg_l=projection.finished_alkalinity,
        sludge_mg_l=projection.sludge,
        lsi=stability.lsi,
        ccpp=stability.ccpp,
        initial_hardness_mg_l=speciation.raw_hardness,
    )


@functools.lru_cache(maxsize=256)
def compute_cached(sample: RawWaterSample) -> SofteningOutcome:
    """Memoized compute(); samples are frozen so equal inputs share a result."""
    return compute(sample)
