"""
Display helpers for a softening outcome: LSI status and the before/after chart.

These only reformat engine results; no chemistry is evaluated here.
"""

from typing import Dict, List

from utils.constants import LSI_CORROSIVE_LIMIT, LSI_SCALING_LIMIT
from .schemas import ChartPoint, RawWaterSample, SofteningOutcome


def classify_lsi(lsi: float) -> str:
    """Short status label shown next to the LSI value."""
    if lsi > LSI_SCALING_LIMIT:
        return "Scaling"
    if lsi < LSI_CORROSIVE_LIMIT:
        return "Corrosive"
    return "Stable"


def interpret_lsi(lsi: float) -> Dict[str, str]:
    """
    Interpretation and recommended action for a Langelier Saturation Index.

    LSI Interpretation Guide:
        > +2.0: Severe scaling
        +0.5 to +2.0: Moderate scaling
        0.0 to +0.5: Mild scaling
        -0.5 to 0.0: Near equilibrium
        -2.0 to -0.5: Corrosive
        < -2.0: Severely corrosive
    """
    if lsi > 2.0:
        interpretation = "Severe scaling tendency"
        action = "Recarbonate or acidify before distribution. Heavy CaCO3 deposition expected."
    elif lsi > 0.5:
        interpretation = "Moderate scaling tendency"
        action = "Recarbonation recommended to lower pH. Scale formation likely on filters and mains."
    elif lsi > 0.0:
        interpretation = "Mild scaling tendency"
        action = "Monitor filter media and distribution. Minor scale formation possible."
    elif lsi > -0.5:
        interpretation = "Near equilibrium (balanced)"
        action = "No action required. Water is well-balanced."
    elif lsi > -2.0:
        interpretation = "Corrosive tendency"
        action = "Raise pH or alkalinity, or dose a corrosion inhibitor."
    else:
        interpretation = "Severely corrosive"
        action = "Immediate stabilization required. Aggressive water will attack metal and cement linings."
    return {"interpretation": interpretation, "action_required": action}


def build_chart_series(sample: RawWaterSample, outcome: SofteningOutcome) -> List[ChartPoint]:
    """Raw vs softened bars in mg/L as CaCO3."""
    return [
        ChartPoint(parameter="Calcium", raw=sample.raw_calcium_eq, softened=outcome.finished_calcium_mg_l),
        ChartPoint(parameter="Magnesium", raw=sample.raw_magnesium_eq, softened=outcome.finished_magnesium_mg_l),
        ChartPoint(parameter="Hardness", raw=outcome.initial_hardness_mg_l, softened=outcome.finished_hardness_mg_l),
        ChartPoint(parameter="Alkalinity", raw=sample.alkalinity_mg_l, softened=outcome.finished_alkalinity_mg_l),
    ]
