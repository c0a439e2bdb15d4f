"""
Common schemas for lime-soda softening calculations.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from utils.constants import CA_TO_CACO3, MG_TO_CACO3

# --- Common Base Models ---


class RawWaterSample(BaseModel):
    """Raw water analysis plus the residual hardness the plant should reach."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ph: float = Field(7.8, ge=0, le=14, description="Raw water pH.")
    calcium_mg_l: float = Field(80.0, ge=0, description="Calcium in mg/L as Ca.")
    magnesium_mg_l: float = Field(25.0, ge=0, description="Magnesium in mg/L as Mg.")
    alkalinity_mg_l: float = Field(220.0, ge=0, description="Total alkalinity in mg/L as CaCO3.")
    conductivity_us_cm: float = Field(650.0, ge=0, description="Electrical conductivity in uS/cm.")
    sulphate_mg_l: float = Field(45.0, ge=0, description="Sulphate in mg/L as SO4.")
    temperature_celsius: float = Field(20.0, gt=-273.15, description="Water temperature in Celsius.")
    target_calcium_mg_l: float = Field(
        40.0, ge=0, description="Target residual calcium in mg/L as CaCO3."
    )
    target_magnesium_mg_l: float = Field(
        10.0,
        ge=0,
        description="Target residual magnesium in mg/L as CaCO3. Below 40 selects excess-lime treatment.",
    )

    @property
    def raw_calcium_eq(self) -> float:
        """Raw calcium in mg/L as CaCO3."""
        return self.calcium_mg_l * CA_TO_CACO3

    @property
    def raw_magnesium_eq(self) -> float:
        """Raw magnesium in mg/L as CaCO3."""
        return self.magnesium_mg_l * MG_TO_CACO3


class SofteningOutcome(BaseModel):
    """Reagent doses and projected finished water for one raw water sample."""

    model_config = ConfigDict(frozen=True)

    lime_dose_mg_l: float = Field(..., description="Lime dose in mg/L as Ca(OH)2.")
    soda_ash_dose_mg_l: float = Field(..., description="Soda ash dose in mg/L as Na2CO3.")
    finished_ph: float = Field(..., description="Finished water pH set-point.")
    finished_calcium_mg_l: float = Field(..., description="Finished calcium in mg/L as CaCO3.")
    finished_magnesium_mg_l: float = Field(..., description="Finished magnesium in mg/L as CaCO3.")
    finished_hardness_mg_l: float = Field(..., description="Finished total hardness in mg/L as CaCO3.")
    finished_alkalinity_mg_l: float = Field(..., description="Finished alkalinity in mg/L as CaCO3.")
    sludge_mg_l: float = Field(..., description="Dry sludge solids in mg/L.")
    lsi: float = Field(..., description="Langelier Saturation Index of the finished water.")
    ccpp: float = Field(..., description="Calcium carbonate precipitation potential in mg/L as CaCO3.")
    initial_hardness_mg_l: float = Field(..., description="Raw total hardness in mg/L as CaCO3.")


class ChartPoint(BaseModel):
    """One before/after bar of the softening chart (mg/L as CaCO3)."""

    model_config = ConfigDict(frozen=True)

    parameter: str
    raw: float
    softened: float


# --- Tool Output Models ---


class CalculateLimeSodaSofteningOutput(SofteningOutcome):
    """Outcome of calculate_lime_soda_softening, with display annotations."""

    regime: str = Field(..., description="Treatment regime: 'excess_lime' or 'split_treatment'.")
    lsi_status: str = Field(..., description="Scaling, Stable or Corrosive.")
    lsi_interpretation: Dict[str, str] = Field(
        default_factory=dict, description="Interpretation and recommended action for the LSI."
    )
    chart_series: List[ChartPoint] = Field(
        default_factory=list, description="Before/after series for Calcium, Magnesium, Hardness, Alkalinity."
    )


class GenerateSofteningAdviceOutput(BaseModel):
    """Free-form operational advice for one softening outcome."""

    advice: str = Field(..., description="Advice text, or a sentinel/error string.")
    key_required: bool = Field(False, description="True when an API key must be configured.")
