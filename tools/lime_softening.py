"""
MCP tools for lime-soda softening design.

- calculate_lime_soda_softening: doses, finished water, sludge, LSI/CCPP
- generate_softening_advice: operational commentary on the same result
"""

import asyncio
import logging
from typing import Any, Dict

from pydantic import ValidationError

from utils.constants import ADVICE_KEY_REQUIRED
from utils.exceptions import InputValidationError
from .schemas import (
    CalculateLimeSodaSofteningOutput,
    GenerateSofteningAdviceOutput,
    RawWaterSample,
)
from .softening_advice import get_softening_advice
from .softening_calculation import compute_cached, select_regime
from .softening_report import build_chart_series, classify_lsi, interpret_lsi

logger = logging.getLogger(__name__)


def _parse_sample(input_data: Dict[str, Any]) -> RawWaterSample:
    if not isinstance(input_data, dict):
        raise InputValidationError("input_data must be a dictionary of raw water parameters")
    try:
        return RawWaterSample(**input_data)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        logger.error(f"Input validation error: {e}")
        raise InputValidationError(f"Input validation error: {e}", invalid_fields=fields) from e


async def calculate_lime_soda_softening(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Calculates lime and soda ash doses, finished water quality, sludge
    production and stability indices for lime-soda softening.

    Args:
        input_data: Dictionary containing (all optional, defaults shown):
            - ph: Raw water pH (7.8)
            - calcium_mg_l: Calcium as Ca (80)
            - magnesium_mg_l: Magnesium as Mg (25)
            - alkalinity_mg_l: Alkalinity as CaCO3 (220)
            - conductivity_us_cm: Conductivity (650)
            - sulphate_mg_l: Sulphate (45)
            - temperature_celsius: Temperature (20)
            - target_calcium_mg_l: Residual Ca as CaCO3 (40)
            - target_magnesium_mg_l: Residual Mg as CaCO3 (10)

    Returns:
        Dictionary with doses, finished water, sludge, lsi, ccpp, regime,
        lsi_status, lsi_interpretation and chart_series

    Raises:
        InputValidationError: If a parameter is missing a valid value
        ComputationDomainError: If TDS, finished calcium or finished alkalinity
            is zero, negative or non-finite
    """
    logger.info("Running calculate_lime_soda_softening tool...")
    sample = _parse_sample(input_data)

    outcome = compute_cached(sample)
    output_model = CalculateLimeSodaSofteningOutput(
        **outcome.model_dump(),
        regime=select_regime(sample.target_magnesium_mg_l).name,
        lsi_status=classify_lsi(outcome.lsi),
        lsi_interpretation=interpret_lsi(outcome.lsi),
        chart_series=build_chart_series(sample, outcome),
    )

    logger.info(
        f"calculate_lime_soda_softening finished: lime={outcome.lime_dose_mg_l:.1f} mg/L, "
        f"soda ash={outcome.soda_ash_dose_mg_l:.1f} mg/L, LSI={outcome.lsi:.2f}"
    )
    return output_model.model_dump()


async def generate_softening_advice(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Generates operational advice for a lime-soda softening design.

    Takes the same raw water parameters as calculate_lime_soda_softening.
    Requires GEMINI_API_KEY (or API_KEY) in the server environment.

    Returns:
        Dictionary containing:
        - advice: Three bullet points, or an error description
        - key_required: True when the API key is missing or was rejected
    """
    logger.info("Running generate_softening_advice tool...")
    sample = _parse_sample(input_data)
    outcome = compute_cached(sample)

    # requests is blocking
    advice = await asyncio.to_thread(get_softening_advice, sample, outcome)

    output_model = GenerateSofteningAdviceOutput(
        advice=advice,
        key_required=advice == ADVICE_KEY_REQUIRED,
    )
    logger.info("generate_softening_advice tool finished.")
    return output_model.model_dump()
