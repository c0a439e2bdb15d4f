"""
Operational advice for a softening result from a remote language model.

The advice is commentary only. Failures are turned into displayable text and
never abort the calculation that produced the outcome.
"""

import logging
from typing import Any, Optional

import requests

from utils import config
from utils.constants import ADVICE_EMPTY, ADVICE_ERROR_PREFIX, ADVICE_KEY_REQUIRED
from utils.exceptions import CredentialMissingError, GenerationFailedError
from .schemas import RawWaterSample, SofteningOutcome

logger = logging.getLogger(__name__)

# Service messages that mean the key itself is the problem
_KEY_ERROR_MARKERS = ("api key", "entity was not found")


def build_advice_prompt(sample: RawWaterSample, outcome: SofteningOutcome) -> str:
    return f"""
Role: Senior Water Process Engineer
Task: Analyze chemical softening results and provide operational advice.

RAW WATER DATA:
- pH: {sample.ph}
- Calcium (Ca): {sample.calcium_mg_l} mg/L
- Magnesium (Mg): {sample.magnesium_mg_l} mg/L
- Alkalinity: {sample.alkalinity_mg_l} mg/L CaCO3
- Conductivity: {sample.conductivity_us_cm} uS/cm
- Sulphate: {sample.sulphate_mg_l} mg/L

TREATMENT PREDICTIONS:
- Lime Dose: {outcome.lime_dose_mg_l:.1f} mg/L Ca(OH)2
- Soda Ash Dose: {outcome.soda_ash_dose_mg_l:.1f} mg/L Na2CO3
- Sludge Production: {outcome.sludge_mg_l:.1f} mg/L dry solids

FINAL WATER QUALITY:
- pH: {outcome.finished_ph}
- Total Hardness: {outcome.finished_hardness_mg_l:.1f} mg/L CaCO3
- Alkalinity: {outcome.finished_alkalinity_mg_l:.1f} mg/L CaCO3
- Langelier Saturation Index (LSI): {outcome.lsi:.2f}
- CCPP: {outcome.ccpp:.1f} mg/L CaCO3

Instructions:
Provide exactly three professional, high-impact bullet points:
1. A comment on the chemical strategy (efficiency of lime/soda usage).
2. A warning or confirmation regarding scaling/corrosion risks based on LSI/CCPP.
3. A specific recommendation for sludge handling or post-treatment (e.g. recarbonation).
Use precise, expert terminology.
"""


def _is_key_error(status_code: Optional[int], message: str) -> bool:
    if status_code in (401, 403):
        return True
    lowered = message.lower()
    return any(marker in lowered for marker in _KEY_ERROR_MARKERS)


def _error_message(body: Any) -> str:
    # Error bodies are sometimes list-wrapped or carry a bare string
    if isinstance(body, list) and body:
        body = body[0]
    if not isinstance(body, dict):
        return ""
    error = body.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or "")
    if isinstance(error, str):
        return error
    return ""


def _extract_text(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise GenerationFailedError(f"Unexpected response from advice service: {payload!r}")
    try:
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text") or "" for part in parts).strip()
    except (AttributeError, TypeError, KeyError, IndexError) as e:
        raise GenerationFailedError(f"Unexpected response from advice service: {e}") from e


def request_advice(prompt: str, api_key: Optional[str], session: Any = None) -> str:
    """
    Sends the prompt to the generateContent endpoint.

    Args:
        prompt: Prompt text
        api_key: Service credential
        session: Object with a requests-compatible ``post`` (defaults to requests)

    Returns:
        Generated text, possibly empty

    Raises:
        CredentialMissingError: If no key is given or the service rejects it
        GenerationFailedError: On any other transport, HTTP or payload failure
    """
    if not api_key:
        raise CredentialMissingError("API key is not configured")

    http = session or requests
    url = f"{config.ADVICE_ENDPOINT}/{config.ADVICE_MODEL}:generateContent"
    body = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {"thinkingConfig": {"thinkingBudget": config.ADVICE_THINKING_BUDGET}},
    }

    try:
        response = http.post(
            url,
            json=body,
            headers={"x-goog-api-key": api_key},
            timeout=config.ADVICE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        raise GenerationFailedError(str(e)) from e

    if response.status_code >= 400:
        try:
            message = _error_message(response.json())
        except ValueError:
            message = ""
        message = message or f"HTTP {response.status_code}"
        if _is_key_error(response.status_code, message):
            raise CredentialMissingError(message)
        raise GenerationFailedError(message, status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        raise GenerationFailedError(f"Invalid response from advice service: {e}") from e

    return _extract_text(payload)


def get_softening_advice(
    sample: RawWaterSample,
    outcome: SofteningOutcome,
    api_key: Optional[str] = None,
    session: Any = None,
) -> str:
    """
    Generates three bullet points of operational advice.

    Args:
        sample: Raw water that was softened
        outcome: Engine result for that water
        api_key: Credential override (defaults to the configured key)
        session: Optional requests-compatible session

    Returns:
        Advice text, ADVICE_KEY_REQUIRED when a key must be (re)configured,
        or an error-describing string on any other failure
    """
    key = api_key if api_key is not None else config.get_api_key()
    prompt = build_advice_prompt(sample, outcome)

    try:
        text = request_advice(prompt, key, session=session)
    except CredentialMissingError as e:
        logger.warning(f"Advice service credential missing or rejected: {e}")
        return ADVICE_KEY_REQUIRED
    except GenerationFailedError as e:
        logger.error(f"Advice generation failed: {e}")
        return f"{ADVICE_ERROR_PREFIX}{e}"
    except Exception as e:
        logger.exception("Unexpected error in get_softening_advice")
        return f"{ADVICE_ERROR_PREFIX}{e}"

    return text or ADVICE_EMPTY
