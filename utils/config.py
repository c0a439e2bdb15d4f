"""
Runtime settings read from the environment.
"""
import os
from typing import Optional

LOG_LEVEL = os.environ.get('SOFTENING_LOG_LEVEL', 'INFO').upper()
LOG_FILE = os.environ.get('SOFTENING_LOG_FILE', 'debug.log')

ADVICE_MODEL = os.environ.get('SOFTENING_ADVICE_MODEL', 'gemini-2.5-pro')
ADVICE_ENDPOINT = os.environ.get(
    'SOFTENING_ADVICE_ENDPOINT',
    'https://generativelanguage.googleapis.com/v1beta/models',
)
ADVICE_TIMEOUT = float(os.environ.get('SOFTENING_ADVICE_TIMEOUT', '60'))
ADVICE_THINKING_BUDGET = int(os.environ.get('SOFTENING_ADVICE_THINKING_BUDGET', '4000'))

HTTP_HOST = os.environ.get('SOFTENING_HTTP_HOST', '0.0.0.0')
HTTP_PORT = int(os.environ.get('SOFTENING_HTTP_PORT', '8000'))


def get_api_key() -> Optional[str]:
    """
    Returns the advice-service API key, or None if unset.

    Read on every call so a key exported after import is still picked up.
    """
    key = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY')
    if key:
        key = key.strip()
    return key or None
