"""
Custom exceptions for the Lime Softening MCP Server.

The softening engine itself is fail-soft: out-of-range intermediates are
clamped to zero. Everything that cannot be clamped raises a typed exception:

Exception Hierarchy:
    SofteningError (base)
    ├── InputValidationError
    ├── ComputationDomainError
    └── AdviceError
        ├── CredentialMissingError
        └── GenerationFailedError
"""

from typing import Any, Dict, List, Optional


class SofteningError(Exception):
    """Base exception for all softening calculator errors."""
    pass


class InputValidationError(SofteningError):
    """Invalid input data provided to a tool.

    Raised when:
    - Field values are out of valid range (negative concentrations, etc.)
    - Field types are incorrect

    Attributes:
        invalid_fields: Field names that failed validation
    """
    def __init__(self, message: str, invalid_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.invalid_fields = invalid_fields or []


class ComputationDomainError(SofteningError):
    """A stability-index logarithm received a non-positive argument.

    Raised by the stability stage when finished calcium, finished alkalinity
    or TDS is zero, negative or non-finite.

    Attributes:
        quantity: Name of the offending quantity
        value: The value that was outside the log10 domain
    """
    def __init__(self, message: str, quantity: Optional[str] = None, value: Optional[float] = None):
        super().__init__(message)
        self.quantity = quantity
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured error reporting."""
        return {
            "error_type": "computation_domain_error",
            "quantity": self.quantity,
            "value": self.value,
            "message": str(self),
        }


# =============================================================================
# Advice Errors
# =============================================================================

class AdviceError(SofteningError):
    """Base class for advice-generation failures."""
    pass


class CredentialMissingError(AdviceError):
    """No usable API key for the advice service.

    Raised when the key is absent or the service rejected it. The caller
    should prompt for re-configuration.
    """
    pass


class GenerationFailedError(AdviceError):
    """The advice service call failed for any reason other than the credential.

    Attributes:
        status_code: HTTP status returned by the service, if any
    """
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
