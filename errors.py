"""
Error taxonomy shared by the generators, the stores and the API routes.
"""
from enum import Enum
from typing import Optional


class GymFlowError(Exception):
    """Base class for engine errors."""


class InvalidInput(GymFlowError):
    """User supplied values that cannot be processed (e.g. non-positive height)."""


class FailureReason(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    UNPARSABLE_BODY = "unparsable_body"
    SCHEMA_MISMATCH = "schema_mismatch"


class DelegationFailure(GymFlowError):
    """The generation service could not produce a valid result.

    Always recovered by the caller through its local fallback.
    """

    def __init__(self, reason: FailureReason, detail: Optional[str] = None):
        self.reason = reason
        self.detail = detail
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)


class PersistenceFailure(GymFlowError):
    """Saving, loading or deleting a stored record failed."""
