"""
Models package for the Government Scheme Finder
"""

from .scheme import (
    Scheme,
    SchemeCreate,
    SchemeUpdate,
    SchemeSummary,
    SchemeListResponse,
    EligibilityCriteria,
    ContactInfo
)

from .user import (
    Address,
    UserProfile,
    HistoryEntry,
    HistoryItem,
    HistoryResponse
)

from .eligibility import (
    ELIGIBLE_MESSAGE,
    EligibilityResult,
    SchemeEligibility,
    BatchEligibilityResponse,
    CheckRequest,
    BatchCheckRequest
)

__all__ = [
    # Scheme models
    "Scheme",
    "SchemeCreate",
    "SchemeUpdate",
    "SchemeSummary",
    "SchemeListResponse",
    "EligibilityCriteria",
    "ContactInfo",
    
    # User models
    "Address",
    "UserProfile",
    "HistoryEntry",
    "HistoryItem",
    "HistoryResponse",
    
    # Eligibility models
    "ELIGIBLE_MESSAGE",
    "EligibilityResult",
    "SchemeEligibility",
    "BatchEligibilityResponse",
    "CheckRequest",
    "BatchCheckRequest"
]
