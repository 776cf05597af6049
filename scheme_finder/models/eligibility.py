"""
Pydantic models for eligibility requests and results
"""
from typing import List, Optional, Tuple
from pydantic import Field, ConfigDict

from .base import CamelModel
from .scheme import SchemeSummary
from .user import UserProfile


ELIGIBLE_MESSAGE = "You meet all eligibility criteria for this scheme!"


class EligibilityResult(CamelModel):
    """Outcome of evaluating one profile against one criteria set"""
    is_eligible: bool = Field(..., description="True when no criterion is violated")
    reasons: Tuple[str, ...] = Field(..., min_length=1, description="One message per violated criterion, or one affirmative message")
    
    model_config = ConfigDict(frozen=True)


class SchemeEligibility(CamelModel):
    scheme: SchemeSummary
    eligibility: EligibilityResult


class BatchEligibilityResponse(CamelModel):
    results: List[SchemeEligibility] = Field(default_factory=list)


class CheckRequest(CamelModel):
    """Single-scheme check; userData overrides the stored profile"""
    scheme_id: str = Field(..., min_length=1)
    user_data: Optional[UserProfile] = None
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "schemeId": "64f1c2a9e4b0a1b2c3d4e5f6",
                "userData": {"dateOfBirth": "2001-03-02", "income": 80000, "gender": "Female"}
            }
        }
    )


class BatchCheckRequest(CamelModel):
    user_data: Optional[UserProfile] = None
