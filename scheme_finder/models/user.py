"""
Pydantic models for applicant profiles and eligibility history
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import Field, field_validator, ConfigDict

from .base import CamelModel, get_current_utc_time
from .scheme import SocialCategory, SchemeSummary


Gender = Literal["Male", "Female", "Other"]


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = Field(default="India")


class UserProfile(CamelModel):
    """Applicant attributes used for eligibility checking; every field is optional"""
    name: Optional[str] = Field(None, description="Applicant's name")
    phone: Optional[str] = Field(None, description="Contact number")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    age: Optional[int] = Field(None, ge=0, le=150, description="Age in years when no date of birth is given")
    gender: Optional[Gender] = Field(None, description="Applicant's gender")
    category: Optional[SocialCategory] = Field(None, description="Social category")
    address: Optional[Address] = Field(None, description="Residential address")
    income: Optional[float] = Field(0, ge=0, description="Annual household income")
    family_size: Optional[int] = Field(1, ge=1, description="Number of family members")
    occupation: Optional[str] = Field(None, description="Applicant's occupation")
    
    @field_validator('date_of_birth', mode='before')
    @classmethod
    def coerce_datetime(cls, v):
        # MongoDB hands dates back as datetimes
        if isinstance(v, datetime):
            return v.date()
        return v
    
    @property
    def state(self) -> Optional[str]:
        return self.address.state if self.address else None
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Asha Devi",
                "dateOfBirth": "1995-06-15",
                "gender": "Female",
                "category": "OBC",
                "address": {"city": "Ludhiana", "state": "Punjab"},
                "income": 120000,
                "familySize": 4,
                "occupation": "Farmer"
            }
        }
    )


class HistoryEntry(CamelModel):
    """One single-scheme check, appended to the identity's log"""
    scheme_id: str = Field(..., description="Evaluated scheme")
    checked_at: datetime = Field(default_factory=get_current_utc_time)
    is_eligible: bool
    reasons: List[str] = Field(default_factory=list)


class HistoryItem(HistoryEntry):
    """History entry with its scheme summary populated for display"""
    scheme: Optional[SchemeSummary] = None


class HistoryResponse(CamelModel):
    history: List[HistoryItem] = Field(default_factory=list)
