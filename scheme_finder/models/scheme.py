"""
Pydantic models for schemes and their eligibility criteria
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field, field_validator, ConfigDict
from bson import ObjectId

from .base import CamelModel, get_current_utc_time


SocialCategory = Literal["General", "SC", "ST", "OBC", "EWS"]
CriteriaGender = Literal["Male", "Female", "Other", "Any"]
SchemeCategory = Literal[
    "Education", "Healthcare", "Employment", "Housing", "Agriculture",
    "Women", "Senior Citizens", "Disability", "Financial", "Other"
]
SchemeStatus = Literal["Active", "Inactive"]

SOCIAL_CATEGORIES = ["General", "SC", "ST", "OBC", "EWS"]


class EligibilityCriteria(CamelModel):
    """Eligibility constraints attached to a scheme; every field is optional"""
    min_age: Optional[int] = Field(None, ge=0, description="Minimum age in years")
    max_age: Optional[int] = Field(None, ge=0, description="Maximum age in years")
    min_income: Optional[float] = Field(None, ge=0, description="Minimum annual income")
    max_income: Optional[float] = Field(None, ge=0, description="Maximum annual income")
    gender: Optional[CriteriaGender] = Field(None, description="Required gender, 'Any' for no constraint")
    categories: List[SocialCategory] = Field(default_factory=list, description="Allowed social categories")
    states: List[str] = Field(default_factory=list, description="States where the scheme is available")
    occupations: List[str] = Field(default_factory=list, description="Allowed occupations")
    family_size: Optional[int] = Field(None, ge=1, description="Maximum family size")
    # Informational only, never evaluated
    education: Optional[str] = None
    disability: Optional[bool] = None
    other_criteria: Optional[str] = None

    @field_validator('family_size', mode='before')
    @classmethod
    def zero_family_size_is_unset(cls, v):
        # Legacy documents store 0 for "no limit"
        if v == 0:
            return None
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "minAge": 18,
                "maxIncome": 300000,
                "gender": "Any",
                "categories": ["EWS", "General"],
                "states": [],
                "occupations": [],
                "familySize": 6
            }
        }
    )


class ContactInfo(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class SchemeBase(CamelModel):
    """Fields shared by stored schemes and create requests"""
    name: str = Field(..., min_length=1, description="Unique scheme name")
    description: str = Field(..., min_length=1, description="What the scheme offers")
    category: SchemeCategory = Field(..., description="Domain tag of the scheme")
    ministry: str = Field(..., min_length=1, description="Administering ministry or department")
    eligibility_criteria: EligibilityCriteria = Field(..., description="Eligibility constraints")
    benefits: List[str] = Field(default_factory=list)
    documents_required: List[str] = Field(default_factory=list)
    application_process: Optional[str] = None
    official_website: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    status: SchemeStatus = Field(default="Active")
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    
    @field_validator('name', 'ministry')
    @classmethod
    def strip_text(cls, v):
        return v.strip()


class SchemeCreate(SchemeBase):
    """Request body for creating a scheme"""
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Pradhan Mantri Awas Yojana (PMAY)",
                "description": "Housing scheme to provide affordable housing to urban and rural poor",
                "category": "Housing",
                "ministry": "Ministry of Housing and Urban Affairs",
                "eligibilityCriteria": {"minAge": 18, "maxIncome": 300000},
                "benefits": ["Interest subsidy on home loans"],
                "documentsRequired": ["Aadhaar Card", "Income Certificate"],
                "status": "Active"
            }
        }
    )


class SchemeUpdate(CamelModel):
    """Partial update; a provided eligibilityCriteria replaces the stored one wholesale"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[SchemeCategory] = None
    ministry: Optional[str] = Field(None, min_length=1)
    eligibility_criteria: Optional[EligibilityCriteria] = None
    benefits: Optional[List[str]] = None
    documents_required: Optional[List[str]] = None
    application_process: Optional[str] = None
    official_website: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    status: Optional[SchemeStatus] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None


class Scheme(SchemeBase):
    """Scheme stored in MongoDB"""
    id: Optional[str] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_at: datetime = Field(default_factory=get_current_utc_time)
    
    @field_validator('id', mode='before')
    @classmethod
    def validate_object_id(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        if v is not None and not ObjectId.is_valid(v):
            raise ValueError("Invalid ObjectId format")
        return v


class SchemeSummary(CamelModel):
    """Scheme reference carried in eligibility payloads"""
    id: str
    name: str
    category: str
    description: Optional[str] = None
    
    @classmethod
    def from_scheme(cls, scheme: Scheme, with_description: bool = False) -> "SchemeSummary":
        return cls(
            id=scheme.id,
            name=scheme.name,
            category=scheme.category,
            description=scheme.description if with_description else None
        )


class SchemeListResponse(CamelModel):
    schemes: List[Scheme]
    total_pages: int
    current_page: int
    total: int
