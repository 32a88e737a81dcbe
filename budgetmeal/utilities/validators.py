"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from budgetmeal.domain.UserProfile import UserProfile


class ProfileInput(BaseModel):
    """Schema for the user profile sent with a generation request."""
    monthly_budget: Optional[float] = Field(None, ge=0, le=10_000_000)
    goals: str = Field("", max_length=200)
    dietary_restrictions: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    activity_level: str = Field("", max_length=100)

    @field_validator('goals', 'activity_level')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('dietary_restrictions', 'allergies')
    @classmethod
    def validate_tags(cls, v):
        """Ensure list entries are non-empty strings."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    def to_profile(self) -> UserProfile:
        return UserProfile(
            monthly_budget=self.monthly_budget or 0.0,
            goals=self.goals,
            dietary_restrictions=list(self.dietary_restrictions),
            allergies=list(self.allergies),
            activity_level=self.activity_level,
        )


class NotesInput(BaseModel):
    """Schema for plan notes updates."""
    notes: str = Field("", max_length=5000)
