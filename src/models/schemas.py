from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional



class FeedbackRecord(BaseModel):
    """Customer feedback record, already scoped to one organization."""
    model_config = ConfigDict(frozen=True)

    text: str
    rating: int
    created_at: datetime
    organization_id: str
    feedback_id: Optional[str] = None


class OrganizationUser(BaseModel):
    """User account resolved to the organization it belongs to."""
    user_id: str
    organization_id: str
    email: Optional[str] = None


class AnalyticsSummary(BaseModel):
    """Response shape of the summary view."""
    average_rating: float = Field(..., ge=0.0)
    feedback_count: int = Field(..., ge=0)
    average_text_length: float = Field(..., ge=0.0)
