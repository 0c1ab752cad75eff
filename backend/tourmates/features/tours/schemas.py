"""
Tour schemas.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TourCreate(BaseModel):
    """Create tour request. The creator comes from the acting user."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    start_location: str = Field(min_length=1, max_length=255)
    end_location: str = Field(min_length=1, max_length=255)
    start_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    start_longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    end_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    end_longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    start_date: datetime
    end_date: datetime
    max_participants: int = Field(gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """Columns store naive UTC."""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TourResponse(BaseModel):
    """Tour response."""

    id: str
    title: str
    description: Optional[str]
    start_location: str
    end_location: str
    start_latitude: Optional[float]
    start_longitude: Optional[float]
    end_latitude: Optional[float]
    end_longitude: Optional[float]
    start_date: datetime
    end_date: datetime
    max_participants: int
    image_url: Optional[str]
    created_by_id: str
    is_active: bool
    is_closed: bool
    created_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True, frozen=True)
