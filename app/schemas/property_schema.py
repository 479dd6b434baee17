"""Pydantic schemas for Property API requests and responses."""
from datetime import datetime, timezone
from typing import Annotated, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, field_validator

from app.models.enums import PropertyType
from app.models.property_model import DEFAULT_IMAGE, DEFAULT_LAT, DEFAULT_LNG

# Text used when a required field is absent
REQUIRED_MESSAGES = {
    "name": "Please add a property name",
    "type": "Please add a property type",
    "location": "Please add a location",
    "price": "Please add a price",
    "description": "Please add a description",
}

PropertyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Description = Annotated[str, StringConstraints(min_length=1, max_length=500)]


class Coordinates(BaseModel):
    lat: float = Field(DEFAULT_LAT, ge=-90, le=90)
    lng: float = Field(DEFAULT_LNG, ge=-180, le=180)


class PropertyBase(BaseModel):
    """Shared fields for create, update and read."""
    name: PropertyName
    type: PropertyType
    location: Location
    price: float = Field(ge=0, allow_inf_nan=False)
    description: Description
    image: str = DEFAULT_IMAGE
    coordinates: Coordinates = Field(default_factory=Coordinates)

    @field_validator("image", mode="before")
    @classmethod
    def default_image(cls, v):
        return DEFAULT_IMAGE if v is None else v

    @field_validator("coordinates", mode="before")
    @classmethod
    def default_coordinates(cls, v):
        return {} if v is None else v


class PropertyCreate(PropertyBase):
    """Schema for creating a property. Unknown keys are dropped."""
    model_config = ConfigDict(extra="ignore")


class PropertyUpdate(PropertyCreate):
    """Full replacement payload; validated exactly like a creation."""
    pass


class PropertyRead(PropertyBase):
    """Schema for property responses."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updatedAt", "updated_at"),
        serialization_alias="updatedAt",
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite drops the offset on the way back out
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class PropertyFilter(BaseModel):
    """Criteria for listing properties; every field is optional."""
    type: Optional[PropertyType] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    search: Optional[str] = None

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None
