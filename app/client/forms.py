"""Property form: raw input, client-side validation and payload building.

Validation mirrors the server schema so obviously bad input never costs a
round trip; the server stays authoritative.
"""
import base64
import math
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel

from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyCreate, PropertyRead

ALLOWED_MEDIA_TYPES = ("image/jpeg", "image/jpg", "image/png", "video/mp4")
MAX_MEDIA_BYTES = 10 * 1024 * 1024


class MediaError(ValueError):
    """Uploaded file cannot be used as the property image."""
    pass


class ImageSource(str, Enum):
    URL = "url"
    FILE = "file"


class PropertyForm(BaseModel):
    """Form fields exactly as typed; numbers are still text here."""
    name: str = ""
    type: Optional[PropertyType] = None
    location: str = ""
    price: str = ""
    description: str = ""
    image: str = ""
    image_source: ImageSource = ImageSource.URL
    lat: str = ""
    lng: str = ""

    @classmethod
    def from_property(cls, prop: PropertyRead) -> "PropertyForm":
        """Prefill for the edit dialog."""
        return cls(
            name=prop.name,
            type=prop.type,
            location=prop.location,
            price=_text(prop.price),
            description=prop.description,
            image=prop.image,
            lat=_text(prop.coordinates.lat),
            lng=_text(prop.coordinates.lng),
        )


def _text(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def _number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def encode_media(content: bytes, media_type: str) -> str:
    """Embed an uploaded JPEG/PNG/MP4 file as a ``data:`` URL."""
    if media_type not in ALLOWED_MEDIA_TYPES:
        raise MediaError("Only JPG, PNG, and MP4 files are allowed")
    if len(content) > MAX_MEDIA_BYTES:
        raise MediaError("File size must be less than 10MB")
    return f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}"


def validate_form(form: PropertyForm) -> Dict[str, str]:
    """Return ``{field: message}``; empty when the form can be submitted."""
    errors: Dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = "Property name is required"
    elif len(form.name.strip()) > 100:
        errors["name"] = "Name cannot be more than 100 characters"
    if form.type is None:
        errors["type"] = "Property type is required"
    if not form.location.strip():
        errors["location"] = "Location is required"
    price = _number(form.price.strip())
    if price is None or price <= 0:
        errors["price"] = "Valid price is required"
    if not form.description.strip():
        errors["description"] = "Description is required"
    elif len(form.description) > 500:
        errors["description"] = "Description cannot be more than 500 characters"

    if form.image_source is ImageSource.URL and not form.image.strip():
        errors["image"] = "Image URL is required"
    elif form.image_source is ImageSource.FILE and not form.image:
        errors["file"] = "Please upload an image or video file"

    if form.lat.strip() and form.lng.strip():
        lat, lng = _number(form.lat), _number(form.lng)
        if lat is None or not -90 <= lat <= 90:
            errors["lat"] = "Latitude must be between -90 and 90"
        if lng is None or not -180 <= lng <= 180:
            errors["lng"] = "Longitude must be between -180 and 180"

    return errors


def to_payload(form: PropertyForm) -> PropertyCreate:
    """Convert a validated form into the request payload.

    Coordinates are sent only when both are filled in; otherwise the server
    default applies.
    """
    data = {
        "name": form.name,
        "type": form.type,
        "location": form.location,
        "price": float(form.price),
        "description": form.description,
        "image": form.image.strip(),
    }
    if form.lat.strip() and form.lng.strip():
        data["coordinates"] = {"lat": float(form.lat), "lng": float(form.lng)}
    return PropertyCreate.model_validate(data)
