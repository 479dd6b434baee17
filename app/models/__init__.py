"""SQLAlchemy models for the Property Dashboard."""
from app.models.enums import PropertyType
from app.models.property_model import Property

__all__ = [
    "Property",
    "PropertyType",
]
