"""Closed value sets shared by the ORM, the API schemas and the client."""
from enum import Enum


class PropertyType(str, Enum):
    PLOT = "Plot"
    SHED = "Shed"
    RETAIL_STORE = "Retail Store"
    # Kept distinct from RETAIL_STORE until the catalogue owners confirm it
    PIOTT_STORE = "Piott Store"
    APARTMENT = "Apartment"
    HOUSE = "House"
    VILLA = "Villa"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    LAND = "Land"
    COMMERCIAL = "Commercial"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
