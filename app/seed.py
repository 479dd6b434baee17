"""Reset the properties collection to a small sample catalogue.

Usage: ``python -m app.seed``
"""
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.formatting import format_price
from app.core.logging import get_logger, setup_logging
from app.database import async_session_factory, engine, init_db
from app.models.enums import PropertyType
from app.services.property_store import PropertyStore

logger = get_logger(__name__)

SEED_PROPERTIES = [
    {
        "name": "Luxury Plot in Pune",
        "type": PropertyType.PLOT,
        "location": "Pune",
        "price": 250000,
        "description": "A large plot of land available for development in prime location.",
        "coordinates": {"lat": 18.5204, "lng": 73.8567},
    },
    {
        "name": "Commercial Shed",
        "type": PropertyType.SHED,
        "location": "Bangalore",
        "price": 75000,
        "description": "A spacious shed with yard & parking available.",
        "coordinates": {"lat": 12.9716, "lng": 77.5946},
    },
    {
        "name": "Prime Retail Space",
        "type": PropertyType.RETAIL_STORE,
        "location": "Hyderabad",
        "price": 150000,
        "description": "A commercial retail space in prime location with high footfall.",
        "coordinates": {"lat": 17.3850, "lng": 78.4867},
    },
    {
        "name": "IT Hub Property",
        "type": PropertyType.PIOTT_STORE,
        "location": "Khemrai",
        "price": 200000,
        "description": "Upcoming plot situated near IT companies with excellent connectivity.",
        "coordinates": {"lat": 19.0760, "lng": 72.8777},
    },
    {
        "name": "Central Plot",
        "type": PropertyType.PLOT,
        "location": "Chennai",
        "price": 300000,
        "description": "Large plot available for development in central area with all amenities.",
        "coordinates": {"lat": 13.0827, "lng": 80.2707},
    },
    {
        "name": "Industrial Shed",
        "type": PropertyType.SHED,
        "location": "Mumbai",
        "price": 90000,
        "description": "Large industrial shed suitable for warehouse or manufacturing.",
        "coordinates": {"lat": 19.0760, "lng": 72.8777},
    },
    {
        "name": "City Center Retail",
        "type": PropertyType.RETAIL_STORE,
        "location": "Kolkata",
        "price": 175000,
        "description": "Commercial retail space for immediate sale in city center.",
        "coordinates": {"lat": 22.5726, "lng": 88.3639},
    },
    {
        "name": "Residential Plot",
        "type": PropertyType.PLOT,
        "location": "Jaipur",
        "price": 180000,
        "description": "Excellent plot for housing colonies, perfect for development.",
        "coordinates": {"lat": 26.9124, "lng": 75.7873},
    },
]


async def seed_properties(session: AsyncSession) -> int:
    """Replace all stored properties with ``SEED_PROPERTIES``."""
    store = PropertyStore(session)
    removed = await store.clear()
    logger.info("Cleared %d existing properties", removed)

    for index, data in enumerate(SEED_PROPERTIES, start=1):
        prop = await store.create(data)
        logger.info("%d. %s - %s", index, prop.name, format_price(prop.price))

    return len(SEED_PROPERTIES)


async def main() -> None:
    setup_logging()
    await init_db()
    try:
        async with async_session_factory() as session:
            total = await seed_properties(session)
            await session.commit()
        logger.info("Seeded %d properties successfully", total)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
