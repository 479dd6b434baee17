"""Record store for Property documents.

Wraps an ``AsyncSession`` and is the only place that queries the
``properties`` table. Every mutation is validated against the same schema
before anything is written, so an invalid payload never reaches the
database. Writes are flushed, not committed; the caller owns the
transaction (see ``app.api.deps.get_db``).
"""
import uuid
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.property_model import Property, utcnow
from app.schemas.property_schema import (
    REQUIRED_MESSAGES,
    PropertyCreate,
    PropertyFilter,
    PropertyUpdate,
)

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", PropertyCreate, PropertyUpdate)
PropertyId = Union[str, uuid.UUID]


def _validate(data: Union[SchemaT, Mapping[str, Any]], schema: Type[SchemaT]) -> SchemaT:
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError.from_errors(exc.errors(), REQUIRED_MESSAGES) from exc


def _parse_id(property_id: PropertyId) -> uuid.UUID:
    """Malformed ids are reported as missing, not as bad input."""
    if isinstance(property_id, uuid.UUID):
        return property_id
    try:
        return uuid.UUID(str(property_id))
    except ValueError:
        raise NotFoundError("Property not found", detail=str(property_id)) from None


def _apply_filters(query, filters: PropertyFilter):
    """Apply the optional type / price range / text criteria to a query."""
    conditions = []

    if filters.type is not None:
        conditions.append(Property.type == filters.type)
    if filters.min_price is not None:
        conditions.append(Property.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Property.price <= filters.max_price)
    if filters.search:
        conditions.append(
            or_(
                Property.name.icontains(filters.search, autoescape=True),
                Property.location.icontains(filters.search, autoescape=True),
            )
        )

    if conditions:
        query = query.where(and_(*conditions))
    return query


class PropertyStore:
    """CRUD and search over the property collection."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find(self, property_id: PropertyId) -> Property:
        pk = _parse_id(property_id)
        prop = (await self.session.execute(select(Property).where(Property.id == pk))).scalar_one_or_none()
        if prop is None:
            raise NotFoundError("Property not found", detail=str(pk))
        return prop

    async def create(self, data: Union[PropertyCreate, Mapping[str, Any]]) -> Property:
        payload = _validate(data, PropertyCreate)
        prop = Property(**payload.model_dump())
        self.session.add(prop)
        await self.session.flush()
        await self.session.refresh(prop)
        logger.info("Property created", extra={"property_id": str(prop.id)})
        return prop

    async def get(self, property_id: PropertyId) -> Property:
        return await self._find(property_id)

    async def update(self, property_id: PropertyId, data: Union[PropertyUpdate, Mapping[str, Any]]) -> Property:
        """Replace every user-editable field. ``created_at`` is kept."""
        prop = await self._find(property_id)
        payload = _validate(data, PropertyUpdate)
        for field, value in payload.model_dump().items():
            setattr(prop, field, value)
        # onupdate only fires when a column changed; a replace always counts
        prop.updated_at = utcnow()
        await self.session.flush()
        await self.session.refresh(prop)
        logger.info("Property updated", extra={"property_id": str(prop.id)})
        return prop

    async def delete(self, property_id: PropertyId) -> None:
        prop = await self._find(property_id)
        await self.session.delete(prop)
        await self.session.flush()
        logger.info("Property deleted", extra={"property_id": str(prop.id)})

    async def clear(self) -> int:
        """Delete every property. Returns the number removed."""
        result = await self.session.execute(delete(Property))
        await self.session.flush()
        return result.rowcount or 0

    async def count(self) -> int:
        return (await self.session.execute(select(func.count(Property.id)))).scalar_one()

    async def list(self, filters: Optional[PropertyFilter] = None) -> List[Property]:
        """Matching properties, newest first."""
        query = _apply_filters(select(Property), filters or PropertyFilter())
        query = query.order_by(Property.created_at.desc())
        return list((await self.session.execute(query)).scalars().all())
