"""Properties API router — CRUD with type / price / text filtering.
/api/properties"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError as PydanticValidationError

from app.api.deps import get_store
from app.api.responses import ok
from app.core.exceptions import ValidationError
from app.schemas.base_schema import ApiResponse
from app.schemas.property_schema import (
    PropertyCreate,
    PropertyFilter,
    PropertyRead,
    PropertyUpdate,
)
from app.services.property_store import PropertyStore

router = APIRouter()


def _build_filter(**kwargs) -> PropertyFilter:
    # An empty ?type= means "all types"
    if not kwargs.get("type"):
        kwargs["type"] = None
    try:
        return PropertyFilter(**kwargs)
    except PydanticValidationError as exc:
        raise ValidationError.from_errors(exc.errors()) from exc


@router.get("", response_model=ApiResponse[List[PropertyRead]], response_model_exclude_none=True)
async def list_properties(
    store: PropertyStore = Depends(get_store),
    property_type: Optional[str] = Query(None, alias="type"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    search: Optional[str] = Query(None),
):
    """List properties, newest first, optionally filtered."""
    filters = _build_filter(type=property_type, min_price=min_price, max_price=max_price, search=search)
    properties = await store.list(filters)
    return ok([PropertyRead.model_validate(p) for p in properties], count=len(properties))


@router.get("/{property_id}", response_model=ApiResponse[PropertyRead], response_model_exclude_none=True)
async def get_property(property_id: str, store: PropertyStore = Depends(get_store)):
    """Get a single property by ID."""
    prop = await store.get(property_id)
    return ok(PropertyRead.model_validate(prop))


@router.post("", response_model=ApiResponse[PropertyRead], response_model_exclude_none=True, status_code=201)
async def create_property(payload: PropertyCreate, store: PropertyStore = Depends(get_store)):
    """Create a new property."""
    prop = await store.create(payload)
    return ok(PropertyRead.model_validate(prop))


@router.put("/{property_id}", response_model=ApiResponse[PropertyRead], response_model_exclude_none=True)
async def update_property(property_id: str, payload: PropertyUpdate, store: PropertyStore = Depends(get_store)):
    """Replace a property with a fully validated payload."""
    prop = await store.update(property_id, payload)
    return ok(PropertyRead.model_validate(prop))


@router.delete("/{property_id}", response_model=ApiResponse[dict], response_model_exclude_none=True)
async def delete_property(property_id: str, store: PropertyStore = Depends(get_store)):
    """Delete a property (hard delete)."""
    await store.delete(property_id)
    return ok({})
