"""Tests for the property record store."""
import asyncio
import logging
import uuid

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyFilter
from app.seed import SEED_PROPERTIES, seed_properties
from app.services.property_store import PropertyStore
from tests.conftest import make_property_payload


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(store: PropertyStore):
    prop = await store.create(make_property_payload())

    assert isinstance(prop.id, uuid.UUID)
    assert prop.created_at is not None
    assert prop.updated_at is not None
    assert prop.type is PropertyType.PLOT
    assert prop.coordinates == {"lat": 18.5204, "lng": 73.8567}


@pytest.mark.asyncio
async def test_create_reports_every_missing_field(store: PropertyStore):
    with pytest.raises(ValidationError) as exc_info:
        await store.create({"name": "Lonely field"})

    assert set(exc_info.value.detail) == {"type", "location", "price", "description"}
    assert "Please add a price" in exc_info.value.message
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_create_rejects_unknown_type(store: PropertyStore):
    with pytest.raises(ValidationError) as exc_info:
        await store.create(make_property_payload(type="Castle"))
    assert exc_info.value.detail == ["type"]


@pytest.mark.asyncio
async def test_get_round_trip(store: PropertyStore):
    payload = make_property_payload()
    del payload["image"]
    created = await store.create(payload)

    fetched = await store.get(str(created.id))

    assert fetched.id == created.id
    assert fetched.name == payload["name"]
    assert fetched.price == payload["price"]
    assert fetched.image.startswith("https://images.unsplash.com/")


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["", "123", "zzzz-not-a-uuid", str(uuid.uuid4())])
async def test_get_missing_or_malformed(store: PropertyStore, bad_id):
    with pytest.raises(NotFoundError):
        await store.get(bad_id)


@pytest.mark.asyncio
async def test_list_filters(store: PropertyStore):
    await store.create(make_property_payload(name="Luxury Plot in Pune", location="Pune", price=250000))
    await store.create(make_property_payload(name="Commercial Shed", type="Shed", location="Bangalore", price=75000))
    await store.create(make_property_payload(name="Pune Warehouse", type="Shed", location="Hadapsar", price=90000))

    everything = await store.list()
    assert [p.name for p in everything] == ["Pune Warehouse", "Commercial Shed", "Luxury Plot in Pune"]

    sheds = await store.list(PropertyFilter(type=PropertyType.SHED))
    assert {p.name for p in sheds} == {"Commercial Shed", "Pune Warehouse"}

    pune = await store.list(PropertyFilter(search="PUNE"))
    assert {p.name for p in pune} == {"Luxury Plot in Pune", "Pune Warehouse"}

    cheap_sheds = await store.list(PropertyFilter(type=PropertyType.SHED, max_price=80000))
    assert [p.name for p in cheap_sheds] == ["Commercial Shed"]

    assert await store.list(PropertyFilter(min_price=300000)) == []


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(store: PropertyStore):
    await store.create(make_property_payload(name="Plot 100% ready"))
    await store.create(make_property_payload(name="Plot under construction"))

    found = await store.list(PropertyFilter(search="100%"))
    assert [p.name for p in found] == ["Plot 100% ready"]


@pytest.mark.asyncio
async def test_update_replaces_document(store: PropertyStore):
    created = await store.create(make_property_payload())
    created_at = created.created_at

    updated = await store.update(
        created.id,
        make_property_payload(name="Plot with river view", coordinates=None, image=None),
    )

    assert updated.name == "Plot with river view"
    assert updated.coordinates == {"lat": 28.6139, "lng": 77.2090}
    assert updated.image.startswith("https://images.unsplash.com/")
    assert updated.created_at == created_at


@pytest.mark.asyncio
async def test_update_touches_timestamp_even_without_changes(store: PropertyStore):
    prop = await store.create(make_property_payload())
    created_at, first_update = prop.created_at, prop.updated_at
    await asyncio.sleep(0.05)

    prop = await store.update(prop.id, make_property_payload())

    assert prop.created_at == created_at
    assert prop.updated_at > first_update


@pytest.mark.asyncio
async def test_update_missing_field_applies_nothing(store: PropertyStore):
    created = await store.create(make_property_payload())
    payload = make_property_payload(name="Renamed")
    del payload["description"]

    with pytest.raises(ValidationError):
        await store.update(created.id, payload)

    assert (await store.get(created.id)).name == "Luxury Plot in Pune"


@pytest.mark.asyncio
async def test_update_unknown_id(store: PropertyStore):
    with pytest.raises(NotFoundError):
        await store.update(uuid.uuid4(), make_property_payload())


@pytest.mark.asyncio
async def test_delete(store: PropertyStore):
    keep = await store.create(make_property_payload(name="Keep"))
    drop = await store.create(make_property_payload(name="Drop"))

    await store.delete(drop.id)

    assert [p.id for p in await store.list()] == [keep.id]
    with pytest.raises(NotFoundError):
        await store.delete(drop.id)
    assert await store.count() == 1


@pytest.mark.asyncio
async def test_seed_replaces_collection(store: PropertyStore, db_session):
    await store.create(make_property_payload(name="Old listing"))

    total = await seed_properties(db_session)

    assert total == len(SEED_PROPERTIES)
    names = {p.name for p in await store.list()}
    assert "Old listing" not in names
    assert "IT Hub Property" in names
    piott = await store.list(PropertyFilter(type=PropertyType.PIOTT_STORE))
    assert [p.location for p in piott] == ["Khemrai"]


@pytest.mark.asyncio
async def test_seed_logs_formatted_prices(db_session, caplog):
    caplog.set_level(logging.INFO, logger="app.seed")

    await seed_properties(db_session)

    messages = [r.getMessage() for r in caplog.records if r.name == "app.seed"]
    assert "1. Luxury Plot in Pune - ₹2,50,000" in messages
    assert "2. Commercial Shed - ₹75,000" in messages
