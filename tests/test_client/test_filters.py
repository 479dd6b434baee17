"""Tests for client-side filtering."""
import uuid
from datetime import datetime, timezone

import pytest

from app.client.filters import filter_properties, matches, results_summary, visible_properties
from app.client.state import DashboardState
from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyRead


def _prop(name: str, location: str, type_: PropertyType) -> PropertyRead:
    now = datetime.now(timezone.utc)
    return PropertyRead(
        id=uuid.uuid4(),
        name=name,
        type=type_,
        location=location,
        price=100000,
        description="Sample listing",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def catalogue():
    return [
        _prop("Commercial Shed", "Bangalore", PropertyType.SHED),
        _prop("Industrial Shed", "Mumbai", PropertyType.SHED),
        _prop("Shed-side Plot", "Pune", PropertyType.PLOT),
        _prop("Warehouse", "Shedgaon", PropertyType.SHED),
        _prop("Prime Retail Space", "Hyderabad", PropertyType.RETAIL_STORE),
    ]


def test_search_and_type_together(catalogue):
    result = filter_properties(catalogue, "shed", PropertyType.SHED)
    assert [p.name for p in result] == ["Commercial Shed", "Industrial Shed", "Warehouse"]


def test_search_matches_name_or_location_case_insensitive(catalogue):
    result = filter_properties(catalogue, "SHED")
    assert len(result) == 4
    assert "Prime Retail Space" not in [p.name for p in result]


def test_empty_criteria_keep_everything(catalogue):
    assert filter_properties(catalogue) == catalogue


def test_type_only(catalogue):
    result = filter_properties(catalogue, filter_type=PropertyType.RETAIL_STORE)
    assert [p.name for p in result] == ["Prime Retail Space"]
    assert filter_properties(catalogue, filter_type=PropertyType.PIOTT_STORE) == []


def test_matches_single_property(catalogue):
    shed = catalogue[0]
    assert matches(shed, "banga")
    assert not matches(shed, "banga", PropertyType.PLOT)


def test_visible_properties_follow_state(catalogue):
    state = DashboardState(properties=tuple(catalogue), search_term="mumbai")
    assert [p.name for p in visible_properties(state)] == ["Industrial Shed"]
    assert results_summary(state) == "Showing 1 of 5 properties"
