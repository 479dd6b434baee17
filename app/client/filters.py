"""Client-side filtering of the fetched property list."""
from typing import Iterable, List, Optional

from app.client.state import DashboardState
from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyRead


def matches(prop: PropertyRead, search_term: str = "", filter_type: Optional[PropertyType] = None) -> bool:
    """Case-insensitive substring on name or location, and exact type."""
    term = search_term.lower()
    matches_search = not term or term in prop.name.lower() or term in prop.location.lower()
    matches_type = filter_type is None or prop.type == filter_type
    return matches_search and matches_type


def filter_properties(
    properties: Iterable[PropertyRead],
    search_term: str = "",
    filter_type: Optional[PropertyType] = None,
) -> List[PropertyRead]:
    return [p for p in properties if matches(p, search_term, filter_type)]


def visible_properties(state: DashboardState) -> List[PropertyRead]:
    return filter_properties(state.properties, state.search_term, state.filter_type)


def results_summary(state: DashboardState) -> str:
    return f"Showing {len(visible_properties(state))} of {len(state.properties)} properties"
