"""Dashboard state container.

State is an immutable ``DashboardState``. It only changes by dispatching an
action through ``reduce``, which returns a new state. ``DashboardStore``
holds the current state and notifies subscribers after every dispatch.

Load status and each modal flag are tracked independently; there is no
combined state machine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ConfigDict

from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyRead


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    kind: NotificationKind
    message: str


class DashboardState(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Last successful fetch
    properties: Tuple[PropertyRead, ...] = ()
    status: LoadStatus = LoadStatus.IDLE
    error: Optional[str] = None

    search_term: str = ""
    filter_type: Optional[PropertyType] = None

    add_form_open: bool = False
    edit_form_open: bool = False
    details_open: bool = False
    selected: Optional[PropertyRead] = None
    # Property awaiting delete confirmation; the dialog is open while set
    delete_candidate: Optional[PropertyRead] = None

    notification: Optional[Notification] = None

    @property
    def confirm_delete_open(self) -> bool:
        return self.delete_candidate is not None


# Actions


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    properties: Sequence[PropertyRead]


@dataclass(frozen=True)
class LoadFailed:
    error: str


@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class FilterTypeChanged:
    property_type: Optional[PropertyType]


@dataclass(frozen=True)
class AddFormOpened:
    pass


@dataclass(frozen=True)
class AddFormClosed:
    pass


@dataclass(frozen=True)
class EditFormOpened:
    property: PropertyRead


@dataclass(frozen=True)
class EditFormClosed:
    pass


@dataclass(frozen=True)
class DetailsOpened:
    property: PropertyRead


@dataclass(frozen=True)
class DetailsClosed:
    pass


@dataclass(frozen=True)
class DeleteRequested:
    property: PropertyRead


@dataclass(frozen=True)
class DeleteCancelled:
    pass


@dataclass(frozen=True)
class NotificationShown:
    notification: Notification


@dataclass(frozen=True)
class NotificationDismissed:
    notification_id: int


Action = object
Reducer = Callable[[DashboardState, Action], DashboardState]

_REDUCERS: Dict[Type, Reducer] = {}


def _on(action_type: Type) -> Callable[[Reducer], Reducer]:
    def register(fn: Reducer) -> Reducer:
        _REDUCERS[action_type] = fn
        return fn
    return register


@_on(LoadStarted)
def _load_started(state, action):
    return state.model_copy(update={"status": LoadStatus.LOADING, "error": None})


@_on(LoadSucceeded)
def _load_succeeded(state, action):
    return state.model_copy(update={"status": LoadStatus.LOADED, "properties": tuple(action.properties)})


@_on(LoadFailed)
def _load_failed(state, action):
    # The previous list stays visible
    return state.model_copy(update={"status": LoadStatus.ERROR, "error": action.error})


@_on(SearchChanged)
def _search_changed(state, action):
    return state.model_copy(update={"search_term": action.term})


@_on(FilterTypeChanged)
def _filter_type_changed(state, action):
    return state.model_copy(update={"filter_type": action.property_type})


@_on(AddFormOpened)
def _add_form_opened(state, action):
    return state.model_copy(update={"add_form_open": True})


@_on(AddFormClosed)
def _add_form_closed(state, action):
    return state.model_copy(update={"add_form_open": False})


@_on(EditFormOpened)
def _edit_form_opened(state, action):
    return state.model_copy(update={"edit_form_open": True, "selected": action.property})


@_on(EditFormClosed)
def _edit_form_closed(state, action):
    return state.model_copy(update={"edit_form_open": False, "selected": None})


@_on(DetailsOpened)
def _details_opened(state, action):
    return state.model_copy(update={"details_open": True, "selected": action.property})


@_on(DetailsClosed)
def _details_closed(state, action):
    return state.model_copy(update={"details_open": False, "selected": None})


@_on(DeleteRequested)
def _delete_requested(state, action):
    return state.model_copy(update={"delete_candidate": action.property})


@_on(DeleteCancelled)
def _delete_cancelled(state, action):
    return state.model_copy(update={"delete_candidate": None})


@_on(NotificationShown)
def _notification_shown(state, action):
    return state.model_copy(update={"notification": action.notification})


@_on(NotificationDismissed)
def _notification_dismissed(state, action):
    # A newer notification may have replaced the one whose timer fired
    if state.notification is None or state.notification.id != action.notification_id:
        return state
    return state.model_copy(update={"notification": None})


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state that results from applying ``action``."""
    try:
        handler = _REDUCERS[type(action)]
    except KeyError:
        raise TypeError(f"Unknown action: {type(action).__name__}") from None
    return handler(state, action)


Listener = Callable[[DashboardState], None]


class DashboardStore:
    """Holds the current state; the only way to change it is ``dispatch``."""

    def __init__(self, initial: Optional[DashboardState] = None):
        self._state = initial or DashboardState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def dispatch(self, action: Action) -> DashboardState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to remove it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
