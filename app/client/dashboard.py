"""Dashboard controller: drives the state store from user intents.

Mutations never patch the local list. After every successful create,
update or delete the whole list is invalidated and fetched again, so the
client always shows what the server last returned. Fetches are not
cancelled: if two overlap, whichever resolves last wins.
"""
import asyncio
import itertools
from typing import Dict, List, Optional

from app.client.api import APIError, PropertyAPI
from app.client.filters import visible_properties
from app.client.forms import PropertyForm, to_payload, validate_form
from app.client.state import (
    AddFormClosed,
    AddFormOpened,
    DashboardState,
    DashboardStore,
    DeleteCancelled,
    DeleteRequested,
    DetailsClosed,
    DetailsOpened,
    EditFormClosed,
    EditFormOpened,
    FilterTypeChanged,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    Notification,
    NotificationDismissed,
    NotificationKind,
    NotificationShown,
    SearchChanged,
)
from app.config import settings
from app.core.logging import get_logger
from app.models.enums import PropertyType
from app.schemas.property_schema import PropertyRead

logger = get_logger(__name__)


class Dashboard:
    def __init__(
        self,
        api: PropertyAPI,
        store: Optional[DashboardStore] = None,
        notification_timeout: Optional[float] = None,
    ):
        self.api = api
        self.store = store or DashboardStore()
        if notification_timeout is None:
            notification_timeout = settings.notification_timeout
        self.notification_timeout = notification_timeout
        self._notification_ids = itertools.count(1)
        self._timers: Dict[int, asyncio.TimerHandle] = {}

    @property
    def state(self) -> DashboardState:
        return self.store.state

    @property
    def visible(self) -> List[PropertyRead]:
        return visible_properties(self.state)

    async def aclose(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        await self.api.aclose()

    # Notifications

    def notify(self, kind: NotificationKind, message: str) -> Notification:
        """Show a notification that dismisses itself after the timeout."""
        notification = Notification(id=next(self._notification_ids), kind=kind, message=message)
        self.store.dispatch(NotificationShown(notification))
        loop = asyncio.get_running_loop()
        self._timers[notification.id] = loop.call_later(
            self.notification_timeout, self._expire, notification.id
        )
        return notification

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        self.store.dispatch(NotificationDismissed(notification_id))

    def dismiss_notification(self) -> None:
        current = self.state.notification
        if current is None:
            return
        handle = self._timers.pop(current.id, None)
        if handle is not None:
            handle.cancel()
        self.store.dispatch(NotificationDismissed(current.id))

    # Loading

    async def load(self) -> None:
        """Fetch the full list, replacing whatever is held locally."""
        self.store.dispatch(LoadStarted())
        try:
            properties = await self.api.list()
        except APIError as exc:
            logger.error("Error loading properties: %s", exc.message)
            self.store.dispatch(LoadFailed(exc.message))
            self.notify(NotificationKind.ERROR, "Failed to load properties")
            return
        self.store.dispatch(LoadSucceeded(properties))

    async def invalidate(self) -> None:
        """Drop the local list and fetch it again after a mutation."""
        await self.load()

    # Filtering

    def search(self, term: str) -> None:
        self.store.dispatch(SearchChanged(term))

    def filter_by_type(self, property_type: Optional[PropertyType]) -> None:
        self.store.dispatch(FilterTypeChanged(property_type))

    # Modals

    def open_add_form(self) -> None:
        self.store.dispatch(AddFormOpened())

    def close_add_form(self) -> None:
        self.store.dispatch(AddFormClosed())

    def open_edit_form(self, prop: PropertyRead) -> None:
        self.store.dispatch(EditFormOpened(prop))

    def close_edit_form(self) -> None:
        self.store.dispatch(EditFormClosed())

    def open_details(self, prop: PropertyRead) -> None:
        self.store.dispatch(DetailsOpened(prop))

    def close_details(self) -> None:
        self.store.dispatch(DetailsClosed())

    def request_delete(self, prop: PropertyRead) -> None:
        self.store.dispatch(DeleteRequested(prop))

    def cancel_delete(self) -> None:
        self.store.dispatch(DeleteCancelled())

    # Mutations

    async def submit_add(self, form: PropertyForm) -> Dict[str, str]:
        """Create a property from ``form``.

        Returns the form errors; an API failure is reported under ``submit``
        and leaves the form open.
        """
        errors = validate_form(form)
        if errors:
            return errors
        try:
            await self.api.create(to_payload(form))
        except APIError as exc:
            logger.error("Error adding property: %s", exc.message)
            self.notify(NotificationKind.ERROR, "Failed to add property")
            return {"submit": exc.message}
        await self.invalidate()
        self.store.dispatch(AddFormClosed())
        self.notify(NotificationKind.SUCCESS, "Property added successfully!")
        return {}

    async def submit_edit(self, form: PropertyForm) -> Dict[str, str]:
        """Replace the selected property with ``form``; see ``submit_add``."""
        selected = self.state.selected
        if selected is None:
            raise RuntimeError("No property selected for editing")
        errors = validate_form(form)
        if errors:
            return errors
        try:
            await self.api.update(selected.id, to_payload(form))
        except APIError as exc:
            logger.error("Error updating property %s: %s", selected.id, exc.message)
            self.notify(NotificationKind.ERROR, "Failed to update property")
            return {"submit": exc.message}
        await self.invalidate()
        self.store.dispatch(EditFormClosed())
        self.notify(NotificationKind.SUCCESS, "Property updated successfully!")
        return {}

    async def confirm_delete(self) -> bool:
        """Delete the property awaiting confirmation. Returns True on success."""
        candidate = self.state.delete_candidate
        if candidate is None:
            raise RuntimeError("No property awaiting delete confirmation")
        try:
            await self.api.delete(candidate.id)
        except APIError as exc:
            logger.error("Error deleting property %s: %s", candidate.id, exc.message)
            self.notify(NotificationKind.ERROR, "Failed to delete property")
            return False
        await self.invalidate()
        self.store.dispatch(DeleteCancelled())
        self.notify(NotificationKind.SUCCESS, "Property deleted successfully!")
        return True
