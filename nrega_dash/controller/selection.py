"""District selection and geolocation auto-detection."""

from __future__ import annotations

import asyncio
from typing import Any

from ..core.config import DEFAULT_STATE
from ..core.enums import DetectionState, MessageKey, SelectionState
from ..core.errors import (
    DataFetchError,
    GeolocationError,
    GeolocationUnsupportedError,
    LocationLookupError,
    PermissionDeniedError,
    message_key_for,
)
from ..core.logging_config import get_logger
from ..core.models import GeoLocation, Position
from ..i18n.resolver import LabelResolver
from ..services.api import DataService
from .geolocation import GeolocationProvider, as_position
from .tracking import RequestTracker

logger = get_logger(__name__)

# Used when the district list cannot be fetched
DEFAULT_DISTRICTS = (
    "Patna", "Gaya", "Muzaffarpur", "Darbhanga", "Bhagalpur", "Purnia", "Saran", "Siwan",
    "Chapra", "Begusarai", "Nalanda", "Buxar", "Bhojpur", "Samastipur", "Araria", "Madhubani",
)


def district_display_name(district: str, resolver: LabelResolver) -> str:
    return resolver.resolve_tolerant(f"districts.{district}", district)


class SelectionController:
    """Session state for choosing a district.

    Two independent state machines live here: detection
    (``IDLE -> DETECTING -> DETECTED_SUPPORTED | DETECTED_UNSUPPORTED``, with
    ``FAILED`` for any geolocation failure) and selection
    (``NO_SELECTION -> DISTRICT_SELECTED``). Every failure leaves the
    controller usable; the user can always pick a district by hand or detect
    again.

    Messages are stored as keys plus params and resolved on demand, so a
    locale switch re-renders them in the new language.
    """

    def __init__(
        self,
        service: DataService,
        geolocation: GeolocationProvider | None = None,
        state_name: str = DEFAULT_STATE,
        fallback_districts: tuple[str, ...] = DEFAULT_DISTRICTS,
    ):
        self.service = service
        self.geolocation = geolocation
        self.state_name = state_name
        self.fallback_districts = fallback_districts

        self.districts: list[str] = []
        self.districts_loading = False
        self.selected_district: str | None = None
        self.detection_state = DetectionState.IDLE
        self.detected: GeoLocation | None = None
        self.message_key: MessageKey | None = None
        self.message_params: dict[str, Any] = {}

        self._district_requests = RequestTracker()
        self._detect_requests = RequestTracker()

    @property
    def selection_state(self) -> SelectionState:
        if self.selected_district:
            return SelectionState.DISTRICT_SELECTED
        return SelectionState.NO_SELECTION

    # -- district list -------------------------------------------------

    async def load_districts(self) -> list[str]:
        """Fetch the district list, falling back to the static list on failure."""
        token = self._district_requests.issue()
        self.districts_loading = True
        try:
            districts = await asyncio.to_thread(self.service.list_districts, self.state_name)
        except DataFetchError as e:
            logger.warning(
                "District list unavailable, using static fallback",
                extra={"state": self.state_name, "error": str(e)},
            )
            districts = list(self.fallback_districts)

        if not self._district_requests.is_current(token):
            logger.debug("Discarding stale district list", extra={"state": self.state_name})
            return self.districts

        self.districts = districts
        self.districts_loading = False
        logger.info("Loaded districts", extra={"state": self.state_name, "count": len(districts)})
        return districts

    def filter_districts(self, query: str = "") -> list[str]:
        """Case-insensitive substring match, in list order."""
        needle = query.strip().casefold()
        if not needle:
            return list(self.districts)
        return [d for d in self.districts if needle in d.casefold()]

    def district_options(self, resolver: LabelResolver, query: str = "") -> list[tuple[str, str]]:
        """``(district, localized name)`` pairs for the filtered list."""
        return [(d, district_display_name(d, resolver)) for d in self.filter_districts(query)]

    # -- selection -----------------------------------------------------

    def select_district(self, district: str) -> None:
        """Select a district by hand; a pending detection no longer applies."""
        if self.detection_state is DetectionState.DETECTING:
            self._detect_requests.supersede()
            self.detection_state = DetectionState.IDLE
            self._set_message(None)
        self.selected_district = district
        logger.info("District selected", extra={"district": district})

    def clear_selection(self) -> None:
        self.selected_district = None

    # -- detection -----------------------------------------------------

    async def auto_detect(self) -> DetectionState:
        """Detect the user's district from geolocation plus reverse lookup."""
        token = self._detect_requests.issue()
        if self.geolocation is None:
            self._fail(GeolocationUnsupportedError("No geolocation capability"))
            return self.detection_state

        self.detection_state = DetectionState.DETECTING
        self._set_message(None)

        try:
            position = await self._current_position()
        except GeolocationError as e:
            if self._detect_requests.is_current(token):
                self._fail(e)
            return self.detection_state

        if not self._detect_requests.is_current(token):
            return self.detection_state
        self._set_message(MessageKey.LOCATION_DETECTED)

        try:
            location = await asyncio.to_thread(
                self.service.reverse_geocode, position.latitude, position.longitude
            )
        except DataFetchError as e:
            if self._detect_requests.is_current(token):
                self._fail(LocationLookupError(str(e)))
            return self.detection_state

        if not self._detect_requests.is_current(token):
            logger.debug("Discarding stale location lookup")
            return self.detection_state

        self._apply_location(location)
        return self.detection_state

    def message(self, resolver: LabelResolver) -> str | None:
        """Current user message in the resolver's locale."""
        if self.message_key is None:
            return None
        return resolver.resolve_strict(self.message_key.value, **self.message_params)

    def _apply_location(self, location: GeoLocation) -> None:
        if location.supported:
            self.detected = location
            self.detection_state = DetectionState.DETECTED_SUPPORTED
            if location.district:
                self.selected_district = location.district
            self._set_message(
                MessageKey.DETECTED_LOCATION,
                state=location.state or "",
                district=f", {location.district}" if location.district else "",
            )
        else:
            self.detected = GeoLocation(state=location.state, district=None, supported=False)
            self.detection_state = DetectionState.DETECTED_UNSUPPORTED
            self.selected_district = None
            self._set_message(MessageKey.UNSUPPORTED_LOCATION)
        logger.info(
            "Location detected",
            extra={
                "state": location.state,
                "district": location.district,
                "supported": location.supported,
            },
        )

    async def _current_position(self) -> Position:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Position] = loop.create_future()

        def settle_result(value: Any) -> None:
            if future.done():
                return
            try:
                future.set_result(as_position(value))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                future.set_exception(LocationLookupError(f"Malformed position: {e}"))

        def settle_error(error: Any) -> None:
            if not future.done():
                future.set_exception(PermissionDeniedError(str(error or "Permission denied")))

        # Callbacks may arrive on another thread
        self.geolocation.get_current_position(
            lambda value: loop.call_soon_threadsafe(settle_result, value),
            lambda error=None: loop.call_soon_threadsafe(settle_error, error),
        )
        return await future

    def _fail(self, error: GeolocationError) -> None:
        self.detection_state = DetectionState.FAILED
        self._set_message(message_key_for(error))
        logger.info(
            "Location detection failed",
            extra={"error_type": type(error).__name__, "error": str(error)},
        )

    def _set_message(self, key: MessageKey | None, **params: Any) -> None:
        self.message_key = key
        self.message_params = params
