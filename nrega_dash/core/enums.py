from __future__ import annotations

from enum import Enum


class TextAnchor(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


class Segment(str, Enum):
    COMPLETED = "completed"
    ONGOING = "ongoing"


class DetectionState(str, Enum):
    IDLE = "idle"
    DETECTING = "detecting"
    DETECTED_SUPPORTED = "detected_supported"
    DETECTED_UNSUPPORTED = "detected_unsupported"
    FAILED = "failed"


class SelectionState(str, Enum):
    NO_SELECTION = "no_selection"
    DISTRICT_SELECTED = "district_selected"


class MessageKey(str, Enum):
    """Translation keys for the user-facing selection/detection messages."""

    LOCATION_DETECTED = "locationDetected"
    DETECTED_LOCATION = "detectedLocation"
    UNSUPPORTED_LOCATION = "unsupportedLocation"
    GEOLOCATION_UNSUPPORTED = "geolocationUnsupported"
    PERMISSION_DENIED = "permissionDenied"
    DETECTING_ERROR = "detectingError"
    FETCH_ERROR = "fetchError"
    UNKNOWN_ERROR = "unknownError"
