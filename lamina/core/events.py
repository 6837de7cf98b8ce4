from __future__ import annotations

import typing as t
from enum import Enum
from typing import Final

__all__ = [
    "EventCategory",
    "EventSeverity",
    "VALIDATION_EVENTS",
    "ENRICHMENT_EVENTS",
    "INTEGRITY_EVENTS",
    "EVENTS",
]


class EventCategory(Enum):
    """Event classification for log organisation."""

    VALIDATION = "validation"
    ENRICHMENT = "enrichment"
    INTEGRITY = "integrity"


class EventSeverity(Enum):
    """Event severity levels for filtering."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


VALIDATION_EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    "arguments_rejected": {
        "category": EventCategory.VALIDATION,
        "severity": EventSeverity.DEBUG,
        "description": "Argument list rejected by the validator",
    },
}

ENRICHMENT_EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    "metadata_merged": {
        "category": EventCategory.ENRICHMENT,
        "severity": EventSeverity.DEBUG,
        "description": "Metadata merged into an existing entry",
    },
    "metadata_appended": {
        "category": EventCategory.ENRICHMENT,
        "severity": EventSeverity.DEBUG,
        "description": "Metadata joined as a new bare entry",
    },
}

INTEGRITY_EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    "cross_package_detected": {
        "category": EventCategory.INTEGRITY,
        "severity": EventSeverity.WARNING,
        "description": "Entry built by another package copy was flagged",
    },
}

EVENTS: Final[dict[str, dict[str, t.Any]]] = {
    **VALIDATION_EVENTS,
    **ENRICHMENT_EVENTS,
    **INTEGRITY_EVENTS,
}
