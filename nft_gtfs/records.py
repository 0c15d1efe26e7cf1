"""Per-record normalization of raw feed routes, trips and stops.

Bridges the feed-loading collaborator (raw string records) and the
output sink (normalized labels, integer stop ids, route colors). Fatal
data errors propagate with the offending record attached as an
exception note so the aborted run names the record to fix.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nft_gtfs.errors import FatalDataError
from nft_gtfs.pipeline import clean_route_long_name, clean_stop_name, clean_trip_headsign
from nft_gtfs.route_colors import route_color
from nft_gtfs.stop_ids import clean_stop_code, derive_stop_id

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Raw records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawRoute:
    """Route fields as read from routes.txt."""

    short_name: str
    long_name: str


@dataclass(frozen=True, slots=True)
class RawTrip:
    """Trip fields as read from trips.txt."""

    headsign: str


@dataclass(frozen=True, slots=True)
class RawStop:
    """Stop fields as read from stops.txt.

    Attributes:
        code: GTFS stop_code; empty or "0" when the agency has none.
        id: GTFS stop_id, used when the code is unusable.
        name: GTFS stop_name.
    """

    code: str
    id: str
    name: str


# ---------------------------------------------------------------------------
# Normalized records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NormalizedRoute:
    short_name: str
    long_name: str
    color: str


@dataclass(frozen=True, slots=True)
class NormalizedTrip:
    headsign: str


@dataclass(frozen=True, slots=True)
class NormalizedStop:
    """Stop ready for the output sink.

    Attributes:
        stop_id: Numeric id derived from the stop code.
        code: Public stop code ("" when the feed only has the placeholder).
        name: Normalized stop name.
    """

    stop_id: int
    code: str
    name: str


def normalize_route(route: RawRoute) -> NormalizedRoute:
    """Clean the long name and attach the pre-assigned color.

    Raises:
        UnknownRouteColorError: If the short name has no color.
    """
    try:
        color = route_color(route.short_name)
    except FatalDataError as exc:
        logger.error("Cannot normalize route %r", route)
        exc.add_note(f"route: {route!r}")
        raise
    return NormalizedRoute(
        short_name=route.short_name,
        long_name=clean_route_long_name(route.long_name),
        color=color,
    )


def normalize_trip(trip: RawTrip) -> NormalizedTrip:
    return NormalizedTrip(headsign=clean_trip_headsign(trip.headsign))


def normalize_stop(stop: RawStop) -> NormalizedStop:
    """Derive the stop id and clean the public code and name.

    Raises:
        UnknownStopCodeError: If no stop id can be derived.
    """
    try:
        stop_id = derive_stop_id(stop.code, stop.id)
    except FatalDataError as exc:
        logger.error("Cannot normalize stop %r", stop)
        exc.add_note(f"stop: {stop!r}")
        raise
    return NormalizedStop(
        stop_id=stop_id,
        code=clean_stop_code(stop.code),
        name=clean_stop_name(stop.name),
    )
